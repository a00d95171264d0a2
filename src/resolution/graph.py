"""Dependency graph built for a single resolution request.

Vertices are keyed by mod identifier; the mod and its dependency kind are
stored as node data of a ``networkx.DiGraph``. Successor order follows edge
insertion order, which the traverser relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

import networkx as nx

from mods.models import Mod
from versioning import VersionRange


class DependencyKind(Enum):
    """Role of a vertex relative to the resolution root."""
    ROOT = "root"
    DIRECT_DEPENDENCY = "direct"
    TRANSITIVE = "transitive"


@dataclass(frozen=True, eq=False)
class GraphVertex:
    """A mod in the graph; equal to another vertex iff the identifiers match."""
    mod: Mod
    kind: DependencyKind

    @property
    def identifier(self) -> str:
        return self.mod.identifier

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphVertex):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)


@dataclass(frozen=True)
class GraphEdge:
    """``source`` depends on ``target`` (both identifiers)."""
    source: str
    target: str
    version_range: Optional[VersionRange] = field(default=None, compare=False)


def _key(mod: Union[Mod, GraphVertex, str]) -> str:
    if isinstance(mod, str):
        return mod
    return mod.identifier


class DependencyGraph:
    """Vertices and dependency edges of one resolution request.

    A freshly built graph may contain a cycle; call ``has_cycle`` before
    handing it to anything that walks it.
    """

    def __init__(self):
        self._graph = nx.DiGraph()
        self._root: Optional[str] = None

    def add_vertex(self, mod: Mod, kind: DependencyKind) -> GraphVertex:
        """Add ``mod`` unless present; the kind of the first insertion wins."""
        key = mod.identifier
        if key not in self._graph:
            self._graph.add_node(key, mod=mod, kind=kind)
            if kind == DependencyKind.ROOT and self._root is None:
                self._root = key
        return self.vertex(key)

    def add_dependency(
        self,
        source: Mod,
        target: Mod,
        kind: DependencyKind,
        version_range: Optional[VersionRange] = None,
    ) -> GraphEdge:
        """Add the edge ``source -> target``, creating missing vertices.

        A new source vertex is TRANSITIVE; ``kind`` applies to a new target.
        Repeated edges are collapsed.
        """
        self.add_vertex(source, DependencyKind.TRANSITIVE)
        self.add_vertex(target, kind)
        if not self._graph.has_edge(source.identifier, target.identifier):
            self._graph.add_edge(source.identifier, target.identifier, version_range=version_range)
        return self._edge(source.identifier, target.identifier)

    def vertex(self, mod: Union[Mod, GraphVertex, str]) -> GraphVertex:
        """Return the vertex for a mod or identifier.

        Raises:
            KeyError: If the mod is not part of the graph.
        """
        data = self._graph.nodes[_key(mod)]
        return GraphVertex(data["mod"], data["kind"])

    @property
    def root(self) -> Optional[GraphVertex]:
        return self.vertex(self._root) if self._root is not None else None

    @property
    def vertices(self) -> List[GraphVertex]:
        return [GraphVertex(data["mod"], data["kind"]) for _, data in self._graph.nodes(data=True)]

    @property
    def edges(self) -> List[GraphEdge]:
        return [self._edge(s, t) for s, t in self._graph.edges()]

    def out_edges(self, mod: Union[Mod, GraphVertex, str]) -> List[GraphEdge]:
        key = _key(mod)
        if key not in self._graph:
            return []
        return [self._edge(key, target) for target in self._graph.successors(key)]

    def dependencies_of(self, mod: Union[Mod, GraphVertex, str]) -> List[Mod]:
        """Targets of the mod's outgoing edges in insertion order."""
        key = _key(mod)
        if key not in self._graph:
            return []
        return [self._graph.nodes[target]["mod"] for target in self._graph.successors(key)]

    def has_cycle(self) -> bool:
        return not nx.is_directed_acyclic_graph(self._graph)

    def find_cycle(self) -> List[str]:
        """Identifiers along one cycle, closed with its first vertex; [] if acyclic."""
        try:
            cycle_edges = nx.find_cycle(self._graph, source=self._root)
        except nx.NetworkXNoCycle:
            if self._root is None:
                return []
            try:
                cycle_edges = nx.find_cycle(self._graph)
            except nx.NetworkXNoCycle:
                return []
        path = [source for source, _ in cycle_edges]
        path.append(cycle_edges[-1][1])
        return path

    def _edge(self, source: str, target: str) -> GraphEdge:
        return GraphEdge(source, target, self._graph.edges[source, target].get("version_range"))

    def __contains__(self, mod: object) -> bool:
        if not isinstance(mod, (Mod, GraphVertex, str)):
            return False
        return _key(mod) in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()


def has_cycle(graph: DependencyGraph) -> bool:
    """True if ``graph`` is not a directed acyclic graph."""
    return graph.has_cycle()
