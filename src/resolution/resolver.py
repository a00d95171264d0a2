"""Resolution of a mod's direct dependencies."""

from __future__ import annotations

import logging
from typing import List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from mods.exceptions import ModDependencyCycleError
from mods.models import DependencyResolveStatus, Mod, ModDependencyEntry

from .builder import ModDependencyGraphBuilder
from .graph import DependencyKind

logger = logging.getLogger(__name__)


class ModDependencyResolver:
    """Resolves the direct dependencies of a mod as its layout prescribes.

    Every dependency whose own list is walked by the graph builder (i.e. every
    non-root vertex with outgoing edges) is resolved as well. Dependencies the
    layout does not expand stay untouched, which allows declarations such as::

        A : B, C, D   [FullResolved]
        D : B

    where a recursive walk would be pointless for ``A``.
    """

    def __init__(self, graph_builder: Optional[ModDependencyGraphBuilder] = None):
        self._graph_builder = graph_builder or ModDependencyGraphBuilder()

    def resolve(self, mod: Mod) -> List[ModDependencyEntry]:
        """Return the direct dependencies of ``mod``.

        This does not set ``mod.dependencies``; ``Mod.resolve_dependencies``
        does that with the returned list.

        Raises:
            ModDependencyCycleError: If the dependency graph has a cycle.
            ModNotFoundError: If a dependency is unknown.
            VersionMismatchError: If a dependency's version is out of range.
        """
        if mod.dependency_resolve_status == DependencyResolveStatus.RESOLVED:
            return list(mod.dependencies)

        graph = self._graph_builder.build(mod)
        if graph.has_cycle():
            raise ModDependencyCycleError(mod, cycle=graph.find_cycle())

        direct: List[ModDependencyEntry] = []
        for vertex in graph.vertices:
            out_edges = graph.out_edges(vertex)
            if vertex.kind == DependencyKind.ROOT:
                for edge in out_edges:
                    direct.append(ModDependencyEntry(graph.vertex(edge.target).mod, edge.version_range))
            elif out_edges:
                vertex.mod.resolve_dependencies(self)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved direct dependencies",
                extra=extra_context(
                    event="function_exit",
                    component="resolver",
                    action="resolve",
                    outcome="success",
                    target=mod.identifier,
                    count=len(direct),
                ),
            )
        return direct
