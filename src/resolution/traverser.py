"""Flattening of a mod's dependency graph into an activation order."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence, Set

from common.logging_utils import extra_context, is_debug_enabled
from mods.exceptions import InvalidModOperationError, ModDependencyCycleError
from mods.models import DependencyResolveStatus, Mod

from .builder import ModDependencyGraphBuilder
from .graph import DependencyGraph

logger = logging.getLogger(__name__)


class ModDependencyTraverser:
    """Produces the ordered, duplicate-free dependency sequence of a mod."""

    def __init__(self, graph_builder: Optional[ModDependencyGraphBuilder] = None):
        self._graph_builder = graph_builder or ModDependencyGraphBuilder()

    def traverse(self, target_mod: Mod) -> List[Mod]:
        """Return ``target_mod`` followed by everything it transitively needs.

        The order is breadth-first from the root; a mod reached on several
        paths keeps only its first position.

        Raises:
            InvalidModOperationError: If the mod's dependencies are not resolved.
            ModDependencyCycleError: If the dependency graph has a cycle.
        """
        if target_mod.dependency_resolve_status != DependencyResolveStatus.RESOLVED:
            raise InvalidModOperationError(
                target_mod,
                f"Mod '{target_mod}' is not resolved "
                f"(status: {target_mod.dependency_resolve_status.value})",
            )

        graph = self._graph_builder.build(target_mod)
        if graph.has_cycle():
            raise ModDependencyCycleError(target_mod, cycle=graph.find_cycle())

        result = remove_duplicates(flatten(graph, target_mod))
        if is_debug_enabled(logger):
            logger.debug(
                "Traversed dependencies",
                extra=extra_context(
                    event="function_exit",
                    component="traverser",
                    action="traverse",
                    outcome="success",
                    target=target_mod.identifier,
                    count=len(result),
                ),
            )
        return result


def flatten(graph: DependencyGraph, head: Mod) -> List[Mod]:
    """Breadth-first walk from ``head``; repeated mods are kept.

    Only the first occurrence of a mod has its dependencies queued, so the
    result grows with the number of edges, not the number of paths.
    """
    result: List[Mod] = []
    expanded: Set[str] = set()
    queue: Deque[Mod] = deque([head])
    while queue:
        current = queue.popleft()
        result.append(current)
        if current.identifier in expanded:
            continue
        expanded.add(current.identifier)
        queue.extend(graph.dependencies_of(current))
    return result


def remove_duplicates(mods: Sequence[Mod]) -> List[Mod]:
    """Drop later repetitions, keeping each mod at its first position."""
    seen: Set[str] = set()
    unique: List[Mod] = []
    for mod in mods:
        if mod.identifier in seen:
            continue
        seen.add(mod.identifier)
        unique.append(mod)
    return unique
