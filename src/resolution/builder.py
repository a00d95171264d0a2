"""Breadth-first construction of a mod's dependency graph."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Optional, Set

from common.logging_utils import Timer, extra_context, is_debug_enabled
from mods.exceptions import ModError, ModNotFoundError, VersionMismatchError
from mods.game import ModRegistry
from mods.models import Mod, ModReference, ResolveLayout

from .graph import DependencyGraph, DependencyKind

logger = logging.getLogger(__name__)


def should_enqueue(layout: ResolveLayout, index: int, count: int) -> bool:
    """Whether the dependency at ``index`` of ``count`` is expanded further."""
    if layout == ResolveLayout.FULL_RESOLVED:
        return False
    if layout == ResolveLayout.RESOLVE_RECURSIVE:
        return True
    if layout == ResolveLayout.RESOLVE_LAST_ITEM:
        return index == count - 1
    raise ValueError(f"Unsupported resolve layout: {layout!r}")


class ModDependencyGraphBuilder:
    """Builds the dependency graph of a root mod from declared dependency lists.

    The registry defaults to the root mod's game. It is only read.
    """

    def __init__(self, registry: Optional[ModRegistry] = None):
        self._registry = registry

    def build(self, root_mod: Mod) -> DependencyGraph:
        """Build the graph of ``root_mod``; the result may contain a cycle.

        Raises:
            ModNotFoundError: If the root or any walked dependency is unknown.
            VersionMismatchError: If a dependency's version is outside the
                range requested for it.
        """
        if root_mod is None:
            raise ValueError("root_mod must not be None")
        registry = self._registry_for(root_mod)

        with Timer() as t:
            root = self._get_mod_or_raise(registry, root_mod.reference)

            graph = DependencyGraph()
            graph.add_vertex(root, DependencyKind.ROOT)

            pending: Deque[Mod] = deque([root])
            visited: Set[str] = set()

            while pending:
                current = pending.popleft()
                if current.identifier in visited:
                    continue
                visited.add(current.identifier)

                dependency_list = current.dependency_list
                count = len(dependency_list)
                if count == 0:
                    continue

                kind = (
                    DependencyKind.DIRECT_DEPENDENCY
                    if current.identifier == root.identifier
                    else DependencyKind.TRANSITIVE
                )
                for index, reference in enumerate(dependency_list):
                    dependency = self._get_mod_or_raise(registry, reference)
                    _check_version(current, reference, dependency)
                    graph.add_dependency(current, dependency, kind, reference.version_range)
                    if should_enqueue(dependency_list.layout, index, count):
                        pending.append(dependency)

            if is_debug_enabled(logger):
                logger.debug(
                    "Dependency graph built",
                    extra=extra_context(
                        event="function_exit",
                        component="graph_builder",
                        action="build",
                        outcome="success",
                        target=root.identifier,
                        count=len(graph),
                        duration_ms=t.duration_ms(),
                    ),
                )
        return graph

    def try_build(self, root_mod: Mod) -> Optional[DependencyGraph]:
        """Like ``build`` but returns None when a mod error occurs."""
        try:
            return self.build(root_mod)
        except ModError as exc:
            if is_debug_enabled(logger):
                logger.debug(
                    "Dependency graph build failed",
                    extra=extra_context(
                        event="decision",
                        component="graph_builder",
                        action="try_build",
                        outcome="error",
                        target=root_mod.identifier,
                        error=str(exc),
                    ),
                )
            return None

    def _registry_for(self, root_mod: Mod) -> ModRegistry:
        if self._registry is not None:
            return self._registry
        if root_mod.game is None:
            raise ModError(root_mod, f"Mod '{root_mod}' is not part of a game")
        return root_mod.game

    @staticmethod
    def _get_mod_or_raise(registry: ModRegistry, reference: ModReference) -> Mod:
        mod = registry.find_mod(reference)
        if mod is None:
            raise ModNotFoundError(reference, registry)
        return mod


def _check_version(source: Mod, reference: ModReference, dependency: Mod) -> None:
    """Raise if the dependency's version is outside the requested range.

    Skipped when either the range or the concrete version is missing.
    """
    if reference.version_range is None or dependency.version is None:
        return
    if not reference.version_range.contains(dependency.version):
        raise VersionMismatchError(
            source,
            dependency,
            f"Dependency '{dependency.identifier}' with version '{dependency.version}' "
            f"does not match the expected version-range '{reference.version_range}'",
        )
