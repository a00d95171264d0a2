"""Mod dependency resolution: graph building, cycle checking and traversal."""

from typing import List, Optional

from mods.game import ModRegistry
from mods.models import Mod

from .activation import ActivationEntry, activation_list_for, build_activation_list
from .builder import ModDependencyGraphBuilder, should_enqueue
from .graph import DependencyGraph, DependencyKind, GraphEdge, GraphVertex, has_cycle
from .multi import MultiModDependencyResolver, MultiResolveResult
from .resolver import ModDependencyResolver
from .traverser import ModDependencyTraverser


def build_dependency_graph(root_mod: Mod, registry: Optional[ModRegistry] = None) -> DependencyGraph:
    """Build the dependency graph of ``root_mod`` (it may contain a cycle)."""
    return ModDependencyGraphBuilder(registry).build(root_mod)


def resolve_dependencies(root_mod: Mod, registry: Optional[ModRegistry] = None) -> List[Mod]:
    """Ordered, duplicate-free dependency chain of a resolved mod, root first."""
    return ModDependencyTraverser(ModDependencyGraphBuilder(registry)).traverse(root_mod)


__all__ = [
    "ActivationEntry",
    "DependencyGraph",
    "DependencyKind",
    "GraphEdge",
    "GraphVertex",
    "ModDependencyGraphBuilder",
    "ModDependencyResolver",
    "ModDependencyTraverser",
    "MultiModDependencyResolver",
    "MultiResolveResult",
    "activation_list_for",
    "build_activation_list",
    "build_dependency_graph",
    "has_cycle",
    "resolve_dependencies",
    "should_enqueue",
]
