"""Mod object model: references, dependency lists, mods and their game."""

from .exceptions import (
    InvalidModOperationError,
    ModDependencyCycleError,
    ModDependencyError,
    ModError,
    ModNotFoundError,
    VersionMismatchError,
)
from .game import Game, ModRegistry
from .models import (
    DependencyList,
    DependencyResolveStatus,
    Mod,
    ModDependencyEntry,
    ModReference,
    ModType,
    ResolveLayout,
    VirtualMod,
)

__all__ = [
    "DependencyList",
    "DependencyResolveStatus",
    "Game",
    "InvalidModOperationError",
    "Mod",
    "ModDependencyCycleError",
    "ModDependencyEntry",
    "ModDependencyError",
    "ModError",
    "ModNotFoundError",
    "ModReference",
    "ModRegistry",
    "ModType",
    "ResolveLayout",
    "VersionMismatchError",
    "VirtualMod",
]
