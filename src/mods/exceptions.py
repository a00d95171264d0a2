"""Exceptions raised while looking up and resolving mods."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence


class ModError(Exception):
    """Base error for a problem with a specific mod or mod reference."""

    def __init__(self, mod: Any, message: Optional[str] = None):
        self.mod = mod
        super().__init__(message or f"Error with mod '{_ident(mod)}'")


class ModNotFoundError(ModError):
    """Raised when a reference does not resolve to a mod known to the game."""

    def __init__(self, reference: Any, container: Any = None, message: Optional[str] = None):
        self.container = container
        if message is None:
            where = f" in '{container}'" if container is not None else ""
            message = f"Mod '{_ident(reference)}' was not found{where}"
        super().__init__(reference, message)


class ModDependencyError(ModError):
    """Raised for a problem between a mod and one of its dependencies."""

    def __init__(self, source: Any, dependency: Any, message: Optional[str] = None):
        self.dependency = dependency
        super().__init__(
            source,
            message or f"Dependency '{_ident(dependency)}' of mod '{_ident(source)}' is invalid",
        )


class VersionMismatchError(ModDependencyError):
    """Raised when a dependency's version lies outside the requested range."""


class ModDependencyCycleError(ModError):
    """Raised when the dependency graph of a mod contains a cycle."""

    def __init__(self, mod: Any, message: Optional[str] = None, cycle: Optional[Sequence[str]] = None):
        self.cycle: List[str] = list(cycle or [])
        if message is None:
            message = f"The mod '{_ident(mod)}' has a dependency cycle"
            if self.cycle:
                message += ": " + " -> ".join(self.cycle)
        super().__init__(mod, message)


class InvalidModOperationError(ModError):
    """Raised when an operation is not valid for the mod's current state."""


def _ident(obj: Any) -> str:
    """Best display name for a mod or reference."""
    return str(getattr(obj, "identifier", obj))
