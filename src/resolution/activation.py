"""Activation list of the physical mods in a traversed dependency chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from mods.exceptions import ModError
from mods.models import DependencyResolveStatus, Mod, ModType

from .traverser import ModDependencyTraverser


@dataclass(frozen=True)
class ActivationEntry:
    """One mod as the game expects it: a location or a workshop id."""
    value: str
    workshop: bool = False


def _entry_for(mod: Mod) -> ActivationEntry:
    if mod.mod_type == ModType.WORKSHOPS:
        if not mod.identifier.isdigit():
            raise ModError(mod, f"Identifier '{mod.identifier}' is not a valid workshop id")
        return ActivationEntry(mod.identifier, workshop=True)
    return ActivationEntry(mod.location or mod.identifier)


def build_activation_list(traversed_mods: Sequence[Mod]) -> List[ActivationEntry]:
    """Map a traversed chain to activation entries, skipping virtual mods."""
    return [_entry_for(mod) for mod in traversed_mods if mod.is_physical]


def activation_list_for(
    mod: Mod, traverser: Optional[ModDependencyTraverser] = None
) -> List[ActivationEntry]:
    """Activation entries for ``mod`` and, when resolved, its dependency chain."""
    if mod.dependency_resolve_status == DependencyResolveStatus.RESOLVED:
        chain = (traverser or ModDependencyTraverser()).traverse(mod)
        return build_activation_list(chain)
    if not mod.is_physical:
        return []
    return [_entry_for(mod)]
