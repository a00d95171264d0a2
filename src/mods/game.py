"""Mod container acting as the registry mods are looked up in."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Protocol, Tuple, Union
from .exceptions import ModError
from .models import Mod, ModReference

logger = logging.getLogger(__name__)


class ModRegistry(Protocol):
    """Read-only lookup of mods by reference."""

    def find_mod(self, reference: Union[ModReference, Mod]) -> Optional[Mod]:
        """Return the mod matching ``reference`` or None."""


def normalize_identifier(identifier: str) -> str:
    """Canonical lookup key for a mod identifier."""
    return identifier.strip()


class Game:
    """A moddable game owning a set of mods.

    Lookups are by normalized identifier; insertion order is preserved.
    """

    def __init__(self, name: str = "game"):
        self.name = name
        self._mods: Dict[str, Mod] = {}

    @property
    def mods(self) -> Tuple[Mod, ...]:
        return tuple(self._mods.values())

    def add_mod(self, mod: Mod) -> bool:
        """Add a mod; returns False when an equal mod is already present.

        Raises:
            ModError: If the mod belongs to a different game.
        """
        if mod.game is None:
            mod.game = self
        elif mod.game is not self:
            raise ModError(mod, f"Mod '{mod}' belongs to a different game than '{self.name}'")
        key = normalize_identifier(mod.identifier)
        if key in self._mods:
            return False
        self._mods[key] = mod
        logger.debug("Added mod %s to %s", mod.identifier, self.name)
        return True

    def remove_mod(self, mod: Mod) -> bool:
        """Remove a mod; returns False if it was not part of this game."""
        key = normalize_identifier(mod.identifier)
        if self._mods.get(key) != mod:
            return False
        del self._mods[key]
        return True

    def find_mod(self, reference: Union[ModReference, Mod]) -> Optional[Mod]:
        """Return the mod with the reference's identifier, or None."""
        return self._mods.get(normalize_identifier(reference.identifier))

    def __iter__(self) -> Iterator[Mod]:
        return iter(self.mods)

    def __len__(self) -> int:
        return len(self._mods)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (Mod, ModReference)):
            return False
        return self.find_mod(item) is not None

    def __repr__(self) -> str:
        return f"<Game {self.name} mods={len(self._mods)}>"

    def __str__(self) -> str:
        return self.name
