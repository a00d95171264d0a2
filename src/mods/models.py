"""Data model for mods, mod references and declared dependency lists."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import semantic_version

from versioning import VersionRange, parse_version

from .exceptions import InvalidModOperationError, ModDependencyCycleError, ModError, ModNotFoundError

if TYPE_CHECKING:  # pragma: no cover
    from .game import Game


class ResolveLayout(Enum):
    """How far the entries of a dependency list are expanded."""
    FULL_RESOLVED = "FullResolved"
    RESOLVE_RECURSIVE = "ResolveRecursive"
    RESOLVE_LAST_ITEM = "ResolveLastItem"

    @classmethod
    def parse(cls, value: Union[str, "ResolveLayout"]) -> "ResolveLayout":
        """Accept canonical names ("ResolveLastItem") and snake/kebab spellings."""
        if isinstance(value, cls):
            return value
        key = re.sub(r"[\s_\-]", "", str(value)).lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValueError(f"Unknown resolve layout: {value!r}")


class DependencyResolveStatus(Enum):
    """Resolution state tracked on every mod."""
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAULTED = "faulted"


class ModType(Enum):
    """Kind of mod installation."""
    DEFAULT = "default"
    WORKSHOPS = "workshops"
    VIRTUAL = "virtual"

    @classmethod
    def parse(cls, value: Union[str, "ModType"]) -> "ModType":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key == "workshop":
            key = "workshops"
        return cls(key)


@dataclass(frozen=True)
class ModReference:
    """Identifies a mod, with an optional version-range constraint.

    Equality and hashing use the identifier only.
    """
    identifier: str
    version_range: Optional[VersionRange] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "identifier", str(self.identifier).strip())

    def __str__(self) -> str:
        if self.version_range is None:
            return self.identifier
        return f"{self.identifier} ({self.version_range})"


@dataclass(frozen=True)
class DependencyList:
    """Ordered mod references plus the layout governing their expansion."""
    references: Tuple[ModReference, ...] = ()
    layout: ResolveLayout = ResolveLayout.RESOLVE_RECURSIVE

    def __post_init__(self):
        object.__setattr__(self, "references", tuple(self.references))

    def __len__(self) -> int:
        return len(self.references)

    def __iter__(self) -> Iterator[ModReference]:
        return iter(self.references)

    def __getitem__(self, index: int) -> ModReference:
        return self.references[index]


@dataclass(frozen=True, eq=False)
class ModDependencyEntry:
    """A resolved dependency and the range it was requested with."""
    mod: "Mod"
    version_range: Optional[VersionRange] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModDependencyEntry):
            return NotImplemented
        return self.mod == other.mod

    def __hash__(self) -> int:
        return hash(self.mod)


class Mod:
    """A mod owned by a game.

    The declared ``dependency_list`` is authored data; ``dependencies`` holds
    the resolved direct dependencies once ``resolve_dependencies`` succeeded.
    """

    def __init__(
        self,
        identifier: str,
        game: Optional["Game"] = None,
        version: Union[str, semantic_version.Version, None] = None,
        dependency_list: Optional[DependencyList] = None,
        mod_type: ModType = ModType.DEFAULT,
        location: Optional[str] = None,
        name: Optional[str] = None,
    ):
        identifier = (identifier or "").strip()
        if not identifier:
            raise ValueError("Mod identifier must not be empty")
        self.identifier = identifier
        self.game = game
        self.version: Optional[semantic_version.Version] = (
            parse_version(version) if version is not None else None
        )
        self.dependency_list = dependency_list if dependency_list is not None else DependencyList()
        self.mod_type = mod_type
        self.location = location
        self.name = name or identifier
        self.dependency_resolve_status = DependencyResolveStatus.UNRESOLVED
        self._dependencies: List[ModDependencyEntry] = []

    @property
    def reference(self) -> ModReference:
        return ModReference(self.identifier)

    @property
    def dependencies(self) -> Tuple[ModDependencyEntry, ...]:
        return tuple(self._dependencies)

    @property
    def is_physical(self) -> bool:
        return self.mod_type in (ModType.DEFAULT, ModType.WORKSHOPS)

    def resolve_dependencies(self, resolver=None) -> None:
        """Resolve this mod's direct dependencies.

        Does nothing when already resolved. On failure the status becomes
        FAULTED and the error propagates.

        Raises:
            ModDependencyCycleError: If called again while this mod is resolving.
        """
        if self.dependency_resolve_status == DependencyResolveStatus.RESOLVED:
            return
        if self.dependency_resolve_status == DependencyResolveStatus.RESOLVING:
            raise ModDependencyCycleError(
                self,
                f"Already resolving the dependencies of '{self.identifier}'. Possible dependency cycle?",
            )
        if resolver is None:
            from resolution.resolver import ModDependencyResolver  # pylint: disable=import-outside-toplevel
            resolver = ModDependencyResolver()
        try:
            self.dependency_resolve_status = DependencyResolveStatus.RESOLVING
            self._dependencies = list(resolver.resolve(self))
            self.dependency_resolve_status = DependencyResolveStatus.RESOLVED
        except Exception:
            self.dependency_resolve_status = DependencyResolveStatus.FAULTED
            raise

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mod):
            return NotImplemented
        return self.identifier == other.identifier and self.game is other.game

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __repr__(self) -> str:
        version = f" {self.version}" if self.version is not None else ""
        return f"<{type(self).__name__} {self.identifier}{version}>"

    def __str__(self) -> str:
        return self.identifier


class VirtualMod(Mod):
    """A mod without files whose dependencies are fixed at creation.

    Virtual mods are resolved as soon as they exist and must depend on at
    least one physical mod.
    """

    def __init__(
        self,
        identifier: str,
        game: "Game",
        dependencies: Sequence[Union[ModReference, ModDependencyEntry]],
        layout: ResolveLayout = ResolveLayout.RESOLVE_RECURSIVE,
        name: Optional[str] = None,
    ):
        super().__init__(identifier, game, mod_type=ModType.VIRTUAL, name=name)
        if not dependencies:
            raise ModError(self, "Virtual mods must be created with at least one dependency")

        entries = list(self._entries_from(dependencies))
        if not any(entry.mod.is_physical for entry in entries):
            raise ModError(self, "No physical dependency was found")

        self.dependency_list = DependencyList(
            [ModReference(e.mod.identifier, e.version_range) for e in entries], layout
        )
        self._dependencies = entries
        self.dependency_resolve_status = DependencyResolveStatus.RESOLVED

    def _entries_from(
        self, dependencies: Iterable[Union[ModReference, ModDependencyEntry]]
    ) -> Iterator[ModDependencyEntry]:
        for dependency in dependencies:
            if isinstance(dependency, ModDependencyEntry):
                if dependency.mod.game is not self.game:
                    raise ModError(
                        self, f"Game of mod '{dependency.mod}' does not match this mod's game"
                    )
                yield dependency
                continue
            mod = self.game.find_mod(dependency)
            if mod is None:
                raise ModNotFoundError(dependency, self.game)
            yield ModDependencyEntry(mod, dependency.version_range)

    def resolve_dependencies(self, resolver=None) -> None:
        raise InvalidModOperationError(
            self, "Virtual mods cannot resolve their dependencies after creation"
        )
