"""Data models for mod versions and version ranges."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import semantic_version


class RangeSyntax(Enum):
    """Grammar a version range was parsed with."""
    NPM = "npm"
    SIMPLE = "simple"


@dataclass(frozen=True)
class VersionRange:
    """A parsed version-range constraint attached to a mod reference.

    Compared by its raw text; the parsed spec is derived data.
    """
    raw: str
    syntax: RangeSyntax
    spec: Any = field(compare=False, hash=False, repr=False)

    def contains(self, version: semantic_version.Version) -> bool:
        """Return True if ``version`` satisfies this range."""
        return bool(self.spec.match(version))

    def __contains__(self, version: semantic_version.Version) -> bool:
        return self.contains(version)

    def __str__(self) -> str:
        return self.raw
