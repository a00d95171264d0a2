"""Version and version-range handling for mod references."""

from .models import RangeSyntax, VersionRange
from .parser import parse_optional_range, parse_version, parse_version_range

__all__ = [
    "RangeSyntax",
    "VersionRange",
    "parse_optional_range",
    "parse_version",
    "parse_version_range",
]
