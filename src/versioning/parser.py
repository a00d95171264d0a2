"""Parsing utilities for mod versions and version ranges."""

import re
from typing import Optional, Union

import semantic_version

from .models import RangeSyntax, VersionRange


def _normalize_spec(spec_str: str) -> str:
    """Normalize npm range syntax (hyphen, x-ranges) into SimpleSpec-compatible form."""
    s = spec_str.strip()

    # Hyphen ranges: "1.2.3 - 1.4.5" => ">=1.2.3,<=1.4.5"
    m = re.match(r'^\s*([0-9A-Za-z\.\-\+]+)\s+-\s+([0-9A-Za-z\.\-\+]+)\s*$', s)
    if m:
        left, right = m.group(1), m.group(2)
        return f">={left},<={right}"

    # x-ranges: 1.2.x or 1.x or 1.* -> comparator pairs
    s2 = s.replace('*', 'x').lower()
    m = re.match(r'^\s*(\d+)\.(\d+)\.x\s*$', s2)
    if m:
        major, minor = int(m.group(1)), int(m.group(2))
        return f">={major}.{minor}.0,<{major}.{minor + 1}.0"

    m = re.match(r'^\s*(\d+)(?:\.x)?\s*$', s2)
    if m:
        major = int(m.group(1))
        return f">={major}.0.0,<{major + 1}.0.0"

    # Space separated comparators: ">=1.0 <2.0" => ">=1.0,<2.0"
    return re.sub(r'\s+', ',', s)


def parse_version(raw: Union[str, semantic_version.Version]) -> semantic_version.Version:
    """Parse a concrete mod version.

    Partial versions such as "1.2" are coerced to "1.2.0".

    Raises:
        ValueError: If the text is not a version at all.
    """
    if isinstance(raw, semantic_version.Version):
        return raw
    text = str(raw).strip().lstrip("vV")
    if not text:
        raise ValueError("Empty version string")
    try:
        return semantic_version.Version(text)
    except ValueError:
        return semantic_version.Version.coerce(text)


def parse_version_range(raw: str) -> VersionRange:
    """Parse a version-range constraint.

    npm range grammar is tried first since it understands ^, ~, hyphen ranges
    and x-ranges natively; otherwise the normalized SimpleSpec form is used.

    Raises:
        ValueError: If neither grammar accepts the text.
    """
    text = str(raw).strip()
    if not text:
        raise ValueError("Empty version range")
    try:
        return VersionRange(raw=text, syntax=RangeSyntax.NPM, spec=semantic_version.NpmSpec(text))
    except ValueError:
        pass
    try:
        spec = semantic_version.SimpleSpec(_normalize_spec(text))
    except ValueError as e:
        raise ValueError(f"Invalid version range '{text}': {e}") from e
    return VersionRange(raw=text, syntax=RangeSyntax.SIMPLE, spec=spec)


def parse_optional_range(raw: Optional[str]) -> Optional[VersionRange]:
    """Parse a range; None, empty text, "any" and "latest" mean unconstrained."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text or text.lower() in ("any", "latest"):
        return None
    return parse_version_range(text)
