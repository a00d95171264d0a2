"""Configuration overrides for runtime tunables.

Precedence: ``--set KEY=VALUE`` pairs, then the ``resolution`` section of the
YAML config file (``--config``, MODDEPS_CONFIG or the default locations), then
the built-in defaults on ``Constants``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from constants import Constants, load_config
from mods.models import ModType, ResolveLayout

logger = logging.getLogger(__name__)

# config key -> (Constants attribute, validator)
_RESOLUTION_KEYS = {
    "default_layout": ("DEFAULT_RESOLVE_LAYOUT", lambda v: ResolveLayout.parse(v).value),
    "default_mod_type": ("DEFAULT_MOD_TYPE", lambda v: ModType.parse(v).value),
}


class ConfigError(ValueError):
    """Raised for an unknown or invalid configuration value."""


def _parse_overrides(pairs: Iterable[str]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ConfigError(f"Invalid override '{pair}', expected KEY=VALUE")
        key, value = pair.split("=", 1)
        key = key.strip()
        if key.startswith("resolution."):
            key = key[len("resolution."):]
        overrides[key] = value.strip()
    return overrides


def _apply(key: str, value: Any, source: str) -> None:
    if key not in _RESOLUTION_KEYS:
        raise ConfigError(f"Unknown configuration key '{key}' ({source})")
    attribute, validate = _RESOLUTION_KEYS[key]
    try:
        setattr(Constants, attribute, validate(value))
    except ValueError as exc:
        raise ConfigError(f"Invalid value for '{key}' ({source}): {exc}") from exc
    logger.debug("Config %s=%s from %s", key, getattr(Constants, attribute), source)


def apply_config(args) -> None:
    """Apply config file values and CLI overrides to ``Constants``.

    Raises:
        ConfigError: If a key is unknown or a value is invalid.
    """
    config = load_config(getattr(args, "CONFIG", None))
    section = config.get("resolution") or {}
    if not isinstance(section, dict):
        raise ConfigError("'resolution' config section must be a mapping")
    for key, value in section.items():
        _apply(key, value, "config file")
    for key, value in _parse_overrides(getattr(args, "CONFIG_SET", [])).items():
        _apply(key, value, "--set")
