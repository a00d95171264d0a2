"""Load a set of mods and their declared dependencies from YAML or JSON.

Example document::

    game: Empire at War
    mods:
      - id: A
        version: 1.0.0
        layout: ResolveRecursive
        dependencies:
          - B
          - {id: C, range: ">=1.0.0"}
      - id: B
      - id: C
        version: 1.2.0
        type: workshops

Virtual mods are created after every physical mod, so they may refer to mods
declared anywhere in the document.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import yaml

from constants import Constants
from versioning import parse_optional_range

from .game import Game
from .models import DependencyList, Mod, ModReference, ModType, ResolveLayout, VirtualMod

logger = logging.getLogger(__name__)


class ModSetFormatError(ValueError):
    """Raised when a mod-set document does not have the expected shape."""


def load_mod_set(path: str, default_layout: Optional[str] = None) -> Game:
    """Read a mod-set file and build its game.

    Files ending in .json are parsed as JSON, everything else as YAML.

    Raises:
        OSError: If the file cannot be read.
        ModSetFormatError: If the content is malformed.
    """
    with open(path, "r", encoding="utf-8") as fh:
        try:
            if path.lower().endswith(Constants.MOD_SET_EXTENSIONS_JSON):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
        except (ValueError, yaml.YAMLError) as exc:
            raise ModSetFormatError(f"Cannot parse {path}: {exc}") from exc
    logger.debug("Loaded mod set from %s", path)
    if isinstance(data, dict) and not data.get("game"):
        data = dict(data, game=os.path.splitext(os.path.basename(path))[0])
    return build_game(data, default_layout=default_layout)


def build_game(data: Any, default_layout: Optional[str] = None) -> Game:
    """Build a game from an already parsed mod-set document."""
    if not isinstance(data, dict):
        raise ModSetFormatError("Mod set must be a mapping with a 'mods' list")
    entries = data.get("mods") or []
    if not isinstance(entries, list):
        raise ModSetFormatError("'mods' must be a list")

    layout_default = default_layout or Constants.DEFAULT_RESOLVE_LAYOUT
    game = Game(str(data.get("game") or "game"))
    virtual: List[Tuple[str, Dict[str, Any], DependencyList]] = []

    for index, entry in enumerate(entries):
        where = f"mods[{index}]"
        spec = _entry_mapping(entry, where)
        identifier = _identifier(spec, where)
        try:
            mod_type = ModType.parse(spec.get("type") or Constants.DEFAULT_MOD_TYPE)
            dependency_list = _dependency_list(spec, layout_default, where)
            if mod_type == ModType.VIRTUAL:
                virtual.append((identifier, spec, dependency_list))
                continue
            mod = Mod(
                identifier,
                game,
                version=_optional_str(spec.get("version")),
                dependency_list=dependency_list,
                mod_type=mod_type,
                location=_optional_str(spec.get("location")),
                name=_optional_str(spec.get("name")),
            )
        except ModSetFormatError:
            raise
        except ValueError as exc:
            raise ModSetFormatError(f"{where}: {exc}") from exc
        _add(game, mod, where)

    for identifier, spec, dependency_list in virtual:
        mod = VirtualMod(
            identifier,
            game,
            list(dependency_list),
            dependency_list.layout,
            name=_optional_str(spec.get("name")),
        )
        _add(game, mod, f"virtual mod '{identifier}'")
    return game


def _add(game: Game, mod: Mod, where: str) -> None:
    if not game.add_mod(mod):
        raise ModSetFormatError(f"{where}: duplicate mod identifier '{mod.identifier}'")


def _entry_mapping(entry: Any, where: str) -> Dict[str, Any]:
    if isinstance(entry, str):
        return {"id": entry}
    if not isinstance(entry, dict):
        raise ModSetFormatError(f"{where}: expected a mapping or an identifier string")
    return entry


def _identifier(spec: Dict[str, Any], where: str) -> str:
    identifier = spec.get("id", spec.get("identifier"))
    if identifier is None or not str(identifier).strip():
        raise ModSetFormatError(f"{where}: missing 'id'")
    return str(identifier).strip()


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _dependency_list(spec: Dict[str, Any], layout_default: str, where: str) -> DependencyList:
    raw = spec.get("dependencies") or []
    if not isinstance(raw, list):
        raise ModSetFormatError(f"{where}: 'dependencies' must be a list")
    references = [_reference(item, f"{where}.dependencies[{i}]") for i, item in enumerate(raw)]
    layout = ResolveLayout.parse(spec.get("layout") or layout_default)
    return DependencyList(references, layout)


def _reference(item: Any, where: str) -> ModReference:
    if isinstance(item, (str, int)):
        return ModReference(str(item).strip())
    if not isinstance(item, dict):
        raise ModSetFormatError(f"{where}: expected a mapping or an identifier string")
    identifier = _identifier(item, where)
    version_range = parse_optional_range(_optional_str(item.get("range")))
    return ModReference(identifier, version_range)
