"""Shared fixtures for the moddeps test suite."""

import pytest

from constants import Constants
from mods.game import Game
from mods.models import DependencyList, DependencyResolveStatus, Mod, ModReference, ModType, ResolveLayout
from versioning import parse_version_range


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep config files and mutable defaults from leaking between tests."""
    monkeypatch.setenv(Constants.ENV_CONFIG, str(tmp_path / "no-such-config.yml"))
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")
    layout, mod_type = Constants.DEFAULT_RESOLVE_LAYOUT, Constants.DEFAULT_MOD_TYPE
    yield
    Constants.DEFAULT_RESOLVE_LAYOUT = layout
    Constants.DEFAULT_MOD_TYPE = mod_type


@pytest.fixture
def game():
    """An empty game."""
    return Game("test-game")


@pytest.fixture
def make_mod(game):
    """Create a mod and register it with ``game``.

    Dependencies are identifiers, ``(identifier, range)`` tuples or
    ModReference instances.
    """

    def _make(identifier, dependencies=(), layout=ResolveLayout.RESOLVE_RECURSIVE,
              version=None, mod_type=ModType.DEFAULT, location=None):
        references = []
        for dep in dependencies:
            if isinstance(dep, ModReference):
                references.append(dep)
            elif isinstance(dep, tuple):
                references.append(ModReference(dep[0], parse_version_range(dep[1])))
            else:
                references.append(ModReference(dep))
        mod = Mod(
            identifier,
            game,
            version=version,
            dependency_list=DependencyList(references, layout),
            mod_type=mod_type,
            location=location,
        )
        assert game.add_mod(mod)
        return mod

    return _make


@pytest.fixture
def mark_resolved():
    """Flag a mod as resolved without running the resolver."""

    def _mark(mod):
        mod.dependency_resolve_status = DependencyResolveStatus.RESOLVED
        return mod

    return _mark
