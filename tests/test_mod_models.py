"""Tests for the mod data model."""

import pytest
import semantic_version

from mods.exceptions import InvalidModOperationError, ModDependencyCycleError, ModError, ModNotFoundError
from mods.game import Game
from mods.models import (
    DependencyList,
    DependencyResolveStatus,
    Mod,
    ModDependencyEntry,
    ModReference,
    ModType,
    ResolveLayout,
    VirtualMod,
)
from versioning import parse_version_range


class TestResolveLayout:
    """Layout names as they appear in mod-set files."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("FullResolved", ResolveLayout.FULL_RESOLVED),
            ("resolve_recursive", ResolveLayout.RESOLVE_RECURSIVE),
            ("resolve-last-item", ResolveLayout.RESOLVE_LAST_ITEM),
            (ResolveLayout.RESOLVE_LAST_ITEM, ResolveLayout.RESOLVE_LAST_ITEM),
        ],
    )
    def test_parse(self, raw, expected):
        assert ResolveLayout.parse(raw) == expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            ResolveLayout.parse("sideways")


class TestModType:
    def test_workshop_alias(self):
        assert ModType.parse("Workshop") == ModType.WORKSHOPS

    def test_unknown(self):
        with pytest.raises(ValueError):
            ModType.parse("floppy")


class TestModReference:
    def test_equality_ignores_range(self):
        assert ModReference("A", parse_version_range("^1.0.0")) == ModReference("A")
        assert hash(ModReference("A", parse_version_range("^1.0.0"))) == hash(ModReference("A"))

    def test_identifier_is_stripped(self):
        assert ModReference(" B ") == ModReference("B")
        assert ModReference(" B ").identifier == "B"

    def test_identifier_is_case_sensitive(self):
        assert ModReference("A") != ModReference("a")

    def test_str(self):
        assert str(ModReference("A")) == "A"
        assert str(ModReference("A", parse_version_range(">=1.0.0"))) == "A (>=1.0.0)"


class TestDependencyList:
    def test_defaults(self):
        dependency_list = DependencyList()
        assert len(dependency_list) == 0
        assert dependency_list.layout == ResolveLayout.RESOLVE_RECURSIVE

    def test_keeps_order(self):
        dependency_list = DependencyList([ModReference("B"), ModReference("C")], ResolveLayout.FULL_RESOLVED)
        assert [r.identifier for r in dependency_list] == ["B", "C"]
        assert dependency_list[1] == ModReference("C")
        assert isinstance(dependency_list.references, tuple)


class TestMod:
    def test_identifier_is_stripped(self):
        assert Mod("  A ").identifier == "A"

    def test_empty_identifier_rejected(self):
        with pytest.raises(ValueError):
            Mod("   ")

    def test_version_is_parsed(self):
        assert Mod("A", version="1.2").version == semantic_version.Version("1.2.0")

    def test_new_mod_is_unresolved(self):
        mod = Mod("A")
        assert mod.dependency_resolve_status == DependencyResolveStatus.UNRESOLVED
        assert mod.dependencies == ()
        assert mod.name == "A"

    def test_equality_requires_same_game(self):
        first, second = Game("one"), Game("two")
        assert Mod("A", first) == Mod("A", first)
        assert Mod("A", first) != Mod("A", second)
        assert hash(Mod("A", first)) == hash(Mod("A", second))

    def test_is_physical(self):
        assert Mod("A").is_physical
        assert Mod("1", mod_type=ModType.WORKSHOPS).is_physical
        assert not Mod("V", mod_type=ModType.VIRTUAL).is_physical

    def test_reentrant_resolve_reports_cycle(self):
        mod = Mod("A")
        mod.dependency_resolve_status = DependencyResolveStatus.RESOLVING
        with pytest.raises(ModDependencyCycleError):
            mod.resolve_dependencies()

    def test_resolved_mod_is_not_resolved_again(self):
        class ExplodingResolver:
            def resolve(self, mod):
                raise AssertionError("resolver must not be called")

        mod = Mod("A")
        mod.dependency_resolve_status = DependencyResolveStatus.RESOLVED
        mod.resolve_dependencies(ExplodingResolver())

    def test_failed_resolve_marks_faulted(self):
        class FailingResolver:
            def resolve(self, mod):
                raise ModError(mod, "boom")

        mod = Mod("A")
        with pytest.raises(ModError):
            mod.resolve_dependencies(FailingResolver())
        assert mod.dependency_resolve_status == DependencyResolveStatus.FAULTED

    def test_custom_resolver_result_is_stored(self):
        dependency = Mod("B")

        class StaticResolver:
            def resolve(self, mod):
                assert mod.dependency_resolve_status == DependencyResolveStatus.RESOLVING
                return [ModDependencyEntry(dependency)]

        mod = Mod("A")
        mod.resolve_dependencies(StaticResolver())
        assert mod.dependency_resolve_status == DependencyResolveStatus.RESOLVED
        assert [e.mod for e in mod.dependencies] == [dependency]


class TestVirtualMod:
    """Virtual mods are resolved at creation."""

    def test_created_resolved(self, game, make_mod):
        make_mod("A")
        make_mod("B")
        virtual = VirtualMod("V", game, [ModReference("A"), ModReference("B", parse_version_range("^1.0.0"))])
        assert virtual.dependency_resolve_status == DependencyResolveStatus.RESOLVED
        assert virtual.mod_type == ModType.VIRTUAL
        assert [e.mod.identifier for e in virtual.dependencies] == ["A", "B"]
        assert [r.identifier for r in virtual.dependency_list] == ["A", "B"]
        assert virtual.dependency_list[1].version_range.raw == "^1.0.0"

    def test_requires_dependencies(self, game):
        with pytest.raises(ModError):
            VirtualMod("V", game, [])

    def test_requires_physical_dependency(self, game, make_mod):
        make_mod("A")
        inner = VirtualMod("Inner", game, [ModReference("A")])
        game.add_mod(inner)
        with pytest.raises(ModError, match="physical"):
            VirtualMod("V", game, [ModReference("Inner")])

    def test_unknown_dependency(self, game):
        with pytest.raises(ModNotFoundError):
            VirtualMod("V", game, [ModReference("missing")])

    def test_entry_from_other_game_rejected(self, game):
        other = Game("other")
        foreign = Mod("A", other)
        other.add_mod(foreign)
        with pytest.raises(ModError, match="does not match"):
            VirtualMod("V", game, [ModDependencyEntry(foreign)])

    def test_cannot_resolve_again(self, game, make_mod):
        make_mod("A")
        virtual = VirtualMod("V", game, [ModReference("A")])
        with pytest.raises(InvalidModOperationError):
            virtual.resolve_dependencies()
