"""Tests for flattening a resolved mod into its dependency chain."""

import pytest

from mods.exceptions import InvalidModOperationError, ModDependencyCycleError
from mods.models import DependencyResolveStatus, Mod, ResolveLayout
from resolution import build_dependency_graph, resolve_dependencies
from resolution.traverser import ModDependencyTraverser, flatten, remove_duplicates


def _ids(mods):
    return [m.identifier for m in mods]


class TestTraverse:
    """Order of the flattened chain."""

    def test_recursive_then_full_resolved(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B"]))
        make_mod("B", ["C", "D"], layout=ResolveLayout.FULL_RESOLVED)
        make_mod("C")
        make_mod("D")
        assert _ids(ModDependencyTraverser().traverse(a)) == ["A", "B", "C", "D"]

    def test_diamond(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B", "C"]))
        make_mod("B", ["D"])
        make_mod("C", ["D"])
        make_mod("D")
        assert _ids(resolve_dependencies(a)) == ["A", "B", "C", "D"]

    def test_full_resolved_root_stops_at_direct_dependencies(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B", "C"], layout=ResolveLayout.FULL_RESOLVED))
        make_mod("B", ["X"])
        make_mod("C")
        make_mod("X")
        assert _ids(resolve_dependencies(a)) == ["A", "B", "C"]

    def test_resolve_last_item(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B", "C"], layout=ResolveLayout.RESOLVE_LAST_ITEM))
        make_mod("B", ["X"])
        make_mod("C", ["Y"])
        make_mod("X")
        make_mod("Y")
        assert _ids(resolve_dependencies(a)) == ["A", "B", "C", "Y"]

    def test_duplicate_keeps_first_position(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B", "D"]))
        make_mod("B", ["C"])
        make_mod("C", ["D"])
        make_mod("D")
        assert _ids(resolve_dependencies(a)) == ["A", "B", "D", "C"]

    def test_mod_without_dependencies(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A"))
        assert resolve_dependencies(a) == [a]

    def test_chain_properties(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B", "C", "E"]))
        make_mod("B", ["D", "E"])
        make_mod("C", ["E", "F"], layout=ResolveLayout.RESOLVE_LAST_ITEM)
        make_mod("D", ["F"])
        make_mod("E")
        make_mod("F")
        chain = resolve_dependencies(a)
        assert chain[0] is a
        assert len(set(_ids(chain))) == len(chain)
        assert set(_ids(chain)) == {"A", "B", "C", "D", "E", "F"}

    def test_repeated_traversal_is_stable(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B", "C"]))
        make_mod("B", ["C"])
        make_mod("C")
        traverser = ModDependencyTraverser()
        assert _ids(traverser.traverse(a)) == _ids(traverser.traverse(a)) == ["A", "B", "C"]


class TestTraverseErrors:
    @pytest.mark.parametrize(
        "status",
        [
            DependencyResolveStatus.UNRESOLVED,
            DependencyResolveStatus.RESOLVING,
            DependencyResolveStatus.FAULTED,
        ],
    )
    def test_requires_resolved_mod(self, make_mod, status):
        a = make_mod("A")
        a.dependency_resolve_status = status
        with pytest.raises(InvalidModOperationError):
            ModDependencyTraverser().traverse(a)

    def test_cycle(self, make_mod, mark_resolved):
        a = mark_resolved(make_mod("A", ["B"]))
        make_mod("B", ["A"])
        with pytest.raises(ModDependencyCycleError) as exc_info:
            resolve_dependencies(a)
        assert exc_info.value.cycle == ["A", "B", "A"]
        assert "A -> B -> A" in str(exc_info.value)


def test_remove_duplicates_keeps_first():
    a, b, c = Mod("A"), Mod("B"), Mod("C")
    assert remove_duplicates([a, b, a, c, b]) == [a, b, c]


def test_layered_diamonds_flatten_linearly(make_mod, mark_resolved):
    layers = 18
    names = [(f"L{i:02d}a", f"L{i:02d}b") for i in range(layers)]
    for i, layer in enumerate(names):
        below = list(names[i + 1]) if i + 1 < layers else []
        for name in layer:
            make_mod(name, below)
    root = mark_resolved(make_mod("R", list(names[0])))

    graph = build_dependency_graph(root)
    flattened = flatten(graph, root)
    assert len(graph) == 2 * layers + 1
    assert len(flattened) <= len(graph.edges) + 1

    expected = ["R"] + [name for layer in names for name in layer]
    assert _ids(ModDependencyTraverser().traverse(root)) == expected
