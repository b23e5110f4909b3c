"""Tests for build_tree / build_forest and the builder's guards."""

import logging

import pytest

from dazzleforestlib import (
    BuildConfig,
    ConfigurationError,
    CycleDetectedError,
    DepthExceededError,
    ForestBuilder,
    ForestError,
    build_forest,
    build_tree,
)
from dazzleforestlib.testing import ForestTestHelper, chain_children


helper = ForestTestHelper()


class TestBuildTree:
    """Building one tree from a root and a children function."""

    def test_chain(self):
        root = build_tree(1, lambda n: [n + 1] if n < 3 else [])

        assert helper.shape(root) == (1, ((2, ((3, ()),)),))
        assert [n.model for n in root.non_leaf_nodes()] == [2]

    def test_binary_tree(self):
        root = build_tree(1, lambda n: [2 * n, 2 * n + 1] if n < 4 else None)

        assert helper.shape(root) == (
            1, (
                (2, ((4, ()), (5, ()))),
                (3, ((6, ()), (7, ()))),
            )
        )
        helper.assert_links_consistent(root)

    def test_none_and_empty_children_make_leaves(self):
        assert build_tree("x", lambda m: None).is_leaf()
        assert build_tree("x", lambda m: []).is_leaf()
        assert build_tree("x", lambda m: iter(())).is_leaf()

    def test_nested_dicts(self):
        data = {
            "name": "root",
            "items": [
                {"name": "a", "items": [{"name": "a1"}]},
                {"name": "b"},
            ],
        }
        root = build_tree(data, lambda d: d.get("items"))
        names = ForestTestHelper(key_of=lambda d: d["name"])

        assert names.shape(root) == ("root", (("a", (("a1", ()),)), ("b", ())))

    def test_children_function_called_once_per_node(self):
        calls = []

        def children_of(n):
            calls.append(n)
            return [n + 1] if n < 5 else []

        build_tree(1, children_of)
        assert calls == [1, 2, 3, 4, 5]

    def test_children_function_errors_propagate(self):
        def children_of(n):
            if n == 2:
                raise KeyError("boom")
            return [n + 1]

        with pytest.raises(KeyError):
            build_tree(1, children_of)

    def test_deep_chain_does_not_recurse(self):
        """A chain far deeper than Python's recursion limit builds fine."""
        length = 5000
        root = build_tree(
            1, chain_children(length),
            config=BuildConfig(max_depth=None, detect_cycles=False),
        )

        assert helper.count(root) == length
        deepest = list(root.leaf_nodes())
        assert [n.model for n in deepest] == [length]
        assert deepest[0].depth() == length - 1


class TestBuildForest:

    def test_one_tree_per_model_in_order(self):
        roots = build_forest([3, 1, 2], lambda n: [n * 10] if n < 10 else [])

        assert [r.model for r in roots] == [3, 1, 2]
        assert [helper.shape(r) for r in roots] == [
            (3, ((30, ()),)),
            (1, ((10, ()),)),
            (2, ((20, ()),)),
        ]

    def test_empty_input(self):
        assert build_forest([], lambda n: []) == []

    def test_trees_are_independent(self):
        roots = build_forest(["a", "a"], lambda m: [])
        assert roots[0] is not roots[1]
        assert all(r.parent is None for r in roots)

    def test_nodes_built_totals_the_forest(self):
        builder = ForestBuilder()
        builder.build_forest([1, 4], lambda n: [n + 1] if n < 5 else [])
        # 1..5 and 4..5
        assert builder.nodes_built == 7


class TestCycleGuard:

    def test_identity_cycle_detected(self):
        a = {"name": "a"}
        b = {"name": "b"}
        links = {id(a): [b], id(b): [a]}

        with pytest.raises(CycleDetectedError) as excinfo:
            build_tree(a, lambda m: links[id(m)])

        assert excinfo.value.keys == (a, b, a)

    def test_self_child_detected(self):
        with pytest.raises(CycleDetectedError):
            build_tree("x", lambda m: [m])

    def test_key_based_cycle_detected(self):
        """Fresh but equal objects only count as a cycle under a key."""
        def children_of(model):
            return [{"id": (model["id"] + 1) % 3}]

        with pytest.raises(CycleDetectedError) as excinfo:
            build_tree({"id": 0}, children_of, key=lambda m: m["id"])

        assert [m["id"] for m in excinfo.value.keys] == [0, 1, 2, 0]

    def test_repeated_value_in_other_branch_is_not_a_cycle(self):
        shared = "leaf"
        root = build_tree("root", lambda m: ["a", "b"] if m == "root" else ([shared] if m in ("a", "b") else []))
        assert [n.model for n in root.leaf_nodes()] == ["leaf", "leaf"]

    def test_cycle_without_detection_hits_depth_limit(self):
        config = BuildConfig(max_depth=50, detect_cycles=False)
        with pytest.raises(DepthExceededError) as excinfo:
            build_tree("x", lambda m: [m], config=config)
        assert excinfo.value.max_depth == 50

    def test_cycle_error_is_a_forest_error(self):
        with pytest.raises(ForestError):
            build_tree("x", lambda m: [m])

    def test_cycle_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dazzleforestlib"):
            with pytest.raises(CycleDetectedError):
                build_tree("x", lambda m: [m])
        assert "re-derived ancestor" in caplog.text


class TestDepthGuard:

    def test_exact_limit_is_allowed(self):
        root = build_tree(1, chain_children(4), config=BuildConfig(max_depth=3))
        assert helper.count(root) == 4

    def test_one_past_limit_fails(self):
        with pytest.raises(DepthExceededError) as excinfo:
            build_tree(1, chain_children(5), config=BuildConfig(max_depth=3))
        assert excinfo.value.model == 5

    def test_zero_depth_allows_only_root(self):
        config = BuildConfig(max_depth=0)
        assert build_tree(1, lambda n: [], config=config).is_leaf()
        with pytest.raises(DepthExceededError):
            build_tree(1, chain_children(2), config=config)

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigurationError, match="max_depth cannot be negative"):
            ForestBuilder(BuildConfig(max_depth=-1))
