"""Tests for the public testing helpers shipped in dazzleforestlib.testing."""

import pytest

from dazzleforestlib import ModelNode
from dazzleforestlib.testing import ForestTestHelper, chain_children, random_relation, record


def test_record_extra_fields():
    assert record(3, 1, name="leaf") == {"id": 3, "parent": 1, "name": "leaf"}


def test_random_relation_is_reproducible_and_acyclic():
    rows = random_relation(30, seed=7)
    assert rows == random_relation(30, seed=7)
    assert sorted(r["id"] for r in rows) == list(range(1, 31))
    for row in rows:
        assert row["parent"] is None or row["parent"] < row["id"]


def test_chain_children():
    children_of = chain_children(3)
    assert [children_of(n) for n in (1, 2, 3)] == [[2], [3], []]


def test_shape_and_counts(sample_tree, helper):
    assert helper.shape(sample_tree) == (1, ((2, ((4, ()),)), (3, ())))
    assert helper.counts_shape(sample_tree) == (2, ((1, ((0, ()),)), (0, ())))
    assert helper.count(sample_tree) == 4


def test_parent_labels(sample_tree, helper):
    assert helper.parent_labels([sample_tree]) == {1: None, 2: 1, 3: 1, 4: 2}


def test_assert_links_consistent_catches_foreign_child():
    root = ModelNode("root")
    stranger = ModelNode("stranger")
    # Simulate corruption that the public API cannot produce
    root._children.append(stranger)

    with pytest.raises(AssertionError, match="stranger"):
        ForestTestHelper().assert_links_consistent(root)
