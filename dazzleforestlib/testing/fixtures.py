"""Test fixtures for DazzleForestLib consumers.

These helpers give test suites a stable way to describe and compare trees
without depending on node identity or on how the library stores children.
"""

import random
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.node import ModelNode
from ..core.traverser import iter_descendants


def record(key: Any, parent: Any = None, **extra: Any) -> Dict[str, Any]:
    """Create a flat relation record: {'id': key, 'parent': parent, ...}."""
    row = {'id': key, 'parent': parent}
    row.update(extra)
    return row


def record_key(row: Dict[str, Any]) -> Any:
    """Key function for records created by record()."""
    return row['id']


def record_parent(row: Dict[str, Any]) -> Any:
    """Parent key function for records created by record()."""
    return row['parent']


def random_relation(size: int,
                    seed: int = 0,
                    root_share: float = 0.1) -> List[Dict[str, Any]]:
    """Generate a shuffled, acyclic relation of size records.

    Each record's parent is chosen among the records generated before it
    (or None), then the list is shuffled so parents do not precede their
    children.

    Args:
        size: Number of records
        seed: Random seed, for reproducible suites
        root_share: Probability that a record is a root
    """
    rng = random.Random(seed)
    rows = []
    for key in range(1, size + 1):
        if key == 1 or rng.random() < root_share:
            parent = None
        else:
            parent = rng.randint(1, key - 1)
        rows.append(record(key, parent))
    rng.shuffle(rows)
    return rows


def chain_children(length: int) -> Callable[[int], List[int]]:
    """children_of for a chain 1 -> 2 -> ... -> length."""
    def children_of(n: int) -> List[int]:
        return [n + 1] if n < length else []
    return children_of


class ForestTestHelper:
    """Public test fixture for inspecting built trees.

    Example:
        helper = ForestTestHelper(key_of=record_key)
        assert helper.shape(root) == (1, ((2, ((4, ()),)), (3, ())))
        assert helper.count(root) == 4
    """

    def __init__(self, key_of: Optional[Callable[[Any], Any]] = None):
        """Initialize the helper.

        Args:
            key_of: How to label models in shapes (default: the model itself)
        """
        self.key_of = key_of or (lambda model: model)

    def label(self, node: ModelNode) -> Any:
        """The label used for node in shapes and listings."""
        return self.key_of(node.model)

    def shape(self, node: ModelNode) -> Tuple[Any, Tuple]:
        """Nested (label, children) tuples describing the subtree at node.

        Built bottom-up without recursion, so very deep chains are fine.
        """
        shapes: Dict[int, Tuple[Any, Tuple]] = {}
        order = [node] + list(iter_descendants(node))
        for current in reversed(order):
            shapes[id(current)] = (
                self.label(current),
                tuple(shapes[id(child)] for child in current.children),
            )
        return shapes[id(node)]

    def counts_shape(self, node: ModelNode) -> Tuple[int, Tuple]:
        """Like shape() but with child counts instead of labels."""
        shapes: Dict[int, Tuple[int, Tuple]] = {}
        order = [node] + list(iter_descendants(node))
        for current in reversed(order):
            shapes[id(current)] = (
                len(current),
                tuple(shapes[id(child)] for child in current.children),
            )
        return shapes[id(node)]

    def count(self, node: ModelNode) -> int:
        """Number of nodes in the subtree at node, node included."""
        return 1 + sum(1 for _ in iter_descendants(node))

    def labels(self, nodes) -> List[Any]:
        """Labels of the given nodes, in iteration order."""
        return [self.label(node) for node in nodes]

    def parent_labels(self, roots: List[ModelNode]) -> Dict[Any, Any]:
        """Map every node label in the forest to its parent's label (None for roots)."""
        mapping = {}
        for root in roots:
            mapping[self.label(root)] = None
            for node in iter_descendants(root):
                mapping[self.label(node)] = self.label(node.parent)
        return mapping

    def assert_links_consistent(self, root: ModelNode) -> None:
        """Assert every child's parent is the node that lists it."""
        for node in [root] + list(iter_descendants(root)):
            for child in node.children:
                assert child.parent is node, (
                    f"{self.label(child)!r} lists parent "
                    f"{self.label(child.parent) if child.parent else None!r}, "
                    f"expected {self.label(node)!r}"
                )
            ids = [id(child) for child in node.children]
            assert len(ids) == len(set(ids)), f"Duplicate child under {self.label(node)!r}"
