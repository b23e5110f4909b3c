"""ModelNode - the building block of every DazzleForestLib tree.

A ModelNode wraps one caller-supplied model, owns its children and keeps a
back-reference to its parent. Nodes are only ever created through
ModelNode(model) for roots and add_child() for everything else, so the
parent/child links can never disagree.
"""

from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple


class ModelNode:
    """A node in a model tree.

    Each node has:
    - model: The wrapped record (any object, set once)
    - parent: The node that owns this one, or None for a root
    - children: Child nodes in insertion order

    Nodes compare and hash by identity. Two nodes wrapping equal models are
    still two distinct nodes, which is what lets a tree hold the same value
    in several places.

    Example:
        >>> root = ModelNode('root')
        >>> child = root.add_child('child')
        >>> child.parent is root
        True
        >>> [c.model for c in root.children]
        ['child']
    """

    __slots__ = ('_model', '_parent', '_children')

    def __init__(self, model: Any):
        """Create a parentless node with no children.

        Args:
            model: The record this node wraps
        """
        self._model = model
        self._parent: Optional['ModelNode'] = None
        self._children: List['ModelNode'] = []

    @property
    def model(self) -> Any:
        """The wrapped model."""
        return self._model

    @property
    def parent(self) -> Optional['ModelNode']:
        """The owning node, or None for a root.

        This link is only used for upward navigation.
        """
        return self._parent

    @property
    def children(self) -> Tuple['ModelNode', ...]:
        """Child nodes in the order they were added."""
        return tuple(self._children)

    # Construction

    def add_child(self, model: Any) -> 'ModelNode':
        """Wrap model in a new node and attach it as the last child.

        Args:
            model: The record for the new child

        Returns:
            The newly created child node
        """
        child = ModelNode(model)
        child._parent = self
        self._children.append(child)
        return child

    def add_children(self, models: Iterable[Any]) -> List['ModelNode']:
        """Attach a new child for each model, in iteration order.

        Args:
            models: Records for the new children

        Returns:
            The new child nodes, in the same order as models
        """
        return [self.add_child(model) for model in models]

    # Navigation

    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self._children

    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self._parent is None

    def ancestors(self) -> Iterator['ModelNode']:
        """Walk upwards, yielding the parent first and the root last."""
        current = self._parent
        while current is not None:
            yield current
            current = current._parent

    def depth(self) -> int:
        """Number of edges between this node and its root (root = 0)."""
        return sum(1 for _ in self.ancestors())

    def root(self) -> 'ModelNode':
        """The root of the tree containing this node."""
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    def path(self) -> List['ModelNode']:
        """Nodes from the root down to (and including) this node."""
        nodes = list(self.ancestors())
        nodes.reverse()
        nodes.append(self)
        return nodes

    def siblings(self) -> List['ModelNode']:
        """The parent's other children, in order. Empty for a root."""
        if self._parent is None:
            return []
        return [child for child in self._parent._children if child is not self]

    # Traversal and copy shortcuts

    def descendants(self) -> Iterator['ModelNode']:
        """Every node below this one, depth first. See iter_descendants."""
        from .traverser import iter_descendants
        return iter_descendants(self)

    def non_leaf_nodes(self) -> Iterator['ModelNode']:
        """Descendants that have children. See iter_non_leaf_nodes."""
        from .traverser import iter_non_leaf_nodes
        return iter_non_leaf_nodes(self)

    def leaf_nodes(self) -> Iterator['ModelNode']:
        """Descendants without children. See iter_leaf_nodes."""
        from .traverser import iter_leaf_nodes
        return iter_leaf_nodes(self)

    def copy(self, predicate: Callable[['ModelNode'], bool]) -> 'ModelNode':
        """Copy this subtree, keeping only branches that pass predicate.

        See copy_tree for the exact rules.
        """
        from .copier import copy_tree
        return copy_tree(self, predicate)

    def __len__(self) -> int:
        """Number of immediate children."""
        return len(self._children)

    def __iter__(self) -> Iterator['ModelNode']:
        """Iterate over immediate children."""
        return iter(tuple(self._children))

    def __bool__(self) -> bool:
        # A leaf is still a node; don't let __len__ make it falsy.
        return True

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"ModelNode(model={self._model!r}, children={len(self._children)})"
