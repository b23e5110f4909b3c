"""Tree traversal for DazzleForestLib.

Two layers live here:

- iter_descendants / iter_non_leaf_nodes / iter_leaf_nodes: the lazy
  depth-first walks below a node (the node itself is never yielded).
- TreeTraverser strategies: breadth-first, depth-first pre/post-order and
  level-order walks that include the root and yield (node, depth) pairs,
  with optional depth bounds. ExecutionPlan drives these.

Everything is iterative, so arbitrarily deep trees never hit Python's
recursion limit. Children are visited in insertion order.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterator, List, Optional, Set, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import ModelNode


def _preorder_below(tree: 'ModelNode') -> Iterator['ModelNode']:
    """Pre-order walk of everything under tree, tree excluded."""
    stack: List['ModelNode'] = list(reversed(tree.children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_descendants(tree: 'ModelNode') -> Iterator['ModelNode']:
    """Yield every node below tree, depth first.

    Each child is yielded before its own subtree, and its whole subtree
    before the next sibling. tree itself is not yielded.

    Args:
        tree: Node whose descendants to walk

    Yields:
        Descendant nodes in depth-first pre-order
    """
    yield from _preorder_below(tree)


def iter_non_leaf_nodes(tree: 'ModelNode') -> Iterator['ModelNode']:
    """Yield the descendants of tree that have at least one child.

    The walk still passes through leaf siblings, so every internal node
    below tree is reached.
    """
    for node in _preorder_below(tree):
        if not node.is_leaf():
            yield node


def iter_leaf_nodes(tree: 'ModelNode') -> Iterator['ModelNode']:
    """Yield the descendants of tree that have no children."""
    for node in _preorder_below(tree):
        if node.is_leaf():
            yield node


class TreeTraverser(ABC):
    """Abstract base class for tree traversal strategies.

    Traversers implement the algorithms for walking through trees in
    different orders (breadth-first, depth-first, etc.). Unlike the
    iter_* functions, they start at (and may yield) the root.
    """

    @abstractmethod
    def traverse(self,
                 root: 'ModelNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['ModelNode', int]]:
        """Traverse the tree starting from root.

        Args:
            root: Starting node for traversal
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding nodes

        Yields:
            Tuples of (node, depth) where depth is relative to root
        """
        pass

    def _should_yield(self, depth: int, min_depth: int, max_depth: Optional[int]) -> bool:
        """Check if a node at given depth should be yielded."""
        if depth < min_depth:
            return False
        if max_depth is not None and depth > max_depth:
            return False
        return True

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        """Check if children of node at given depth should be explored."""
        if max_depth is None:
            return True
        return depth < max_depth


class BreadthFirstTraverser(TreeTraverser):
    """Breadth-first (level-order) traversal strategy.

    Visits all nodes at depth N before visiting nodes at depth N+1.
    """

    def traverse(self,
                 root: 'ModelNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['ModelNode', int]]:
        queue: Deque[Tuple['ModelNode', int]] = deque([(root, 0)])
        visited: Set[int] = set()

        while queue:
            node, depth = queue.popleft()

            # Skip if already visited
            if id(node) in visited:
                continue
            visited.add(id(node))

            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)

            if self._should_explore(depth, max_depth) and not node.is_leaf():
                for child in node.children:
                    queue.append((child, depth + 1))


class DepthFirstPreOrderTraverser(TreeTraverser):
    """Depth-first pre-order traversal strategy.

    Visits parent before children. Good for copying trees or printing
    outlines.
    """

    def traverse(self,
                 root: 'ModelNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['ModelNode', int]]:
        stack: List[Tuple['ModelNode', int]] = [(root, 0)]
        visited: Set[int] = set()

        while stack:
            node, depth = stack.pop()
            if id(node) in visited:
                continue
            visited.add(id(node))

            # Yield parent first (pre-order)
            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)

            if self._should_explore(depth, max_depth) and not node.is_leaf():
                for child in reversed(node.children):
                    stack.append((child, depth + 1))


class DepthFirstPostOrderTraverser(TreeTraverser):
    """Depth-first post-order traversal strategy.

    Visits children before parent. Processes nodes after their entire
    subtree has been processed. Good for aggregate values.
    """

    def traverse(self,
                 root: 'ModelNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['ModelNode', int]]:
        # Each entry is (node, depth, expanded); a node is yielded the
        # second time it is popped, once its children are done.
        stack: List[Tuple['ModelNode', int, bool]] = [(root, 0, False)]
        visited: Set[int] = set()

        while stack:
            node, depth, expanded = stack.pop()

            if expanded:
                if self._should_yield(depth, min_depth, max_depth):
                    yield (node, depth)
                continue

            if id(node) in visited:
                continue
            visited.add(id(node))

            stack.append((node, depth, True))
            if self._should_explore(depth, max_depth) and not node.is_leaf():
                for child in reversed(node.children):
                    stack.append((child, depth + 1, False))


class LevelOrderTraverser(TreeTraverser):
    """Level-order traversal with level grouping.

    Similar to breadth-first but builds each level completely before
    moving on. Useful when you need to process all nodes at a depth
    together.
    """

    def traverse(self,
                 root: 'ModelNode',
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple['ModelNode', int]]:
        current_level: List['ModelNode'] = [root]
        current_depth = 0
        visited: Set[int] = set()

        while current_level and (max_depth is None or current_depth <= max_depth):
            next_level: List['ModelNode'] = []

            for node in current_level:
                if id(node) in visited:
                    continue
                visited.add(id(node))

                if self._should_yield(current_depth, min_depth, max_depth):
                    yield (node, current_depth)

                if self._should_explore(current_depth, max_depth) and not node.is_leaf():
                    next_level.extend(node.children)

            current_level = next_level
            current_depth += 1


def create_traverser(strategy: str) -> TreeTraverser:
    """Create a traverser instance by strategy name.

    Args:
        strategy: Name of traversal strategy (bfs, dfs_pre, dfs_post, level)

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategies = {
        'bfs': BreadthFirstTraverser,
        'breadth_first': BreadthFirstTraverser,
        'dfs_pre': DepthFirstPreOrderTraverser,
        'depth_first_pre': DepthFirstPreOrderTraverser,
        'dfs_post': DepthFirstPostOrderTraverser,
        'depth_first_post': DepthFirstPostOrderTraverser,
        'level': LevelOrderTraverser,
        'level_order': LevelOrderTraverser,
    }

    strategy_lower = strategy.lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower]()
