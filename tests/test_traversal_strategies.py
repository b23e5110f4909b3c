"""Unit tests for traversal strategies and depth bounds.

Tests the different traversal algorithms against a small tree with a known
shape, so exact visiting orders can be asserted.
"""

import unittest

from dazzleforestlib import ModelNode, build_tree
from dazzleforestlib.core.traverser import (
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
)


class TestTraversalStrategies(unittest.TestCase):
    """Test different traversal strategies."""

    def setUp(self):
        """Create a test tree structure.

        root
          a
            a1
            a2
          b
            b1
              b1a
            b2
          c
        """
        self.root = ModelNode("root")
        a, b, _ = self.root.add_children(["a", "b", "c"])
        a.add_children(["a1", "a2"])
        b1, _ = b.add_children(["b1", "b2"])
        b1.add_child("b1a")

    def walk(self, traverser, **kwargs):
        return [(node.model, depth) for node, depth in traverser.traverse(self.root, **kwargs)]

    def test_breadth_first_traversal(self):
        self.assertEqual(
            [m for m, _ in self.walk(BreadthFirstTraverser())],
            ["root", "a", "b", "c", "a1", "a2", "b1", "b2", "b1a"],
        )

    def test_breadth_first_depths_never_decrease(self):
        depths = [d for _, d in self.walk(BreadthFirstTraverser())]
        self.assertEqual(depths, sorted(depths))

    def test_depth_first_pre_order(self):
        self.assertEqual(
            self.walk(DepthFirstPreOrderTraverser()),
            [("root", 0), ("a", 1), ("a1", 2), ("a2", 2), ("b", 1),
             ("b1", 2), ("b1a", 3), ("b2", 2), ("c", 1)],
        )

    def test_depth_first_post_order(self):
        self.assertEqual(
            [m for m, _ in self.walk(DepthFirstPostOrderTraverser())],
            ["a1", "a2", "a", "b1a", "b1", "b2", "b", "c", "root"],
        )

    def test_level_order_matches_breadth_first(self):
        self.assertEqual(
            self.walk(LevelOrderTraverser()),
            self.walk(BreadthFirstTraverser()),
        )

    def test_max_depth(self):
        for traverser in (BreadthFirstTraverser(), DepthFirstPreOrderTraverser(),
                          DepthFirstPostOrderTraverser(), LevelOrderTraverser()):
            with self.subTest(traverser=traverser.__class__.__name__):
                visited = self.walk(traverser, max_depth=1)
                self.assertEqual(sorted(m for m, _ in visited), ["a", "b", "c", "root"])

    def test_min_depth(self):
        visited = self.walk(DepthFirstPreOrderTraverser(), min_depth=2)
        self.assertEqual([m for m, _ in visited], ["a1", "a2", "b1", "b1a", "b2"])

    def test_depth_window(self):
        visited = self.walk(BreadthFirstTraverser(), min_depth=1, max_depth=1)
        self.assertEqual([m for m, _ in visited], ["a", "b", "c"])

    def test_deep_chain(self):
        """Iterative traversers handle chains beyond the recursion limit."""
        from dazzleforestlib import BuildConfig
        root = build_tree(0, lambda n: [n + 1] if n < 3000 else [],
                          config=BuildConfig(max_depth=None, detect_cycles=False))

        for traverser in (DepthFirstPreOrderTraverser(), DepthFirstPostOrderTraverser()):
            with self.subTest(traverser=traverser.__class__.__name__):
                self.assertEqual(sum(1 for _ in traverser.traverse(root)), 3001)


class TestCreateTraverser(unittest.TestCase):

    def test_known_names(self):
        expected = {
            'bfs': BreadthFirstTraverser,
            'BREADTH_FIRST': BreadthFirstTraverser,
            'dfs_pre': DepthFirstPreOrderTraverser,
            'depth_first_post': DepthFirstPostOrderTraverser,
            'level_order': LevelOrderTraverser,
        }
        for name, cls in expected.items():
            with self.subTest(name=name):
                self.assertIsInstance(create_traverser(name), cls)

    def test_unknown_name(self):
        with self.assertRaises(ValueError) as ctx:
            create_traverser('zigzag')
        self.assertIn('zigzag', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
