"""Core components of DazzleForestLib.

The node type, the forest builder, traversal, structural copy and data
collectors.
"""

from .node import ModelNode
from .builder import ForestBuilder, build_tree, build_forest, build_from_relation
from .traverser import (
    TreeTraverser,
    BreadthFirstTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    LevelOrderTraverser,
    create_traverser,
    iter_descendants,
    iter_non_leaf_nodes,
    iter_leaf_nodes,
)
from .copier import copy_tree
from .collector import DataCollector

__all__ = [
    "ModelNode",
    "ForestBuilder",
    "build_tree",
    "build_forest",
    "build_from_relation",
    "TreeTraverser",
    "BreadthFirstTraverser",
    "DepthFirstPreOrderTraverser",
    "DepthFirstPostOrderTraverser",
    "LevelOrderTraverser",
    "create_traverser",
    "iter_descendants",
    "iter_non_leaf_nodes",
    "iter_leaf_nodes",
    "copy_tree",
    "DataCollector",
]
