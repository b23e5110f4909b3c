"""DazzleForestLib - build, walk and prune in-memory model trees.

DazzleForestLib turns caller data into linked ModelNode trees and gives you
lazy traversals and filtered copies over them.

Build:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from dazzleforestlib import build_tree, build_forest, build_from_relation

    root = build_tree(model, children_of)
    roots = build_from_relation(rows, key_of, parent_key_of)
━━━━━━━━━━━━━━━━━━━━━━━━━━

Walk and copy:
    root.descendants(), root.leaf_nodes(), root.non_leaf_nodes()
    root.copy(predicate)
    traverse_tree(root, strategy='bfs', max_depth=2)
"""

import logging

__version__ = "0.1.0"

from .core.node import ModelNode
from .core.builder import ForestBuilder, build_tree, build_forest, build_from_relation
from .core.traverser import (
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
from .core.copier import copy_tree
from .core.collector import (
    DataCollector,
    ModelCollector,
    KeyCollector,
    FullNodeCollector,
    ChildCountCollector,
    PathCollector,
    AggregateCollector,
    SumCollector,
    MaxCollector,
    CustomCollector,
)
from .config import (
    BuildConfig,
    RelationLookup,
    TraversalConfig,
    TraversalStrategy,
    DataRequirement,
    FilterConfig,
    DepthConfig,
)
from .errors import (
    ForestError,
    InvalidArgumentError,
    CycleDetectedError,
    DepthExceededError,
    ConfigurationError,
)
from .planning import ExecutionPlan
from .api import (
    traverse_tree,
    collect_tree_data,
    count_nodes,
    find_nodes,
    get_tree_paths,
    get_leaf_nodes,
    get_tree_stats,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Core
    'ModelNode',
    'ForestBuilder',
    'build_tree',
    'build_forest',
    'build_from_relation',
    'TreeTraverser',
    'BreadthFirstTraverser',
    'DepthFirstPreOrderTraverser',
    'DepthFirstPostOrderTraverser',
    'LevelOrderTraverser',
    'create_traverser',
    'iter_descendants',
    'iter_non_leaf_nodes',
    'iter_leaf_nodes',
    'copy_tree',
    'DataCollector',
    'ModelCollector',
    'KeyCollector',
    'FullNodeCollector',
    'ChildCountCollector',
    'PathCollector',
    'AggregateCollector',
    'SumCollector',
    'MaxCollector',
    'CustomCollector',
    # Config
    'BuildConfig',
    'RelationLookup',
    'TraversalConfig',
    'TraversalStrategy',
    'DataRequirement',
    'FilterConfig',
    'DepthConfig',
    # Errors
    'ForestError',
    'InvalidArgumentError',
    'CycleDetectedError',
    'DepthExceededError',
    'ConfigurationError',
    # Planning / API
    'ExecutionPlan',
    'traverse_tree',
    'collect_tree_data',
    'count_nodes',
    'find_nodes',
    'get_tree_paths',
    'get_leaf_nodes',
    'get_tree_stats',
]
