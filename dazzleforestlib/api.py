"""High-level API for DazzleForestLib.

This module provides simple, functional interfaces for common traversal
operations over built trees. These functions wrap ExecutionPlan and
TraversalConfig for ease of use in simple cases.
"""

from dataclasses import fields
from typing import Iterator, Optional, Callable, Any, Union, Tuple, List, Dict

from .core.node import ModelNode
from .config import (
    TraversalConfig,
    TraversalStrategy,
    DataRequirement,
    DepthConfig,
    FilterConfig,
)
from .planning import ExecutionPlan


def traverse_tree(
    root: ModelNode,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    include_filter: Optional[Callable[[ModelNode], bool]] = None,
    exclude_filter: Optional[Callable[[ModelNode], bool]] = None,
    include_root: bool = True,
    on_error: Optional[Callable[[ModelNode, Exception], None]] = None,
    **kwargs
) -> Iterator[ModelNode]:
    """Simple interface for tree traversal.

    Args:
        root: Starting node for traversal
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, level)
        max_depth: Maximum depth to traverse (root = 0)
        min_depth: Minimum depth before yielding nodes
        include_filter: Function to determine if node should be included
        exclude_filter: Function to determine if node (and its branch)
            should be excluded
        include_root: Whether root itself may be yielded
        on_error: Error handler callback; errors are skipped when given
        **kwargs: Additional TraversalConfig attributes

    Yields:
        ModelNode instances that match the criteria

    Raises:
        TypeError: If kwargs names something that is not a TraversalConfig
            field (raised on first iteration)

    Example:
        >>> root = build_tree(1, lambda n: [n * 2, n * 2 + 1] if n < 4 else [])
        >>> [node.model for node in traverse_tree(root, strategy='bfs')]
        [1, 2, 3, 4, 5, 6, 7]
    """
    config = TraversalConfig(
        strategy=_parse_strategy(strategy),
        depth=DepthConfig(
            min_depth=min_depth,
            max_depth=max_depth
        ),
        filter=FilterConfig(
            include_filter=include_filter,
            exclude_filter=exclude_filter
        ),
        include_root=include_root,
        on_error=on_error,
        skip_errors=on_error is not None
    )

    # Power users can set any other config attribute directly
    _apply_overrides(config, kwargs)

    plan = ExecutionPlan(config)

    for node, _ in plan.execute(root):
        yield node


def collect_tree_data(
    root: ModelNode,
    data_requirement: DataRequirement = DataRequirement.MODEL,
    **kwargs
) -> Iterator[Tuple[ModelNode, Any]]:
    """Traverse tree and collect specified data.

    Similar to traverse_tree but yields both nodes and collected data.

    Args:
        root: Starting node for traversal
        data_requirement: What data to collect
        **kwargs: Additional traversal options (see traverse_tree)

    Yields:
        Tuples of (node, collected_data)
    """
    config_kwargs = kwargs.copy()
    config_kwargs['data_requirement'] = data_requirement

    config = _build_config_from_kwargs(**config_kwargs)
    plan = ExecutionPlan(config)

    yield from plan.execute(root)


def count_nodes(root: ModelNode, **kwargs) -> int:
    """Count nodes in a tree that match criteria.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Number of nodes that match criteria
    """
    count = 0
    for _ in traverse_tree(root, **kwargs):
        count += 1
    return count


def find_nodes(
    root: ModelNode,
    predicate: Callable[[ModelNode], bool],
    **kwargs
) -> Iterator[ModelNode]:
    """Find nodes that match a predicate.

    Unlike an exclude filter, a node failing predicate does not hide its
    descendants.
    """
    kwargs['include_filter'] = predicate
    yield from traverse_tree(root, **kwargs)


def get_tree_paths(root: ModelNode, **kwargs) -> Iterator[List[Any]]:
    """Get the models on the path from root to each node.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options (see traverse_tree)

    Yields:
        Lists of models, root model first

    Example:
        >>> for path in get_tree_paths(root, max_depth=2):
        ...     print(" -> ".join(str(model) for model in path))
    """
    for _, path in collect_tree_data(root, DataRequirement.PATH, **kwargs):
        yield path


def get_leaf_nodes(root: ModelNode, **kwargs) -> Iterator[ModelNode]:
    """Get all leaf nodes in a tree, root included if it is a leaf.

    For the leaves strictly below a node use ModelNode.leaf_nodes().
    """
    for node in traverse_tree(root, **kwargs):
        if node.is_leaf():
            yield node


def get_tree_stats(root: ModelNode, **kwargs) -> Dict[str, Any]:
    """Get statistics about a tree.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Dictionary with total_nodes, leaf_nodes, internal_nodes, max_depth,
        depths (node count per depth) and average_branching
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }
    child_total = 0

    for node, info in collect_tree_data(
        root,
        DataRequirement.CHILDREN_COUNT,
        **kwargs
    ):
        depth = info['depth']
        stats['total_nodes'] += 1

        if info['is_leaf']:
            stats['leaf_nodes'] += 1
        else:
            child_total += info['child_count']

        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    stats['average_branching'] = (
        child_total / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )

    return stats


# Helper functions

def _parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum.

    Raises:
        ValueError: If the name is not a known strategy
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_map = {
        'bfs': TraversalStrategy.BREADTH_FIRST,
        'breadth_first': TraversalStrategy.BREADTH_FIRST,
        'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
        'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
        'level': TraversalStrategy.LEVEL_ORDER,
        'level_order': TraversalStrategy.LEVEL_ORDER,
    }

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in strategy_map:
        return strategy_map[strategy_lower]

    raise ValueError(f"Unknown traversal strategy: {strategy}")


def _build_config_from_kwargs(**kwargs) -> TraversalConfig:
    """Build TraversalConfig from keyword arguments."""
    config = TraversalConfig()

    if 'strategy' in kwargs:
        config.strategy = _parse_strategy(kwargs.pop('strategy'))

    if 'max_depth' in kwargs:
        config.depth.max_depth = kwargs.pop('max_depth')

    if 'min_depth' in kwargs:
        config.depth.min_depth = kwargs.pop('min_depth')

    if 'include_filter' in kwargs:
        config.filter.include_filter = kwargs.pop('include_filter')

    if 'exclude_filter' in kwargs:
        config.filter.exclude_filter = kwargs.pop('exclude_filter')

    if 'data_requirement' in kwargs:
        config.data_requirements = kwargs.pop('data_requirement')

    if 'on_error' in kwargs:
        config.on_error = kwargs.pop('on_error')
        config.skip_errors = True

    _apply_overrides(config, kwargs)
    return config


def _apply_overrides(config: TraversalConfig, overrides: Dict[str, Any]) -> None:
    """Set TraversalConfig fields by name.

    Raises:
        TypeError: If a name is not a TraversalConfig field, so a typo such
            as max_dpeth=2 fails instead of silently walking everything
    """
    known = {f.name for f in fields(config)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise TypeError(f"Unknown traversal option(s): {', '.join(unknown)}")

    for key, value in overrides.items():
        setattr(config, key, value)
