"""Execution planning for DazzleForestLib.

The ExecutionPlan validates a TraversalConfig and coordinates the actual
traversal: it picks the traverser and collector, applies filters, depth
bounds and node limits, and routes errors to the configured handler.
"""

import logging
from typing import Any, Dict, Iterator, List, Tuple

from .core.node import ModelNode
from .core.traverser import TreeTraverser, create_traverser
from .core.collector import (
    DataCollector,
    ModelCollector,
    KeyCollector,
    FullNodeCollector,
    ChildCountCollector,
    PathCollector,
)
from .config import TraversalConfig, DataRequirement, TraversalStrategy
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class ExecutionPlan:
    """Validated execution plan for tree traversal.

    The ExecutionPlan is the bridge between user intent (TraversalConfig)
    and execution. Validation happens in the constructor, before any node
    is visited.
    """

    def __init__(self, config: TraversalConfig):
        """Create and validate an execution plan.

        Args:
            config: User's traversal configuration

        Raises:
            ConfigurationError: If the configuration is inconsistent
        """
        self.config = config

        config_errors = config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.traverser = self._select_traverser()
        self.collector = self._select_collector()

        # Track execution state
        self.nodes_processed = 0
        self.errors_encountered: List[Tuple[Any, str]] = []
        self._pruned: Dict[int, bool] = {}

    def _select_traverser(self) -> TreeTraverser:
        """Select appropriate traverser based on configuration."""
        if self.config.strategy == TraversalStrategy.CUSTOM:
            return self.config.custom_traverser

        strategy_map = {
            TraversalStrategy.BREADTH_FIRST: "bfs",
            TraversalStrategy.DEPTH_FIRST_PRE: "dfs_pre",
            TraversalStrategy.DEPTH_FIRST_POST: "dfs_post",
            TraversalStrategy.LEVEL_ORDER: "level"
        }

        return create_traverser(strategy_map[self.config.strategy])

    def _select_collector(self) -> DataCollector:
        """Select appropriate data collector based on requirements."""
        requirement = self.config.data_requirements
        if requirement == DataRequirement.CUSTOM:
            return self.config.custom_collector
        if requirement == DataRequirement.KEY:
            return KeyCollector(self.config.key_of)

        collector_map = {
            DataRequirement.MODEL: ModelCollector,
            DataRequirement.FULL_NODE: FullNodeCollector,
            DataRequirement.CHILDREN_COUNT: ChildCountCollector,
            DataRequirement.PATH: PathCollector,
        }

        return collector_map[requirement]()

    def _is_pruned(self, node: ModelNode, root: ModelNode) -> bool:
        """True if some ancestor of node (below or at root) pruned its branch.

        Results are memoised per node, so each parent's exclude filter runs
        at most once per execution whatever order the traverser uses.
        """
        chain = []
        current = node
        while current is not None and current is not root and id(current) not in self._pruned:
            chain.append(current)
            current = current.parent

        if current is None or current is root:
            hidden = False
        else:
            hidden = self._pruned[id(current)]

        for pending in reversed(chain):
            hidden = hidden or not self.config.filter.should_explore_children(pending.parent)
            self._pruned[id(pending)] = hidden
        return hidden

    def _handle_error(self, node: ModelNode, error: Exception) -> None:
        """Handle an error raised by a filter or collector.

        Args:
            node: Node where error occurred
            error: The exception that was raised

        Raises:
            The original error, unless skip_errors is set
        """
        self.errors_encountered.append((node.model, str(error)))

        if self.config.on_error:
            self.config.on_error(node, error)

        if not self.config.skip_errors:
            raise error

        logger.warning("Skipping node %r after error: %s", node.model, error)

    def execute(self, root: ModelNode) -> Iterator[Tuple[ModelNode, Any]]:
        """Execute the traversal plan.

        Args:
            root: Root node to start traversal from

        Yields:
            Tuples of (node, collected_data)
        """
        self.nodes_processed = 0
        self.errors_encountered = []
        self._pruned = {}
        max_nodes = self.config.max_nodes
        min_depth, max_depth = self.config.depth.traversal_bounds()

        for node, depth in self.traverser.traverse(
            root,
            max_depth=max_depth,
            min_depth=min_depth
        ):
            if max_nodes is not None and self.nodes_processed >= max_nodes:
                logger.debug("Stopping after max_nodes=%d", max_nodes)
                break

            if node is root and not self.config.include_root:
                continue

            if not self.config.depth.should_yield(depth):
                continue

            try:
                if self._is_pruned(node, root):
                    continue

                if not self.config.filter.should_include(node):
                    continue

                data = self.collector.collect(node, depth)
            except Exception as e:
                self._handle_error(node, e)
                continue

            self.nodes_processed += 1
            yield (node, data)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan.

        Useful for debugging and logging.

        Returns:
            Dictionary with plan details
        """
        return {
            'strategy': self.config.strategy.value,
            'data_requirements': self.config.data_requirements.value,
            'max_depth': self.config.depth.max_depth,
            'min_depth': self.config.depth.min_depth,
            'include_root': self.config.include_root,
            'max_nodes': self.config.max_nodes,
            'traverser': self.traverser.__class__.__name__,
            'collector': self.collector.__class__.__name__,
        }
