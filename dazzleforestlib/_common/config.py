"""Configuration system for DazzleForestLib.

This module defines how users specify their build and traversal requirements:
how forests are grown from flat relations, what data to collect from nodes,
how to filter nodes, and how deep to go.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Callable, Set, Any, List, Tuple


class RelationLookup(Enum):
    """How build_from_relation finds the children of a node.

    Both strategies produce the same forest; they differ only in cost.
    """
    SCAN = "scan"      # Rescan every model per node, O(N^2), keys compared with ==
    INDEX = "index"    # Group once by parent key, O(N), keys must be hashable


class DataRequirement(Enum):
    """Specifies what data is collected from each visited node."""
    MODEL = "model"                      # The wrapped model
    KEY = "key"                          # key_of(model), see TraversalConfig.key_of
    FULL_NODE = "full"                   # The node object itself
    CHILDREN_COUNT = "children_count"    # Number of immediate children
    PATH = "path"                        # Models from the root down to the node
    CUSTOM = "custom"                    # User-defined collection


class TraversalStrategy(Enum):
    """How to walk the tree."""
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    LEVEL_ORDER = "level"           # Grouped by level
    CUSTOM = "custom"               # User-defined traverser


@dataclass
class BuildConfig:
    """Configuration for the forest builder."""

    max_depth: Optional[int] = 1000             # Deepest level a build may reach (None = unlimited)
    detect_cycles: bool = True                  # Check each new model against its ancestors
    relation_lookup: RelationLookup = RelationLookup.INDEX

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if self.max_depth is not None and self.max_depth < 0:
            errors.append("max_depth cannot be negative")
        if not isinstance(self.relation_lookup, RelationLookup):
            errors.append(f"relation_lookup must be a RelationLookup, got {self.relation_lookup!r}")
        return errors


@dataclass
class FilterConfig:
    """Configuration for filtering nodes during traversal."""

    include_filter: Optional[Callable[[Any], bool]] = None  # Include predicate
    exclude_filter: Optional[Callable[[Any], bool]] = None  # Exclude predicate

    # Pruning behavior
    prune_on_exclude: bool = True  # Don't traverse excluded branches

    def should_include(self, node) -> bool:
        """Check if a node should be included based on filters.

        Args:
            node: Node to check

        Returns:
            True if node passes all filters
        """
        # Exclusion takes precedence
        if self.exclude_filter and self.exclude_filter(node):
            return False

        if self.include_filter:
            return self.include_filter(node)

        return True

    def should_explore_children(self, node) -> bool:
        """Check if children of a node should be explored.

        Only an exclude_filter hit prunes a branch; nodes that merely fail
        the include_filter are still walked through.
        """
        if not self.prune_on_exclude:
            return True
        return not (self.exclude_filter and self.exclude_filter(node))


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering."""

    min_depth: int = 0                          # Minimum depth to yield
    max_depth: Optional[int] = None             # Maximum depth to traverse
    specific_depths: Optional[Set[int]] = None  # Only these specific depths

    def should_yield(self, depth: int) -> bool:
        """Check if nodes at this depth should be yielded."""
        if self.specific_depths is not None:
            return depth in self.specific_depths

        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False

        return True

    def traversal_bounds(self) -> Tuple[int, Optional[int]]:
        """(min_depth, max_depth) to hand to a traverser.

        With specific_depths set, nothing below the deepest wanted level is
        walked; an empty set walks nothing at all.
        """
        if self.specific_depths is not None:
            return 0, max(self.specific_depths, default=-1)
        return self.min_depth, self.max_depth


@dataclass
class TraversalConfig:
    """Complete configuration for tree traversal.

    This is the primary way users specify what they want from a traversal.
    The ExecutionPlan validates it before anything is visited.
    """

    # Traversal algorithm
    strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST_PRE
    custom_traverser: Optional[Any] = None  # Custom traverser instance

    # Depth control
    depth: DepthConfig = field(default_factory=DepthConfig)

    # Node filtering
    filter: FilterConfig = field(default_factory=FilterConfig)
    include_root: bool = True

    # Data collection
    data_requirements: DataRequirement = DataRequirement.MODEL
    custom_collector: Optional[Any] = None  # Custom collector instance
    key_of: Optional[Callable[[Any], Any]] = None  # Used by DataRequirement.KEY

    # Limits
    max_nodes: Optional[int] = None

    # Error handling
    on_error: Optional[Callable[[Any, Exception], None]] = None
    skip_errors: bool = False  # Continue on errors vs fail fast

    @classmethod
    def shallow_scan(cls, max_depth: int = 1) -> 'TraversalConfig':
        """Create config for visiting only the top levels of a tree.

        Args:
            max_depth: How deep to go (default 1 = immediate children only)
        """
        return cls(
            strategy=TraversalStrategy.BREADTH_FIRST,
            depth=DepthConfig(max_depth=max_depth),
        )

    @classmethod
    def leaves_only(cls) -> 'TraversalConfig':
        """Create config that yields the leaves below the root, depth first."""
        return cls(
            strategy=TraversalStrategy.DEPTH_FIRST_PRE,
            filter=FilterConfig(include_filter=lambda node: node.is_leaf()),
            include_root=False,
        )

    @classmethod
    def deep_scan(cls, data_requirement: DataRequirement = DataRequirement.MODEL) -> 'TraversalConfig':
        """Create config for a full post-order walk (children before parents).

        Args:
            data_requirement: What data to collect
        """
        return cls(
            strategy=TraversalStrategy.DEPTH_FIRST_POST,
            data_requirements=data_requirement,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.max_nodes is not None and self.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if self.strategy == TraversalStrategy.CUSTOM and self.custom_traverser is None:
            errors.append("custom_traverser required when strategy is CUSTOM")

        if self.data_requirements == DataRequirement.CUSTOM and self.custom_collector is None:
            errors.append("custom_collector required when data_requirements is CUSTOM")

        if self.data_requirements == DataRequirement.KEY and self.key_of is None:
            errors.append("key_of required when data_requirements is KEY")

        return errors
