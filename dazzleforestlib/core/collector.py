"""Data collection strategies for DazzleForestLib.

DataCollectors define what information to extract from nodes during
traversal. This allows the same traversal to collect different data based
on requirements.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import ModelNode


class DataCollector(ABC):
    """Abstract base class for data collection strategies.

    DataCollectors determine what information is extracted from each node
    during traversal. This separation allows the same traversal algorithm
    to be used for different purposes (e.g., collecting just models vs.
    full paths vs. aggregated statistics).
    """

    @abstractmethod
    def collect(self, node: 'ModelNode', depth: int) -> Any:
        """Collect data from a node.

        Args:
            node: The node to collect data from
            depth: Current depth in traversal

        Returns:
            Collected data (type depends on collector)
        """
        pass


class ModelCollector(DataCollector):
    """Collects the model wrapped by each node."""

    def collect(self, node: 'ModelNode', depth: int) -> Any:
        return node.model


class KeyCollector(DataCollector):
    """Collects key_of(model) for each node.

    Handy for trees built from a relation, where the key is what callers
    use to talk about records.
    """

    def __init__(self, key_of: Callable[[Any], Any]):
        """Initialize with the key function.

        Args:
            key_of: Function(model) -> key
        """
        self.key_of = key_of

    def collect(self, node: 'ModelNode', depth: int) -> Any:
        return self.key_of(node.model)


class FullNodeCollector(DataCollector):
    """Collects the node objects themselves."""

    def collect(self, node: 'ModelNode', depth: int) -> 'ModelNode':
        return node


class ChildCountCollector(DataCollector):
    """Collects nodes with child count information.

    Returns a dict with node info and number of immediate children.
    Useful for tree structure analysis.
    """

    def collect(self, node: 'ModelNode', depth: int) -> Dict[str, Any]:
        return {
            'model': node.model,
            'depth': depth,
            'child_count': len(node),
            'is_leaf': node.is_leaf()
        }


class PathCollector(DataCollector):
    """Collects the models from the root down to each node.

    Paths are cached per node, since walking up is repeated work for every
    node in a subtree.
    """

    def __init__(self):
        self._path_cache: Dict[int, List[Any]] = {}

    def collect(self, node: 'ModelNode', depth: int) -> List[Any]:
        """Return models from root to node."""
        node_id = id(node)
        if node_id in self._path_cache:
            return list(self._path_cache[node_id])

        parent = node.parent
        if parent is not None and id(parent) in self._path_cache:
            path = self._path_cache[id(parent)] + [node.model]
        else:
            path = [n.model for n in node.path()]

        # Cached paths are copied on the way out so callers can't mutate them
        self._path_cache[node_id] = path
        return list(path)


class AggregateCollector(DataCollector):
    """Base class for collectors that aggregate a value over subtrees.

    Subclasses implement the aggregation (sum, max, ...) over the values
    returned by value_of for the node and everything below it.
    """

    def __init__(self, value_of: Callable[[Any], Any]):
        """Initialize with the function that reads a value from a model.

        Args:
            value_of: Function(model) -> value to aggregate
        """
        self.value_of = value_of
        self._cache: Dict[int, Dict[str, Any]] = {}

    @abstractmethod
    def aggregate(self, values: List[Any]) -> Any:
        """Aggregate multiple values into one."""
        pass

    def collect(self, node: 'ModelNode', depth: int) -> Dict[str, Any]:
        """Collect aggregated data from node and its subtree."""
        if id(node) in self._cache:
            return self._cache[id(node)]

        # Post-order over the subtree so every child is aggregated first
        stack = [(node, depth, False)]
        while stack:
            current, current_depth, expanded = stack.pop()
            if id(current) in self._cache:
                continue
            if not expanded:
                stack.append((current, current_depth, True))
                for child in current.children:
                    stack.append((child, current_depth + 1, False))
                continue

            own_value = self.value_of(current.model)
            values = [own_value]
            values.extend(self._cache[id(child)]['aggregated'] for child in current.children)
            self._cache[id(current)] = {
                'model': current.model,
                'depth': current_depth,
                'own_value': own_value,
                'aggregated': self.aggregate(values)
            }

        return self._cache[id(node)]


class SumCollector(AggregateCollector):
    """Sums a value across subtrees (sizes, counts, budgets)."""

    def aggregate(self, values: List[Any]) -> Any:
        return sum(v for v in values if v is not None)


class MaxCollector(AggregateCollector):
    """Finds the maximum value in subtrees."""

    def aggregate(self, values: List[Any]) -> Any:
        valid_values = [v for v in values if v is not None]
        return max(valid_values) if valid_values else None


class CustomCollector(DataCollector):
    """Collector that uses a user-provided function.

    Allows custom data collection logic without subclassing.
    """

    def __init__(self, collect_func: Callable[['ModelNode', int], Any]):
        """Initialize with custom collection function.

        Args:
            collect_func: Function(node, depth) -> Any
        """
        self.collect_func = collect_func

    def collect(self, node: 'ModelNode', depth: int) -> Any:
        return self.collect_func(node, depth)
