"""Forest construction for DazzleForestLib.

Three ways to turn caller data into ModelNode trees:

- build_tree: one root plus a function returning the children of a model
- build_forest: the same, applied to each model of a sequence
- build_from_relation: a flat collection where every model names its
  parent by key (the classic adjacency list)

All three grow trees with an explicit worklist instead of recursion, so a
deep or cyclic input ends in CycleDetectedError/DepthExceededError rather
than a RecursionError halfway through the build.
"""

import logging
import types
from collections import defaultdict
from itertools import chain
from typing import (
    Any, Callable, Dict, Iterable, Iterator, List, Literal, Optional, Sequence,
    Tuple, TypeVar, Union, get_args, get_origin, get_type_hints,
)

from .node import ModelNode
from .._common.config import BuildConfig, RelationLookup
from ..errors import (
    ConfigurationError,
    CycleDetectedError,
    DepthExceededError,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)

# `int | None` is a types.UnionType rather than a typing.Union on 3.10+
_UnionType = getattr(types, 'UnionType', None)
_MISSING = object()


class ForestBuilder:
    """Builds ModelNode trees according to a BuildConfig.

    The builder itself is stateless between calls apart from
    nodes_built, which reports the size of the most recent build.

    Example:
        >>> builder = ForestBuilder(BuildConfig(max_depth=10))
        >>> root = builder.build_tree(1, lambda n: [n + 1] if n < 3 else [])
        >>> [node.model for node in root.descendants()]
        [2, 3]
    """

    def __init__(self, config: Optional[BuildConfig] = None):
        """Create a builder.

        Args:
            config: Build options (defaults to BuildConfig())

        Raises:
            ConfigurationError: If the config does not validate
        """
        self.config = config or BuildConfig()

        config_errors = self.config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.nodes_built = 0

    # Public entry points

    def build_tree(self,
                   model: Any,
                   children_of: Callable[[Any], Optional[Iterable[Any]]],
                   key: Optional[Callable[[Any], Any]] = None) -> ModelNode:
        """Build one tree by repeatedly asking children_of for children.

        Args:
            model: The root model
            children_of: Returns the child models of a model; None or an
                empty collection makes it a leaf
            key: Optional identity for cycle detection. Without it a model
                only counts as "seen" if it is the very same object as one
                of its ancestors.

        Returns:
            The root node

        Raises:
            CycleDetectedError: If children_of re-derives an ancestor
            DepthExceededError: If the tree gets deeper than max_depth
        """
        root = ModelNode(model)
        self.nodes_built = 1
        self._grow(
            root,
            lambda node: children_of(node.model),
            key,
            check_cycles=self.config.detect_cycles,
            max_depth=self.config.max_depth,
        )
        logger.debug("Built tree with %d node(s) from root %r", self.nodes_built, model)
        return root

    def build_forest(self,
                     models: Iterable[Any],
                     children_of: Callable[[Any], Optional[Iterable[Any]]],
                     key: Optional[Callable[[Any], Any]] = None) -> List[ModelNode]:
        """Build one independent tree per model, in input order.

        Args:
            models: Root models
            children_of: See build_tree
            key: See build_tree

        Returns:
            List of root nodes, one per input model
        """
        roots = []
        total = 0
        for model in models:
            roots.append(self.build_tree(model, children_of, key))
            total += self.nodes_built
        self.nodes_built = total
        logger.debug("Built forest of %d tree(s), %d node(s)", len(roots), total)
        return roots

    def build_from_relation(self,
                            models: Iterable[Any],
                            key_of: Callable[[Any], Any],
                            parent_key_of: Callable[[Any], Any],
                            key_type: Any = None) -> List[ModelNode]:
        """Build a forest from a flat key/parent-key relation.

        A model is a root when its parent key is None or matches no other
        model's key. Everything else ends up under the model whose key its
        parent key names, with siblings in input order.

        Args:
            models: The flat collection of records
            key_of: Returns the unique key of a model
            parent_key_of: Returns the parent's key, or None for "no parent"
            key_type: Optional declared type of parent keys, e.g.
                Optional[int]. Must admit None.

        Returns:
            List of root nodes in input order

        Raises:
            InvalidArgumentError: If the parent key type cannot express
                "no parent" (checked before models is touched), or if keys
                are None, duplicated, or unhashable under INDEX lookup
            CycleDetectedError: If some models only reach each other

        BuildConfig.max_depth does not apply here: with unique keys the
        depth is bounded by the number of models.
        """
        _check_parent_key_type(parent_key_of, key_type)

        models = list(models)
        keys = [key_of(model) for model in models]
        parent_keys = [parent_key_of(model) for model in models]

        if any(k is None for k in keys):
            raise InvalidArgumentError("key_of returned None; keys must identify a model")

        if self.config.relation_lookup == RelationLookup.INDEX:
            lookup = _IndexLookup(models, keys, parent_keys)
        else:
            lookup = _ScanLookup(models, keys, parent_keys)

        roots = [
            ModelNode(model)
            for model, parent_key in zip(models, parent_keys)
            if parent_key is None or not lookup.has_key(parent_key)
        ]

        # Unique keys give every model a single parent, so growing from the
        # roots cannot loop; models on a cycle are simply never reached.
        self.nodes_built = len(roots)
        for root in roots:
            self._grow(
                root,
                lambda node: lookup.children_of(key_of(node.model)),
                check_cycles=False,
                max_depth=None,
            )

        if self.nodes_built < len(models):
            placed = {id(node.model) for node in _walk(roots)}
            stranded = [k for model, k in zip(models, keys) if id(model) not in placed]
            logger.warning("Parent cycle among %d model(s): %r", len(stranded), stranded)
            raise CycleDetectedError(
                f"Models with keys {stranded!r} form a parent cycle and cannot be placed under a root",
                keys=stranded,
            )

        logger.debug(
            "Built %d tree(s) with %d node(s) from %d model(s) using %s lookup",
            len(roots), self.nodes_built, len(models), self.config.relation_lookup.value,
        )
        return roots

    # Worklist

    def _grow(self,
              root: ModelNode,
              find_children: Callable[[ModelNode], Optional[Iterable[Any]]],
              key: Optional[Callable[[Any], Any]] = None,
              check_cycles: bool = True,
              max_depth: Optional[int] = None) -> None:
        """Attach children below root until find_children runs dry."""
        stack: List[Tuple[ModelNode, int]] = [(root, 0)]

        while stack:
            node, depth = stack.pop()
            child_models = find_children(node)
            if not child_models:
                continue
            child_models = list(child_models)
            if not child_models:
                continue

            if max_depth is not None and depth + 1 > max_depth:
                logger.warning("Build exceeded max_depth=%d below %r", max_depth, node.model)
                raise DepthExceededError(
                    f"Tree is deeper than max_depth={max_depth} (below model {node.model!r})",
                    max_depth=max_depth,
                    model=child_models[0],
                )

            if check_cycles:
                for child_model in child_models:
                    ancestor = _find_on_path(node, child_model, key)
                    if ancestor is not None:
                        path = node.path()
                        cycle = [n.model for n in path[path.index(ancestor):]] + [child_model]
                        logger.warning("children_of re-derived ancestor %r", child_model)
                        raise CycleDetectedError(
                            f"Model {child_model!r} is its own ancestor: {cycle!r}",
                            keys=cycle,
                        )

            children = node.add_children(child_models)
            self.nodes_built += len(children)
            stack.extend((child, depth + 1) for child in reversed(children))


def _find_on_path(node: ModelNode,
                  model: Any,
                  key: Optional[Callable[[Any], Any]]) -> Optional[ModelNode]:
    """Return the node on node's root path that holds model, if any.

    Matches by identity, or by key(model) equality when key is given.
    """
    if key is None:
        def matches(other):
            return other is model
    else:
        marker = key(model)

        def matches(other):
            return key(other) == marker

    for candidate in chain((node,), node.ancestors()):
        if matches(candidate.model):
            return candidate
    return None


def _walk(roots: Sequence[ModelNode]) -> Iterator[ModelNode]:
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


# Parent key type checking

def _admits_none(annotation: Any) -> bool:
    """True if a value annotated with annotation may be None."""
    if annotation is None or annotation is type(None) or annotation is Any or annotation is object:
        return True
    if isinstance(annotation, (str, TypeVar)):
        # Unresolved forward reference or generic; nothing to hold it to
        return True

    origin = get_origin(annotation)
    if origin is Union or (_UnionType is not None and origin is _UnionType):
        return any(_admits_none(arg) for arg in get_args(annotation))
    if origin is Literal:
        return None in get_args(annotation)
    return False


def _check_parent_key_type(parent_key_of: Callable[[Any], Any], key_type: Any) -> None:
    """Reject parent key types that cannot express "no parent"."""
    if key_type is not None and not _admits_none(key_type):
        raise InvalidArgumentError(
            f"key_type {key_type!r} cannot represent a missing parent; use Optional[...]"
        )

    try:
        hints = get_type_hints(parent_key_of)
    except (NameError, TypeError):
        # Not introspectable (partial, itemgetter, unresolved names)
        return
    annotation = hints.get('return', _MISSING)
    if annotation is not _MISSING and not _admits_none(annotation):
        raise InvalidArgumentError(
            f"parent_key_of must return an optional type, but is annotated to return {annotation!r}"
        )


# Relation lookups

class _ScanLookup:
    """Rescans the full collection for every query. Keys only need ==."""

    def __init__(self, models: List[Any], keys: List[Any], parent_keys: List[Any]):
        self._models = models
        self._keys = keys
        self._parent_keys = parent_keys
        for i, k in enumerate(keys):
            if any(other == k for other in keys[:i]):
                raise InvalidArgumentError(f"Duplicate key {k!r} in relation")

    def has_key(self, key: Any) -> bool:
        return any(k == key for k in self._keys)

    def children_of(self, key: Any) -> List[Any]:
        return [
            model for model, parent_key in zip(self._models, self._parent_keys)
            if parent_key is not None and parent_key == key
        ]


class _IndexLookup:
    """Groups models by parent key once. Keys must be hashable."""

    def __init__(self, models: List[Any], keys: List[Any], parent_keys: List[Any]):
        self._groups: Dict[Any, List[Any]] = defaultdict(list)
        try:
            self._keys = set(keys)
            for model, parent_key in zip(models, parent_keys):
                if parent_key is not None:
                    self._groups[parent_key].append(model)
        except TypeError as exc:
            raise InvalidArgumentError(
                "Keys must be hashable with RelationLookup.INDEX; use RelationLookup.SCAN instead"
            ) from exc

        if len(self._keys) != len(keys):
            seen = set()
            duplicate = next(k for k in keys if k in seen or seen.add(k))
            raise InvalidArgumentError(f"Duplicate key {duplicate!r} in relation")

    def has_key(self, key: Any) -> bool:
        return key in self._keys

    def children_of(self, key: Any) -> List[Any]:
        return self._groups.get(key, [])


# Functional interface

def build_tree(model: Any,
               children_of: Callable[[Any], Optional[Iterable[Any]]],
               *,
               key: Optional[Callable[[Any], Any]] = None,
               config: Optional[BuildConfig] = None) -> ModelNode:
    """Build one tree from a root model. See ForestBuilder.build_tree."""
    return ForestBuilder(config).build_tree(model, children_of, key)


def build_forest(models: Iterable[Any],
                 children_of: Callable[[Any], Optional[Iterable[Any]]],
                 *,
                 key: Optional[Callable[[Any], Any]] = None,
                 config: Optional[BuildConfig] = None) -> List[ModelNode]:
    """Build one tree per root model. See ForestBuilder.build_forest."""
    return ForestBuilder(config).build_forest(models, children_of, key)


def build_from_relation(models: Iterable[Any],
                        key_of: Callable[[Any], Any],
                        parent_key_of: Callable[[Any], Any],
                        *,
                        key_type: Any = None,
                        config: Optional[BuildConfig] = None) -> List[ModelNode]:
    """Build a forest from a flat key/parent-key relation.

    Example:
        >>> rows = [{'id': 1, 'parent': None}, {'id': 2, 'parent': 1}]
        >>> [root] = build_from_relation(rows, lambda r: r['id'], lambda r: r['parent'])
        >>> [child.model['id'] for child in root.children]
        [2]

    See ForestBuilder.build_from_relation for the details.
    """
    return ForestBuilder(config).build_from_relation(models, key_of, parent_key_of, key_type)
