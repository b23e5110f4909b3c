"""Predicate-filtered structural copy of a tree."""

import logging
from typing import Callable, List, Tuple

from .node import ModelNode

logger = logging.getLogger(__name__)


def copy_tree(tree: ModelNode, predicate: Callable[[ModelNode], bool]) -> ModelNode:
    """Copy tree, keeping only the branches whose nodes pass predicate.

    The copy's root wraps the same model as tree and is never tested. Below
    it, each child of a kept node is tested against predicate (the source
    node is passed in); a child that passes is copied and its own children
    are tested in turn, a child that fails is dropped together with its
    whole subtree, even if some of its descendants would pass.

    Models are shared with the source, not duplicated. Sibling order is
    preserved.

    Args:
        tree: Root of the subtree to copy
        predicate: Called once per candidate source node

    Returns:
        Root of the new tree

    Example:
        >>> root = ModelNode('a')
        >>> b = root.add_child('b')
        >>> _ = b.add_child('c')
        >>> _ = root.add_child('x')
        >>> copied = copy_tree(root, lambda node: node.model != 'x')
        >>> [node.model for node in copied.descendants()]
        ['b', 'c']
    """
    copied_root = ModelNode(tree.model)
    pending: List[Tuple[ModelNode, ModelNode]] = [(tree, copied_root)]
    copied = 1

    while pending:
        source, target = pending.pop()
        kept = [child for child in source.children if predicate(child)]
        if not kept:
            continue

        # Pair each source child with the node add_children created for it
        new_children = target.add_children(child.model for child in kept)
        copied += len(new_children)
        pending.extend(reversed(list(zip(kept, new_children))))

    logger.debug("Copied %d node(s) from tree rooted at %r", copied, tree.model)
    return copied_root
