"""Testing utilities for DazzleForestLib consumers."""

from .fixtures import (
    ForestTestHelper,
    record,
    record_key,
    record_parent,
    random_relation,
    chain_children,
)

__all__ = [
    'ForestTestHelper',
    'record',
    'record_key',
    'record_parent',
    'random_relation',
    'chain_children',
]
