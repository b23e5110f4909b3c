"""Internal components shared across DazzleForestLib.

This package contains pure configuration code with no dependency on the
node, builder or traversal modules. It should NOT be imported directly by
users; use dazzleforestlib.config instead.

Important: This package must NEVER import from dazzleforestlib.core to avoid
circular dependencies.
"""

from .config import (
    BuildConfig,
    RelationLookup,
    TraversalConfig,
    TraversalStrategy,
    DataRequirement,
    FilterConfig,
    DepthConfig,
)

__all__ = [
    'BuildConfig',
    'RelationLookup',
    'TraversalConfig',
    'TraversalStrategy',
    'DataRequirement',
    'FilterConfig',
    'DepthConfig',
]
