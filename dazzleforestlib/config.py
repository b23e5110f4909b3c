"""Configuration re-export.

Public home of the configuration classes, which live in the _common
package.
"""

from ._common.config import (
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
