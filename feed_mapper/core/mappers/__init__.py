"""
Mapping rule implementations.

Provides mappers for rename, static, combine and empty rules.
"""

from .base_mapper import BaseMapper
from .combine_mapper import CombineMapper
from .empty_mapper import EmptyMapper
from .rename_mapper import RenameMapper
from .static_mapper import StaticMapper

__all__ = [
    "BaseMapper",
    "RenameMapper",
    "StaticMapper",
    "CombineMapper",
    "EmptyMapper",
]
