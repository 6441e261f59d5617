"""
Core data models for feed mapping.

All models use Pydantic for runtime validation and type safety.
"""

from .feed_data import ExportArtifact, FeedData, LoadResult, ParsedFeed
from .mapping_rule import (
    BaseRule,
    CombinePart,
    CombineRule,
    EmptyRule,
    MappingRule,
    RenameRule,
    StaticRule,
    parse_rule,
    parse_rules,
)
from .record import Record
from .schema_entry import SchemaEntry

__all__ = [
    "Record",
    "SchemaEntry",
    "BaseRule",
    "RenameRule",
    "StaticRule",
    "CombinePart",
    "CombineRule",
    "EmptyRule",
    "MappingRule",
    "parse_rule",
    "parse_rules",
    "ParsedFeed",
    "LoadResult",
    "FeedData",
    "ExportArtifact",
]
