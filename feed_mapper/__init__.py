"""
feed-mapper: field mapping and re-export for XML product feeds.

Public API:
- FeedManager: load / apply / serialize / export lifecycle
- codec.parse_feed, codec.serialize_records
- core.rules.TransformEngine, MappingConfigLoader, MappingConfigBuilder
- core.models: Record, SchemaEntry and the mapping rule models
- export: CallbackExportSink, FileExportSink
"""

from .core.exceptions import FeedError, NoDataError, ParseError, SerializeError
from .feed_manager import FeedManager, FeedState

__version__ = "0.1.0"

__all__ = [
    "FeedManager",
    "FeedState",
    "FeedError",
    "ParseError",
    "NoDataError",
    "SerializeError",
]
