"""
XML codec: item-list reader and writer.
"""

from .xml_reader import parse_feed
from .xml_writer import FeedWriterOptions, escape_xml, serialize_records

__all__ = [
    "parse_feed",
    "serialize_records",
    "FeedWriterOptions",
    "escape_xml",
]
