"""
Schema extraction.
"""

from .extractor import FieldNode, extract_schema

__all__ = [
    "FieldNode",
    "extract_schema",
]
