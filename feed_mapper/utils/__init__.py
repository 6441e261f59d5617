"""
Shared helpers.
"""

from .validation import ValidationError, is_xml_name, validate_file_name, validate_xml_name

__all__ = [
    "ValidationError",
    "is_xml_name",
    "validate_file_name",
    "validate_xml_name",
]
