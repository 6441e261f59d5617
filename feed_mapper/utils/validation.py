"""
Input validation utilities for feed mapping.

Provides reusable checks for element names and export file names so that
mapping declarations and export requests fail early with clear messages.
"""

import re

# XML 1.0 (fifth edition) NameStartChar and NameChar, without ':'
NAME_START_CHARS = (
    "A-Z_a-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D\u037F-\u1FFF"
    "\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF\uFDF0-\uFFFD"
    "\U00010000-\U000EFFFF"
)
NAME_CHARS = NAME_START_CHARS + "\\-.0-9\u00B7\u0300-\u036F\u203F-\u2040"

# NCName with an optional single prefix, e.g. "price" or "g:price"
NCNAME = f"[{NAME_START_CHARS}][{NAME_CHARS}]*"
XML_NAME_PATTERN = re.compile(f"{NCNAME}(?::{NCNAME})?")


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def is_xml_name(name: str) -> bool:
    """
    Check whether a string can be used as an XML element name.

    Args:
        name: Candidate element name, optionally prefixed ("g:id")

    Returns:
        True if the name is usable as a tag

    Examples:
        >>> is_xml_name("g:id")
        True
        >>> is_xml_name("2nd price")
        False
    """
    return bool(name) and isinstance(name, str) and XML_NAME_PATTERN.fullmatch(name) is not None


def validate_xml_name(name: str, field_name: str = "target") -> str:
    """
    Validate an XML element name.

    Args:
        name: The element name to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated name

    Raises:
        ValidationError: If the name is not a valid element name
    """
    if not name or not isinstance(name, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    if not is_xml_name(name):
        raise ValidationError(
            f"{field_name} '{name}' is not a valid XML element name. "
            "Use letters, digits, '_', '-', '.' and at most one ':' prefix separator."
        )

    return name


def validate_file_name(file_name: str, field_name: str = "file_name") -> str:
    """
    Validate an export file name.

    Only bare file names are accepted: the export sink decides the directory.

    Args:
        file_name: The file name to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated file name (stripped of whitespace)

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_file_name("transformed.xml")
        'transformed.xml'
        >>> validate_file_name("../feed.xml")  # doctest: +SKIP
        ValidationError: file_name contains path traversal characters (..)
    """
    if not file_name or not isinstance(file_name, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    file_name = file_name.strip()

    if not file_name:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if ".." in file_name:
        raise ValidationError(f"{field_name} contains path traversal characters (..)")

    if "\x00" in file_name:
        raise ValidationError(f"{field_name} contains null bytes")

    if "/" in file_name or "\\" in file_name:
        raise ValidationError(f"{field_name} must not contain path separators")

    if len(file_name) > 255:
        raise ValidationError(f"{field_name} exceeds maximum length of 255 characters")

    return file_name
