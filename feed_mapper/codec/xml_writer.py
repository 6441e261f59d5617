"""
XML feed writer.

Serializes records back into the item-list shape:

    <?xml version="1.0" encoding="UTF-8"?>
    <rss xmlns:g="http://base.google.com/ns/1.0" version="2.0">
      <channel>
        <item>
          <g:id>A1</g:id>
        </item>
      </channel>
    </rss>
"""

import os
import re

from pydantic import BaseModel, Field

from feed_mapper.core.exceptions import SerializeError
from feed_mapper.core.models import Record
from feed_mapper.observability import metrics
from feed_mapper.observability.logger import get_logger
from feed_mapper.utils.validation import is_xml_name

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
GOOGLE_NAMESPACE = "http://base.google.com/ns/1.0"

# Characters outside the XML 1.0 Char production
INVALID_XML_CHARS = re.compile("[^\t\n\r\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")

XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    # Bare carriage returns are normalized away by parsers
    "\r": "&#13;",
}


class FeedWriterOptions(BaseModel):
    """
    Shape of the wrapping document.

    Attributes:
        root_tag: Root element name
        channel_tag: Element between root and items; empty or None for none
        version: `version` attribute of the root; None to omit it
        indent: Spaces per nesting level
    """

    root_tag: str = "rss"
    channel_tag: str | None = "channel"
    version: str | None = "2.0"
    indent: int = Field(2, ge=0)

    @classmethod
    def from_env(cls) -> "FeedWriterOptions":
        """Build options from FEED_ROOT_TAG, FEED_CHANNEL_TAG and FEED_INDENT."""
        defaults = cls()
        return cls(
            root_tag=os.getenv("FEED_ROOT_TAG", defaults.root_tag),
            channel_tag=os.getenv("FEED_CHANNEL_TAG", defaults.channel_tag),
            indent=int(os.getenv("FEED_INDENT", str(defaults.indent))),
        )


def escape_xml(value: str) -> str:
    """Escape the five predefined XML entities."""
    return "".join(XML_ESCAPES.get(ch, ch) for ch in value)


def _declared_namespaces(
    records: list[Record],
    namespaces: dict[str, str] | None,
) -> dict[str, str]:
    """Collect the prefix declarations the root element needs."""
    available = {"g": GOOGLE_NAMESPACE, **(namespaces or {})}
    declared = {"g": available["g"]}

    for record in records:
        for key, value in record.current.items():
            if value is None or value == "":
                continue
            if not is_xml_name(key):
                raise SerializeError(key, "not a valid XML element name")
            if ":" not in key:
                continue
            prefix = key.split(":", 1)[0]
            if prefix not in available:
                raise SerializeError(key, f"namespace prefix '{prefix}' is not declared")
            declared[prefix] = available[prefix]

    return declared


def serialize_records(
    records: list[Record],
    options: FeedWriterOptions | None = None,
    namespaces: dict[str, str] | None = None,
) -> str:
    """
    Serialize records into an item-list XML document.

    Fields whose current value is None or empty are skipped; the others are
    written in the record's key order.

    Args:
        records: Records to write
        options: Wrapping document shape (defaults to rss/channel)
        namespaces: Prefix to URI declarations from the source document

    Returns:
        The XML document as a string

    Raises:
        SerializeError: If a field name is not a valid tag or uses an unknown prefix,
                        or a value holds a character XML does not allow
    """
    options = options or FeedWriterOptions()
    pad = " " * options.indent
    declared = _declared_namespaces(records, namespaces)

    root_attrs = "".join(
        f' xmlns:{prefix}="{escape_xml(uri)}"' for prefix, uri in declared.items()
    )
    if options.version:
        root_attrs += f' version="{escape_xml(options.version)}"'

    lines = [XML_DECLARATION, f"<{options.root_tag}{root_attrs}>"]

    depth = 1
    if options.channel_tag:
        lines.append(f"{pad}<{options.channel_tag}>")
        depth = 2

    item_pad = pad * depth
    field_pad = pad * (depth + 1)

    for record in records:
        lines.append(f"{item_pad}<item>")
        for key, value in record.current.items():
            if value is None or value == "":
                continue
            bad = INVALID_XML_CHARS.search(value)
            if bad:
                raise SerializeError(key, f"value contains character U+{ord(bad.group()):04X} not allowed in XML")
            lines.append(f"{field_pad}<{key}>{escape_xml(value)}</{key}>")
        lines.append(f"{item_pad}</item>")

    if options.channel_tag:
        lines.append(f"{pad}</{options.channel_tag}>")
    lines.append(f"</{options.root_tag}>")

    xml_text = "\n".join(lines)

    metrics.serialized_bytes.observe(len(xml_text.encode("utf-8")))
    logger.debug("Serialized feed", extra={"item_count": len(records)})

    return xml_text
