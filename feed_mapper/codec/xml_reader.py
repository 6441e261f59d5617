"""
XML feed reader.

Parses a document holding <item> elements into records and a field schema.
Each direct child element of an <item> is a field: its tag name (prefix kept,
e.g. "g:price") is the field name and its text content the value.
"""

from lxml import etree

from feed_mapper.core.exceptions import ParseError
from feed_mapper.core.models import ParsedFeed, Record
from feed_mapper.core.schema import FieldNode, extract_schema
from feed_mapper.observability import metrics
from feed_mapper.observability.logger import get_logger

logger = get_logger(__name__)

ITEM_TAG = "item"


def _make_parser() -> etree.XMLParser:
    """
    Parser for untrusted feed documents.

    Entities declared in the document's internal subset are expanded;
    external entities are never loaded and no network access happens.
    """
    return etree.XMLParser(
        encoding="utf-8",
        resolve_entities="internal",
        no_network=True,
        huge_tree=False,
    )


def tag_name(element: etree._Element) -> str:
    """Return an element's tag as written in the document ("g:id", "title")."""
    local = etree.QName(element).localname
    return f"{element.prefix}:{local}" if element.prefix else local


def text_content(element: etree._Element) -> str:
    """Concatenated text of the element and all its descendants."""
    return str(element.xpath("string()"))


def _is_element(node: etree._Element) -> bool:
    # Comments and processing instructions carry a non-string tag
    return isinstance(node.tag, str)


def _parse_document(xml_text: str | bytes) -> etree._Element:
    if isinstance(xml_text, str):
        data = xml_text.encode("utf-8")
    elif isinstance(xml_text, bytes):
        data = xml_text
    else:
        raise ParseError(f"Expected XML text, got {type(xml_text).__name__}")

    if not data.strip():
        raise ParseError("Invalid XML format: document is empty")

    try:
        return etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Invalid XML format: {e.msg}", line=e.lineno) from e


def parse_feed(xml_text: str | bytes) -> ParsedFeed:
    """
    Parse an item-list XML document.

    Args:
        xml_text: The document, normally a UTF-8 string

    Returns:
        ParsedFeed with one record per <item>, the schema and namespace declarations

    Raises:
        ParseError: If the document is not well-formed or has no <item> elements
    """
    try:
        root = _parse_document(xml_text)

        items = [el for el in root.iter() if _is_element(el) and tag_name(el) == ITEM_TAG]
        if not items:
            raise ParseError("No items found in XML")
    except ParseError as e:
        metrics.increment_counter(metrics.feeds_loaded_total, status="failure")
        logger.warning("Feed parse failed", extra={"error_message": e.message, "line": e.line})
        raise

    records: list[Record] = []
    item_nodes: list[list[FieldNode]] = []
    namespaces: dict[str, str] = {}

    for item in items:
        values: dict[str, str] = {}
        nodes: list[FieldNode] = []

        for child in item:
            if not _is_element(child):
                continue

            name = tag_name(child)
            nodes.append(
                FieldNode(
                    name=name,
                    required="required" in child.attrib,
                    description=child.get("description") or None,
                )
            )

            if child.prefix:
                namespaces.setdefault(child.prefix, child.nsmap[child.prefix])

            # Empty fields are left out of the record entirely
            value = text_content(child)
            if value:
                values[name] = value

        records.append(Record(original=values))
        item_nodes.append(nodes)

    feed_schema = extract_schema(item_nodes)

    metrics.increment_counter(metrics.feeds_loaded_total, status="success")
    metrics.increment_counter(metrics.items_loaded_total, len(records))
    logger.info(
        "Parsed feed",
        extra={"item_count": len(records), "field_count": len(feed_schema)},
    )

    return ParsedFeed(records=records, feed_schema=feed_schema, namespaces=namespaces)
