"""
Schema extraction for parsed feeds.

Derives one SchemaEntry per field name from the field nodes of every item,
scanning the document once in order.
"""

from collections.abc import Iterable

from pydantic import BaseModel

from feed_mapper.core.models import SchemaEntry


class FieldNode(BaseModel):
    """
    Attributes of one field element inside an <item>.

    Attributes:
        name: Tag name, with its namespace prefix if any
        required: Whether the element carried a `required` attribute
        description: Value of the `description` attribute, if any
    """

    name: str
    required: bool = False
    description: str | None = None


def extract_schema(items: Iterable[Iterable[FieldNode]]) -> list[SchemaEntry]:
    """
    Build the schema of a feed.

    A field is required if any of its occurrences is marked required. Its help
    text is the first non-empty description found; later occurrences never
    overwrite it. Entries keep the order in which field names first appear.

    Args:
        items: Field nodes of every item, in document order

    Returns:
        Schema entries in first-seen order
    """
    entries: dict[str, SchemaEntry] = {}

    for nodes in items:
        for node in nodes:
            entry = entries.get(node.name)
            if entry is None:
                entry = entries[node.name] = SchemaEntry(name=node.name)
            if node.required:
                entry.required = True
            if entry.help_text is None and node.description:
                entry.help_text = node.description

    return list(entries.values())
