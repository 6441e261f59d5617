"""
Feed-level payloads exchanged with the UI collaborator.
"""

from pydantic import BaseModel, Field

from .record import Record
from .schema_entry import SchemaEntry


class ParsedFeed(BaseModel):
    """
    Output of the XML reader.

    Attributes:
        records: One record per <item>, in document order
        feed_schema: Schema entries in first-seen field order
        namespaces: Prefix to URI declarations found in the document
    """

    records: list[Record]
    feed_schema: list[SchemaEntry]
    namespaces: dict[str, str] = Field(default_factory=dict)

    @property
    def field_names(self) -> list[str]:
        return [entry.name for entry in self.feed_schema]


class LoadResult(BaseModel):
    """Summary returned to the collaborator after a successful load."""

    feed_schema: list[SchemaEntry]
    field_names: list[str]
    item_count: int = Field(..., ge=0)


class FeedData(BaseModel):
    """
    Preview of the working feed: each item's current values plus the schema.
    """

    items: list[dict[str, str]]
    feed_schema: list[SchemaEntry]

    class Config:
        json_schema_extra = {
            "example": {
                "items": [
                    {"g:id": "A1", "title": "Shirt", "brand": "Acme"}
                ],
                "feed_schema": [
                    {"name": "g:id", "required": True, "help_text": None},
                    {"name": "title", "required": False, "help_text": "Product title"}
                ]
            }
        }


class ExportArtifact(BaseModel):
    """Serialized feed handed to an export sink."""

    file_name: str = Field(..., min_length=1)
    content: bytes
    media_type: str = "text/xml"

    @property
    def size(self) -> int:
        return len(self.content)
