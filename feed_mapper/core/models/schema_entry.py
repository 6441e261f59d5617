"""
SchemaEntry model describing one field name observed in a feed.
"""

from pydantic import BaseModel, Field


class SchemaEntry(BaseModel):
    """
    Metadata for a field name, used to build the mapping form.

    Attributes:
        name: Field (tag) name, unique within a schema
        required: True if any item marked this field with a `required` attribute
        help_text: First non-empty `description` attribute seen for this field
    """

    name: str = Field(..., min_length=1)
    required: bool = False
    help_text: str | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "price",
                "required": True,
                "help_text": "USD"
            }
        }
