"""
Record model representing a single feed item (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class Record(BaseModel):
    """
    A single <item> of a product feed.

    Note: Record is an in-memory structure. It is created by the XML reader,
    mutated only by the transform engine and replaced wholesale on the next load.

    Attributes:
        original: Field values as parsed (snapshot, never rewritten)
        current: Working copy the mapping rules write to
    """

    original: dict[str, str] = Field(default_factory=dict, frozen=True)
    current: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def seed_current(cls, data: Any) -> Any:
        """Start the working copy from the original values when none is given."""
        if isinstance(data, dict) and data.get("current") is None:
            data = {**data, "current": dict(data.get("original") or {})}
        return data

    def get(self, key: str, use_original: bool = False) -> str:
        """Return a field value, or an empty string if the field is absent."""
        source = self.original if use_original else self.current
        return source.get(key, "")

    def has_original(self, key: str) -> bool:
        return key in self.original

    def set(self, key: str, value: str) -> None:
        self.current[key] = value

    def reset_field(self, key: str) -> None:
        """
        Put a field back to its parsed state.

        The field is removed from the working copy if the item never had it.
        """
        if key in self.original:
            self.current[key] = self.original[key]
        else:
            self.current.pop(key, None)

    def keys(self) -> list[str]:
        return list(self.current)

    def to_dict(self) -> dict[str, str]:
        return dict(self.current)

    class Config:
        json_schema_extra = {
            "example": {
                "original": {
                    "g:id": "A1",
                    "title": "Shirt",
                    "brand": "Acme"
                },
                "current": {
                    "g:id": "A1",
                    "title": "Shirt",
                    "brand": "Acme",
                    "name": "Shirt"
                }
            }
        }
