"""
Mapping rule models: declarative instructions deriving one target field.

Rules form a tagged union discriminated on `type`:
- rename: copy the original value of another field
- static: write a literal value
- combine: join several original values and/or literals with a separator
- empty: write an empty string
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from feed_mapper.utils.validation import validate_xml_name

# Legacy value the mapping form used for "no separator selected"
NO_SEPARATOR_SENTINEL = "none"


class BaseRule(BaseModel):
    """Fields shared by every mapping rule."""

    target: str

    @field_validator("target")
    @classmethod
    def check_target_name(cls, v: str) -> str:
        return validate_xml_name(v)


class RenameRule(BaseRule):
    """Target takes the original value of `source_field`."""

    type: Literal["rename"] = "rename"
    source_field: str = Field(..., min_length=1)


class StaticRule(BaseRule):
    """Target takes a literal value."""

    type: Literal["static"] = "static"
    value: str


class CombinePart(BaseModel):
    """
    One piece of a combine rule.

    Attributes:
        value: Field name to read from the original item, or literal text if `custom`
        custom: Whether `value` is literal text rather than a field name
    """

    value: str
    custom: bool = False


class CombineRule(BaseRule):
    """Target takes the non-empty parts joined with `separator`."""

    type: Literal["combine"] = "combine"
    fields: list[CombinePart] = Field(default_factory=list)
    separator: str = ""

    @field_validator("fields", mode="before")
    @classmethod
    def coerce_field_names(cls, v: Any) -> Any:
        """Allow bare strings as shorthand for field references."""
        if isinstance(v, list):
            return [{"value": part} if isinstance(part, str) else part for part in v]
        return v

    @field_validator("separator", mode="before")
    @classmethod
    def normalize_separator(cls, v: Any) -> Any:
        if v is None or v == NO_SEPARATOR_SENTINEL:
            return ""
        return v


class EmptyRule(BaseRule):
    """Target is written as an empty string."""

    type: Literal["empty"] = "empty"


MappingRule = Annotated[
    Union[RenameRule, StaticRule, CombineRule, EmptyRule],
    Field(discriminator="type"),
]

_rule_adapter: TypeAdapter = TypeAdapter(MappingRule)


def parse_rule(data: Any) -> BaseRule:
    """
    Build a mapping rule from a model instance or a plain dict.

    Args:
        data: A rule model, or a dict with a `type` key

    Returns:
        The matching rule model

    Raises:
        pydantic.ValidationError: If the declaration is invalid
    """
    if isinstance(data, BaseRule):
        return data
    return _rule_adapter.validate_python(data)


def parse_rules(declarations: list[Any]) -> list[BaseRule]:
    """Parse a list of rule declarations, keeping their order."""
    return [parse_rule(declaration) for declaration in declarations]
