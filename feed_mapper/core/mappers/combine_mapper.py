"""
CombineMapper - joins original field values and literals into one field.
"""

from feed_mapper.core.models import CombineRule, Record

from .base_mapper import BaseMapper


class CombineMapper(BaseMapper):
    """
    Joins the resolved parts of a combine rule with its separator.

    Each part resolves to its literal text (custom parts) or to the item's
    original value for that field name. Empty or missing parts are dropped
    before joining, so separators only sit between values that exist.
    With nothing left to join the target becomes an empty string.
    """

    def __init__(self, rule: CombineRule):
        super().__init__(rule)
        self.parts = rule.fields
        self.separator = rule.separator

    def resolve(self, record: Record) -> list[str]:
        """Return the non-empty part values for a record, in rule order."""
        values = []
        for part in self.parts:
            value = part.value if part.custom else record.get(part.value, use_original=True)
            if value:
                values.append(value)
        return values

    def apply(self, record: Record) -> None:
        record.set(self.target, self.separator.join(self.resolve(record)))

    @property
    def rule_type(self) -> str:
        return "combine"
