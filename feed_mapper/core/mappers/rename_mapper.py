"""
RenameMapper - copies the original value of another field into the target.
"""

from feed_mapper.core.models import Record, RenameRule

from .base_mapper import BaseMapper


class RenameMapper(BaseMapper):
    """
    Sets the target to the source field's original value.

    A source field the item never had leaves the target at its reset state.
    """

    def __init__(self, rule: RenameRule):
        super().__init__(rule)
        self.source_field = rule.source_field

    def apply(self, record: Record) -> None:
        if record.has_original(self.source_field):
            record.set(self.target, record.get(self.source_field, use_original=True))

    @property
    def rule_type(self) -> str:
        return "rename"
