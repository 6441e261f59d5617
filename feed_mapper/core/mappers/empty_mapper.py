"""
EmptyMapper - blanks the target field.
"""

from feed_mapper.core.models import EmptyRule, Record

from .base_mapper import BaseMapper


class EmptyMapper(BaseMapper):

    def __init__(self, rule: EmptyRule):
        super().__init__(rule)

    def apply(self, record: Record) -> None:
        # Written explicitly: the key stays present, the serializer skips it
        record.set(self.target, "")

    @property
    def rule_type(self) -> str:
        return "empty"
