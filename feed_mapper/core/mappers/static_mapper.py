"""
StaticMapper - writes a literal value.
"""

from feed_mapper.core.models import Record, StaticRule

from .base_mapper import BaseMapper


class StaticMapper(BaseMapper):

    def __init__(self, rule: StaticRule):
        super().__init__(rule)
        self.value = rule.value

    def apply(self, record: Record) -> None:
        record.set(self.target, self.value)

    @property
    def rule_type(self) -> str:
        return "static"
