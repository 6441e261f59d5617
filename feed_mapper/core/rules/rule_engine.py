"""
Transform engine applying mapping rules to feed records.

The engine normalizes a list of rule declarations (one rule per target),
builds a mapper per rule and applies them to every record in order.
"""

from typing import Any

from feed_mapper.core.mappers import (
    BaseMapper,
    CombineMapper,
    EmptyMapper,
    RenameMapper,
    StaticMapper,
)
from feed_mapper.core.models import BaseRule, Record, parse_rule
from feed_mapper.observability import metrics
from feed_mapper.observability.logger import get_logger, log_operation

logger = get_logger(__name__)


class TransformEngine:
    """
    Applies mapping rules to records.

    Every rule first resets its target field to the record's original value
    (removing it if the item never had one) and then writes its own value,
    so applying the same rules again always yields the same result.
    """

    MAPPER_REGISTRY: dict[str, type[BaseMapper]] = {
        "rename": RenameMapper,
        "static": StaticMapper,
        "combine": CombineMapper,
        "empty": EmptyMapper,
    }

    def __init__(self, rules: list[Any]):
        """
        Initialize the engine with mapping rules.

        Args:
            rules: Rule models or dicts with a `type` key. A later rule for a
                   target replaces an earlier one but keeps its position.
        """
        self.rules = self.normalize(rules)
        self.mappers: list[BaseMapper] = []
        self._build_mappers()

    @staticmethod
    def normalize(rules: list[Any]) -> list[BaseRule]:
        """Reduce a rule list to one rule per target."""
        by_target: dict[str, BaseRule] = {}
        for declaration in rules:
            rule = parse_rule(declaration)
            by_target[rule.target] = rule
        return list(by_target.values())

    def _build_mappers(self) -> None:
        """Build mapper instances from the normalized rules."""
        for rule in self.rules:
            mapper_class = self.MAPPER_REGISTRY.get(rule.type)
            if not mapper_class:
                raise ValueError(f"Unknown rule type: {rule.type}")
            self.mappers.append(mapper_class(rule))

    def apply_record(self, record: Record) -> Record:
        """
        Apply every rule to one record.

        Args:
            record: Record to update in place

        Returns:
            The same record, for chaining
        """
        for mapper in self.mappers:
            record.reset_field(mapper.target)
            mapper.apply(record)
        return record

    def apply(self, records: list[Record]) -> list[Record]:
        """
        Apply every rule to a batch of records, in place.

        Args:
            records: Records to transform

        Returns:
            The same list of records
        """
        with log_operation(
            "Applying mapping rules",
            logger=logger,
            rule_count=len(self.mappers),
            record_count=len(records),
        ):
            with metrics.transform_duration_seconds.time():
                for record in records:
                    self.apply_record(record)

        for mapper in self.mappers:
            metrics.increment_counter(metrics.rules_applied_total, rule_type=mapper.rule_type)

        return records

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule count, counts per type and target order
        """
        counts: dict[str, int] = {}
        for mapper in self.mappers:
            counts[mapper.rule_type] = counts.get(mapper.rule_type, 0) + 1
        return {
            "total_rules": len(self.mappers),
            "rules_by_type": counts,
            "targets": [mapper.target for mapper in self.mappers],
        }


def apply_rules(records: list[Record], rules: list[Any]) -> list[Record]:
    """Apply `rules` to `records` in place and return them."""
    return TransformEngine(rules).apply(records)
