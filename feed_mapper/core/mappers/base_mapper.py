"""
Base mapper interface for all mapping rule types.

All mappers must inherit from BaseMapper and implement the apply() method.
"""

from abc import ABC, abstractmethod

from feed_mapper.core.models import BaseRule, Record


class BaseMapper(ABC):
    """
    Abstract base class for all mappers.

    Each mapper evaluates one rule type (rename, static, combine, empty)
    against a record whose target field has already been reset.
    """

    def __init__(self, rule: BaseRule):
        """
        Initialize mapper.

        Args:
            rule: The mapping rule this mapper evaluates
        """
        self.rule = rule
        self.target = rule.target

    @abstractmethod
    def apply(self, record: Record) -> None:
        """
        Write the rule's value for the target field into the record.

        Args:
            record: Record whose `current` map is updated in place
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(target={self.target})"
