"""
Mapping rule configuration management.

Loads mapping rules from YAML files and provides a builder for
declaring rules in code.
"""

from pathlib import Path
from typing import Any

import yaml

from feed_mapper.core.models import (
    BaseRule,
    CombinePart,
    CombineRule,
    EmptyRule,
    RenameRule,
    StaticRule,
)
from feed_mapper.observability.logger import get_logger

logger = get_logger(__name__)

RULE_TYPES = ("rename", "static", "combine", "empty")


class MappingConfigLoader:
    """
    Loads mapping rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    mappings:
      title:
        type: rename
        source: name
      brand:
        type: static
        value: Acme
      full_name:
        type: combine
        separator: "-"
        fields:
          - brand
          - custom: "by"
          - model
      description:
        type: empty
    ```

    Keys under `mappings` are target field names; their order is the
    order the rules are applied and the targets serialized in.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the mapping config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Mapping configuration file not found: {config_path}")

    def load_rules(self) -> list[BaseRule]:
        """
        Load and parse mapping rules from the YAML file.

        Returns:
            List of rule models suitable for TransformEngine

        Raises:
            ValueError: If YAML is invalid or an entry is malformed
        """
        with open(self.config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict) or "mappings" not in config:
            raise ValueError("Configuration file must contain 'mappings' section")

        mappings = config["mappings"] or {}
        if not isinstance(mappings, dict):
            raise ValueError("'mappings' section must map target fields to rule definitions")

        rules = []
        for target, rule_def in mappings.items():
            rule = self._parse_rule(str(target), rule_def)
            if rule is not None:
                rules.append(rule)

        logger.info(
            "Loaded mapping rules",
            extra={"config_path": str(self.config_path), "rule_count": len(rules)},
        )
        return rules

    def _parse_rule(self, target: str, rule_def: Any) -> BaseRule | None:
        """
        Parse a single rule definition.

        Args:
            target: The target field this rule writes
            rule_def: The rule definition from YAML

        Returns:
            Parsed rule, or None if the entry is disabled

        Raises:
            ValueError: If the rule definition is invalid
        """
        if not isinstance(rule_def, dict):
            raise ValueError(f"Mapping for '{target}' must be a mapping with a 'type'")

        if "type" not in rule_def:
            raise ValueError(f"Mapping for '{target}' is missing 'type'")

        if not rule_def.get("enabled", True):
            logger.debug("Skipping disabled mapping", extra={"target": target})
            return None

        rule_type = rule_def["type"]
        if rule_type not in RULE_TYPES:
            raise ValueError(
                f"Unknown mapping type '{rule_type}' for '{target}'. "
                f"Must be one of: {', '.join(RULE_TYPES)}"
            )

        if rule_type == "rename":
            source = rule_def.get("source", rule_def.get("source_field"))
            if not source:
                raise ValueError(f"Rename mapping for '{target}' is missing 'source'")
            return RenameRule(target=target, source_field=str(source))

        if rule_type == "static":
            if "value" not in rule_def:
                raise ValueError(f"Static mapping for '{target}' is missing 'value'")
            value = rule_def["value"]
            return StaticRule(target=target, value="" if value is None else str(value))

        if rule_type == "combine":
            parts = [self._parse_part(target, part) for part in rule_def.get("fields") or []]
            return CombineRule(
                target=target,
                fields=parts,
                separator=rule_def.get("separator"),
            )

        return EmptyRule(target=target)

    def _parse_part(self, target: str, part: Any) -> CombinePart:
        """Parse one combine entry: a field name or {custom: <literal>}."""
        if isinstance(part, str):
            return CombinePart(value=part)
        if isinstance(part, dict) and "custom" in part:
            return CombinePart(value=str(part["custom"]), custom=True)
        if isinstance(part, dict) and "field" in part:
            return CombinePart(value=str(part["field"]))
        raise ValueError(
            f"Combine mapping for '{target}' has an invalid part {part!r}. "
            "Use a field name, {field: <name>} or {custom: <text>}"
        )


class MappingConfigBuilder:
    """
    Programmatically build mapping rules (for the mapping form or tests).
    """

    def __init__(self):
        """Initialize empty rule list."""
        self.rules: list[BaseRule] = []

    def add_rename(self, target: str, source_field: str) -> "MappingConfigBuilder":
        """Add a rename rule."""
        self.rules.append(RenameRule(target=target, source_field=source_field))
        return self

    def add_static(self, target: str, value: str) -> "MappingConfigBuilder":
        """Add a static value rule."""
        self.rules.append(StaticRule(target=target, value=value))
        return self

    def add_combine(
        self,
        target: str,
        fields: list[str | CombinePart],
        separator: str | None = None
    ) -> "MappingConfigBuilder":
        """
        Add a combine rule.

        Args:
            target: Target field name
            fields: Field names, or CombinePart instances for literal text
            separator: Text placed between present values (None for none)
        """
        parts = [CombinePart(value=f) if isinstance(f, str) else f for f in fields]
        self.rules.append(CombineRule(target=target, fields=parts, separator=separator))
        return self

    def add_empty(self, target: str) -> "MappingConfigBuilder":
        """Add an empty rule."""
        self.rules.append(EmptyRule(target=target))
        return self

    def build(self) -> list[BaseRule]:
        """Build and return the rule list."""
        return list(self.rules)
