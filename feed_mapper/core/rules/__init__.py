"""
Transform engine and mapping configuration management.
"""

from .rule_config import MappingConfigBuilder, MappingConfigLoader
from .rule_engine import TransformEngine, apply_rules

__all__ = [
    "TransformEngine",
    "apply_rules",
    "MappingConfigLoader",
    "MappingConfigBuilder",
]
