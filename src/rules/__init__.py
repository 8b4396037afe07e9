"""Layer rules and configuration."""

from rules.config import (
    ConfigError,
    LayerCheckConfig,
    ScanConfig,
    load_config,
)
from rules.layers import BUILTIN_RULE_NAMES, BUILTIN_RULES, Rule, RuleSet

__all__ = [
    "BUILTIN_RULES",
    "BUILTIN_RULE_NAMES",
    "ConfigError",
    "LayerCheckConfig",
    "Rule",
    "RuleSet",
    "ScanConfig",
    "load_config",
]
