"""Rule set exports."""
from .loader import load_rules, parse_rules_source, read_rules_file
from .ruleset import DEFAULT_RULES, RuleSet, build_rules, compile_value_patterns
from .schema import RuleSetSource

__all__ = [
    "DEFAULT_RULES",
    "RuleSet",
    "RuleSetSource",
    "build_rules",
    "compile_value_patterns",
    "load_rules",
    "parse_rules_source",
    "read_rules_file",
]
