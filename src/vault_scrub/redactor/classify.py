"""Key and value classification against a rule set."""
from __future__ import annotations

from typing import Any

from ..rules import RuleSet


def is_sensitive_key(key: str, rules: RuleSet) -> bool:
    key_lower = key.lower()
    if key_lower in rules.exact_property_names:
        return True
    return any(pattern.lower() in key_lower for pattern in rules.key_name_patterns)


def is_sensitive_value(value: Any, rules: RuleSet) -> bool:
    """Only strings are value-matched, and each pattern must match the whole string."""
    if not isinstance(value, str):
        return False
    return any(pattern.fullmatch(value) is not None for pattern in rules.value_patterns)


__all__ = ["is_sensitive_key", "is_sensitive_value"]
