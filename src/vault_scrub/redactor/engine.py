"""Recursive redaction of JSON documents."""
from __future__ import annotations

from typing import Any, Dict, List

from ..models import JSONValue, RedactedEntry
from ..rules import RuleSet
from .classify import is_sensitive_key, is_sensitive_value
from .preview import preview_redactions


def redact(value: JSONValue, rules: RuleSet) -> JSONValue:
    """Return a redacted copy of ``value``; the input is never modified.

    Value patterns are only tested against string values of object properties.
    Array elements and a top-level primitive are returned as they are, even when
    they look sensitive. A sensitive key removes (or masks, in preserve-keys mode)
    its whole subtree without descending into it.
    """

    if isinstance(value, list):
        return [redact(item, rules) for item in value]
    if isinstance(value, dict):
        return _redact_object(value, rules)
    return value


def _redact_object(obj: Dict[str, Any], rules: RuleSet) -> Dict[str, Any]:
    redacted: Dict[str, Any] = {}
    for key, prop in obj.items():
        if is_sensitive_key(key, rules):
            if rules.preserve_keys:
                redacted[key] = rules.redaction_text
            continue
        if isinstance(prop, (dict, list)):
            redacted[key] = redact(prop, rules)
        elif is_sensitive_value(prop, rules):
            redacted[key] = rules.redaction_text
        else:
            redacted[key] = prop
    return redacted


class RedactionEngine:
    """Applies one rule set to any number of documents."""

    def __init__(self, rules: RuleSet) -> None:
        self.rules = rules

    def redact(self, document: JSONValue) -> JSONValue:
        return redact(document, self.rules)

    def preview(self, document: JSONValue, limit: int = 10) -> List[RedactedEntry]:
        redacted = self.redact(document)
        return list(preview_redactions(redacted, self.rules.redaction_text, limit=limit))


__all__ = ["RedactionEngine", "redact"]
