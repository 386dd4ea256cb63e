"""Immutable redaction rule set and its construction from overrides."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Tuple

import regex
from pydantic import ValidationError

from ..exceptions import ConfigError
from .schema import RuleSetSource

DEFAULT_REDACTION_TEXT = "[REDACTED]"


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Matching rules plus output policy for a single redaction run.

    ``exact_property_names`` is stored lower-cased. ``key_name_patterns`` keeps the
    spelling it was given and is lower-cased when compared.
    """

    key_name_patterns: Tuple[str, ...]
    exact_property_names: FrozenSet[str]
    value_patterns: Tuple[regex.Pattern[str], ...]
    redaction_text: str = DEFAULT_REDACTION_TEXT
    preserve_keys: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "key_name_patterns", tuple(self.key_name_patterns))
        object.__setattr__(
            self,
            "exact_property_names",
            frozenset(name.lower() for name in self.exact_property_names),
        )
        object.__setattr__(self, "value_patterns", tuple(self.value_patterns))

    def with_preserve_keys(self, preserve_keys: bool = True) -> "RuleSet":
        if preserve_keys == self.preserve_keys:
            return self
        return replace(self, preserve_keys=preserve_keys)

    def describe(self) -> Dict[str, Any]:
        """Return a JSON-friendly view of the rules, in override-file field names."""
        return {
            "keyNamePatterns": list(self.key_name_patterns),
            "exactPropertyNames": sorted(self.exact_property_names),
            "valuePatterns": [pattern.pattern for pattern in self.value_patterns],
            "redactionText": self.redaction_text,
            "preserveKeys": self.preserve_keys,
        }


def compile_value_patterns(sources: Iterable[str]) -> Tuple[regex.Pattern[str], ...]:
    compiled = []
    for source in sources:
        try:
            compiled.append(regex.compile(source))
        except regex.error as exc:
            raise ConfigError(f"Invalid value pattern {source!r}: {exc}") from exc
    return tuple(compiled)


DEFAULT_RULES = RuleSet(
    key_name_patterns=(
        "password",
        "pin",
        "email",
        "uuid",
        "secret",
        "token",
        "key",
        "credential",
        "auth",
        "login",
        "passcode",
        "security",
    ),
    exact_property_names=frozenset(
        {
            "password",
            "pin",
            "emailAddress",
            "uuid",
            "secretKey",
            "accessToken",
            "refreshToken",
            "apiKey",
            "privateKey",
            "creditCardNumber",
            "cvv",
            "ssn",
            "socialSecurityNumber",
        }
    ),
    value_patterns=(
        # PIN-like numbers
        regex.compile(r"[0-9]{4,6}"),
        regex.compile(
            r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}",
            regex.IGNORECASE,
        ),
        # Sample credentials shipped in the vendor's example exports
        regex.compile(r"testpass123!", regex.IGNORECASE),
        regex.compile(r"fakepassword456", regex.IGNORECASE),
        regex.compile(r"test@example\.com", regex.IGNORECASE),
    ),
    redaction_text=DEFAULT_REDACTION_TEXT,
    preserve_keys=False,
)


def _coerce_source(overrides: RuleSetSource | Mapping[str, Any]) -> RuleSetSource:
    if isinstance(overrides, RuleSetSource):
        return overrides
    if not isinstance(overrides, Mapping):
        raise ConfigError(
            f"Rule overrides must be a mapping, got {type(overrides).__name__}"
        )
    try:
        return RuleSetSource.model_validate(dict(overrides))
    except ValidationError as exc:
        raise ConfigError(f"Invalid rule overrides: {exc}") from exc


def build_rules(
    base: RuleSet,
    overrides: RuleSetSource | Mapping[str, Any] | None = None,
) -> RuleSet:
    """Overlay ``overrides`` onto ``base`` one field at a time.

    A supplied list replaces the base list entirely; nothing is appended. Supplying
    only ``keyNamePatterns`` therefore drops every default key pattern while the
    other four fields stay at their base values.

    Raises
    ------
    ConfigError
        If ``overrides`` is not a mapping, fails validation, or carries a value
        pattern that does not compile.
    """

    if overrides is None:
        return base
    source = _coerce_source(overrides)
    changes: Dict[str, Any] = {}
    if source.key_name_patterns is not None:
        changes["key_name_patterns"] = tuple(source.key_name_patterns)
    if source.exact_property_names is not None:
        changes["exact_property_names"] = frozenset(source.exact_property_names)
    if source.value_patterns is not None:
        changes["value_patterns"] = compile_value_patterns(source.value_patterns)
    if source.redaction_text is not None:
        changes["redaction_text"] = source.redaction_text
    if source.preserve_keys is not None:
        changes["preserve_keys"] = source.preserve_keys
    if not changes:
        return base
    return replace(base, **changes)


__all__ = [
    "DEFAULT_REDACTION_TEXT",
    "DEFAULT_RULES",
    "RuleSet",
    "build_rules",
    "compile_value_patterns",
]
