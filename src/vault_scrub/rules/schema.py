"""Schema for user supplied rule overrides."""
from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RuleSetSource(BaseModel):
    """Partially populated override document, typically parsed from a config file.

    Every field is optional. A field that is missing or ``null`` leaves the base
    value in place; a supplied field replaces it outright. The names used by the
    legacy ``redact-sensitive`` config files (``sensitiveKeys``,
    ``sensitiveProperties``, ``sensitivePatterns``) are accepted as aliases.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    key_name_patterns: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("keyNamePatterns", "sensitiveKeys", "key_name_patterns"),
    )
    exact_property_names: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices(
            "exactPropertyNames", "sensitiveProperties", "exact_property_names"
        ),
    )
    value_patterns: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("valuePatterns", "sensitivePatterns", "value_patterns"),
    )
    redaction_text: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("redactionText", "redaction_text"),
    )
    preserve_keys: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("preserveKeys", "preserve_keys"),
    )


__all__ = ["RuleSetSource"]
