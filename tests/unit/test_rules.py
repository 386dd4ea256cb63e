import dataclasses

import pytest
import regex

from vault_scrub.exceptions import ConfigError
from vault_scrub.rules import DEFAULT_RULES, RuleSet, RuleSetSource, build_rules, compile_value_patterns


def test_default_rules_cover_export_fields():
    assert "password" in DEFAULT_RULES.key_name_patterns
    assert "security" in DEFAULT_RULES.key_name_patterns
    assert "emailaddress" in DEFAULT_RULES.exact_property_names
    assert "socialsecuritynumber" in DEFAULT_RULES.exact_property_names
    assert len(DEFAULT_RULES.value_patterns) == 5
    assert DEFAULT_RULES.redaction_text == "[REDACTED]"
    assert DEFAULT_RULES.preserve_keys is False


def test_override_replaces_only_supplied_field():
    rules = build_rules(DEFAULT_RULES, {"keyNamePatterns": ["foo"]})
    assert rules.key_name_patterns == ("foo",)
    assert rules.exact_property_names == DEFAULT_RULES.exact_property_names
    assert rules.value_patterns == DEFAULT_RULES.value_patterns
    assert rules.redaction_text == DEFAULT_RULES.redaction_text
    assert rules.preserve_keys == DEFAULT_RULES.preserve_keys


def test_override_value_patterns_drops_defaults():
    rules = build_rules(DEFAULT_RULES, {"valuePatterns": [r"acct-\d+"]})
    assert [pattern.pattern for pattern in rules.value_patterns] == [r"acct-\d+"]


def test_empty_override_list_clears_category():
    rules = build_rules(DEFAULT_RULES, {"exactPropertyNames": []})
    assert rules.exact_property_names == frozenset()


def test_exact_names_are_lowercased():
    rules = build_rules(DEFAULT_RULES, {"exactPropertyNames": ["CardPIN", "Cvv"]})
    assert rules.exact_property_names == frozenset({"cardpin", "cvv"})


def test_key_patterns_keep_their_spelling():
    rules = build_rules(DEFAULT_RULES, {"keyNamePatterns": ["ApiKey"]})
    assert rules.key_name_patterns == ("ApiKey",)


def test_scalar_overrides():
    rules = build_rules(DEFAULT_RULES, {"redactionText": "***", "preserveKeys": True})
    assert rules.redaction_text == "***"
    assert rules.preserve_keys is True
    assert rules.key_name_patterns == DEFAULT_RULES.key_name_patterns


def test_legacy_field_names_are_accepted():
    rules = build_rules(
        DEFAULT_RULES,
        {"sensitiveKeys": ["pass"], "sensitiveProperties": ["pan"], "sensitivePatterns": ["x+"]},
    )
    assert rules.key_name_patterns == ("pass",)
    assert rules.exact_property_names == frozenset({"pan"})
    assert rules.value_patterns[0].pattern == "x+"


def test_unknown_and_null_fields_are_ignored():
    rules = build_rules(DEFAULT_RULES, {"colour": "blue", "keyNamePatterns": None})
    assert rules is DEFAULT_RULES


def test_none_overrides_return_base():
    assert build_rules(DEFAULT_RULES, None) is DEFAULT_RULES


def test_accepts_prevalidated_source():
    source = RuleSetSource(key_name_patterns=["token"])
    assert build_rules(DEFAULT_RULES, source).key_name_patterns == ("token",)


def test_invalid_value_pattern_raises_config_error():
    with pytest.raises(ConfigError, match="Invalid value pattern"):
        build_rules(DEFAULT_RULES, {"valuePatterns": ["[unclosed"]})


def test_wrongly_typed_field_raises_config_error():
    with pytest.raises(ConfigError):
        build_rules(DEFAULT_RULES, {"keyNamePatterns": "password"})


def test_non_mapping_overrides_raise_config_error():
    with pytest.raises(ConfigError):
        build_rules(DEFAULT_RULES, ["password"])  # type: ignore[arg-type]


def test_rule_set_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_RULES.preserve_keys = True  # type: ignore[misc]


def test_with_preserve_keys_returns_copy():
    forced = DEFAULT_RULES.with_preserve_keys(True)
    assert forced.preserve_keys is True
    assert DEFAULT_RULES.preserve_keys is False
    assert forced.key_name_patterns == DEFAULT_RULES.key_name_patterns


def test_compile_value_patterns_returns_compiled():
    patterns = compile_value_patterns(["a+", "b?"])
    assert all(isinstance(pattern, type(regex.compile(""))) for pattern in patterns)


def test_describe_uses_override_field_names():
    rules = RuleSet(
        key_name_patterns=("pin",),
        exact_property_names={"CVV"},
        value_patterns=compile_value_patterns(["[0-9]+"]),
    )
    assert rules.describe() == {
        "keyNamePatterns": ["pin"],
        "exactPropertyNames": ["cvv"],
        "valuePatterns": ["[0-9]+"],
        "redactionText": "[REDACTED]",
        "preserveKeys": False,
    }
