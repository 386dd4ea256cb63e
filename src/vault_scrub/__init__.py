"""Redact sensitive fields from password-manager JSON exports."""
from .exceptions import ConfigError, InputError, ScrubError
from .redactor import RedactionEngine, redact
from .rules import DEFAULT_RULES, RuleSet, build_rules, load_rules
from .version import __version__

__all__ = [
    "ConfigError",
    "InputError",
    "ScrubError",
    "RedactionEngine",
    "redact",
    "DEFAULT_RULES",
    "RuleSet",
    "build_rules",
    "load_rules",
    "__version__",
]
