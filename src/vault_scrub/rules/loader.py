"""Loading rule overrides from configuration files."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml

from ..exceptions import ConfigError
from .ruleset import DEFAULT_RULES, RuleSet, build_rules

logger = structlog.get_logger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def parse_rules_source(text: str, fmt: str = "json") -> Dict[str, Any]:
    """Parse override text into a mapping.

    ``fmt`` is ``"yaml"`` or ``"json"``. An empty YAML document yields an empty
    mapping; any other non-mapping top level is rejected.
    """

    try:
        if fmt == "yaml":
            raw = yaml.safe_load(text)
            if raw is None:
                raw = {}
        else:
            raw = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Rule overrides are not valid {fmt.upper()}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Rule overrides must be a mapping at the top level, got {type(raw).__name__}"
        )
    return raw


def read_rules_file(path: Path, *, base: RuleSet = DEFAULT_RULES) -> RuleSet:
    fmt = "yaml" if path.suffix.lower() in _YAML_SUFFIXES else "json"
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read rules file {path}: {exc}") from exc
    return build_rules(base, parse_rules_source(text, fmt))


def load_rules(
    path: Optional[Path] = None,
    *,
    base: RuleSet = DEFAULT_RULES,
    preserve_keys: bool = False,
) -> RuleSet:
    """Return the effective rule set for a run; never raises for a bad file.

    A rules file that cannot be read, parsed or compiled is logged and ``base`` is
    used instead. ``preserve_keys`` forces preserve-keys mode after the file has
    been applied.
    """

    rules = base
    if path is not None:
        try:
            rules = read_rules_file(path, base=base)
        except ConfigError as exc:
            logger.error("rules.load_failed", path=str(path), error=str(exc))
            logger.warning("rules.using_defaults")
            rules = base
        else:
            logger.debug("rules.loaded", path=str(path))
    if preserve_keys:
        rules = rules.with_preserve_keys(True)
    return rules


__all__ = ["load_rules", "parse_rules_source", "read_rules_file"]
