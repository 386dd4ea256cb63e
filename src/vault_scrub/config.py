"""Application settings loading for vault-scrub."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .paths import project_config_path, runtime_config_dir


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class RedactionConfig(BaseModel):
    rules_file: Optional[Path] = Field(
        default=None, description="Rule overrides applied when --config is not given"
    )
    preserve_keys: bool = Field(
        default=False, description="Keep sensitive keys with the redaction marker as value"
    )


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    redaction: RedactionConfig = Field(default_factory=RedactionConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield project_config_path()
    yield runtime_config_dir() / "config.yaml"


def _anchor_paths(config: AppConfig, base: Path) -> AppConfig:
    """Resolve relative paths in ``config`` against the settings file directory."""
    rules_file = config.redaction.rules_file
    if rules_file is not None:
        rules_file = rules_file.expanduser()
        config.redaction.rules_file = rules_file if rules_file.is_absolute() else base / rules_file
    return config


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is not None and not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")
    for candidate in config_search_paths(path):
        if candidate.is_file():
            try:
                with candidate.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {candidate}: {exc}") from exc
            try:
                config = AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ConfigError(f"Invalid configuration in {candidate}: {exc}") from exc
            return _anchor_paths(config, candidate.parent)
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)
