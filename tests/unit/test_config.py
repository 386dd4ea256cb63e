from pathlib import Path

import pytest

pytest.importorskip("yaml")

from vault_scrub import config as config_module
from vault_scrub.config import AppConfig, dump_default_config, load_config
from vault_scrub.exceptions import ConfigError


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "runtime_config_dir", lambda: tmp_path / "user")
    return tmp_path


def test_defaults_when_no_file(isolated: Path) -> None:
    config = load_config()
    assert config == AppConfig()
    assert config.logging.normalized_level() == "INFO"
    assert config.redaction.rules_file is None
    assert config.redaction.preserve_keys is False


def test_project_config_is_discovered(isolated: Path) -> None:
    project = isolated / ".vault-scrub" / "config.yaml"
    project.parent.mkdir()
    project.write_text("logging:\n  level: debug\nredaction:\n  preserve_keys: true\n", encoding="utf-8")
    config = load_config()
    assert config.logging.normalized_level() == "DEBUG"
    assert config.redaction.preserve_keys is True


def test_explicit_path_wins(isolated: Path) -> None:
    explicit = isolated / "settings.yaml"
    explicit.write_text("redaction:\n  rules_file: rules.json\n", encoding="utf-8")
    assert load_config(explicit).redaction.rules_file == isolated / "rules.json"


def test_relative_rules_file_is_anchored_to_settings_dir(isolated: Path) -> None:
    settings_dir = isolated / "elsewhere"
    settings_dir.mkdir()
    explicit = settings_dir / "settings.yaml"
    explicit.write_text("redaction:\n  rules_file: rules/custom.yaml\n", encoding="utf-8")
    assert load_config(explicit).redaction.rules_file == settings_dir / "rules" / "custom.yaml"


def test_absolute_rules_file_is_kept(isolated: Path) -> None:
    rules_path = isolated / "abs" / "rules.json"
    explicit = isolated / "settings.yaml"
    explicit.write_text(f"redaction:\n  rules_file: {rules_path}\n", encoding="utf-8")
    assert load_config(explicit).redaction.rules_file == rules_path


def test_missing_explicit_path_raises(isolated: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(isolated / "absent.yaml")


def test_invalid_settings_raise(isolated: Path) -> None:
    explicit = isolated / "settings.yaml"
    explicit.write_text("redaction:\n  preserve_keys: [1, 2]\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(explicit)


def test_dump_default_config_round_trips(isolated: Path) -> None:
    target = isolated / "user" / "config.yaml"
    dump_default_config(target)
    assert load_config() == AppConfig()
