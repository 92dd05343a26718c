"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from uuidify.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ConfigManager,
    UuidifyConfig,
    resolve_with_precedence,
    settable_keys,
)
from uuidify.config.resolver import layer_from_document, layer_from_env, split_key


def _manager(tmp_path: Path, env: dict[str, str] | None = None) -> ConfigManager:
    return ConfigManager(config_path=tmp_path / "config.yaml", env=env or {})


def test_default_path_lives_under_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert ConfigManager().config_path == tmp_path / ".uuidify" / "config.yaml"
    assert DEFAULT_CONFIG_PATH.name == "config.yaml"


def test_first_load_writes_defaults(tmp_path: Path) -> None:
    manager = _manager(tmp_path)

    config = manager.load()

    assert config == UuidifyConfig()
    text = manager.read_text()
    assert text.startswith("# uuidify configuration file")
    assert "UUIDIFY__<SECTION>__<OPTION>" in text
    assert "max_attempts: 16" in text


def test_layers_apply_file_then_env_then_cli(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text(
        "naming:\n  max_attempts: 4\ncli:\n  recent_limit: 3\n", encoding="utf-8"
    )
    env = {
        "UUIDIFY__CLI__RECENT_LIMIT": "9",
        "UUIDIFY__TRAVERSAL__INCLUDE_HIDDEN": "false",
        "PATH": "/usr/bin",
    }
    manager = _manager(tmp_path, env)

    from_env = manager.load()
    assert from_env.naming.max_attempts == 4
    assert from_env.cli.recent_limit == 9
    assert from_env.traversal.include_hidden is False

    from_cli = manager.load(cli_overrides={"cli.recent_limit": 2})
    assert from_cli.cli.recent_limit == 2

    without_env = manager.load(include_env=False)
    assert without_env.cli.recent_limit == 3
    assert without_env.traversal.include_hidden is True


def test_unknown_environment_key_is_reported(tmp_path: Path) -> None:
    manager = _manager(tmp_path, {"UUIDIFY__NAMING__CASE": "lower"})

    with pytest.raises(ConfigError, match="UUIDIFY__NAMING__CASE"):
        manager.load()


def test_env_values_keep_yaml_types() -> None:
    layer = layer_from_env(
        {"UUIDIFY__LOGGING__FILE": "null", "UUIDIFY__LOGGING__LEVEL": "debug: [", "OTHER": "x"}
    )

    assert layer == {"logging": {"file": None, "level": "debug: ["}}


@pytest.mark.parametrize(
    "key",
    ["naming", "naming.uppercase.extra", "colours.enabled", "naming.case", ".uppercase"],
)
def test_split_key_rejects_unknown_or_malformed_keys(key: str) -> None:
    with pytest.raises(ConfigError):
        split_key(key, source="test")


def test_split_key_is_case_insensitive() -> None:
    assert split_key("Naming.UPPERCASE", source="test") == ("naming", "uppercase")


def test_settable_keys_match_models() -> None:
    keys = settable_keys()

    assert keys["naming"] == ("uppercase", "max_attempts")
    assert set(keys) == {"naming", "traversal", "logging", "cli"}


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


@pytest.mark.parametrize(
    "document",
    [
        {"naming": {"max_attempts": 0}},
        {"cli": {"recent_limit": "many"}},
        {"naming": {"case": "lower"}},
        {"unknown_section": {"value": 1}},
        {"naming": True},
    ],
)
def test_invalid_documents_raise(document: dict) -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(layer_from_document(document, source="test"))


def test_set_value_updates_one_option(tmp_path: Path) -> None:
    manager = _manager(tmp_path)

    key, before, after = manager.set_value("Naming.Uppercase", "false")

    assert (key, before, after) == ("naming.uppercase", True, False)
    assert manager.load().naming.uppercase is False
    assert manager.load().naming.max_attempts == 16


def test_set_value_leaves_file_alone_on_error(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    manager.ensure_exists()
    original = manager.read_text()

    with pytest.raises(ConfigError):
        manager.set_value("naming.max_attempts", "0")

    assert manager.read_text() == original


def test_replace_text_keeps_comments(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    text = "# mine\ncli:\n  recent_limit: 7  # keep\n"

    config = manager.replace_text(text)

    assert config.cli.recent_limit == 7
    assert manager.read_text() == text


def test_replace_text_rejects_invalid_content(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    manager.ensure_exists()
    original = manager.read_text()

    with pytest.raises(ConfigError):
        manager.replace_text("cli:\n  recent_limit: -1\n")

    assert manager.read_text() == original
