"""Configuration management for uuidify."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml

from .exceptions import ConfigError
from .models import UuidifyConfig
from .resolver import (
    ENV_PREFIX,
    layer_from_document,
    layer_from_dotted,
    layer_from_env,
    parse_value,
    resolve_with_precedence,
    settable_keys,
    split_key,
)

DEFAULT_CONFIG_PATH = Path("~/.uuidify/config.yaml")
_CONFIG_HEADER = (
    "# uuidify configuration file\n"
    f"# Override any option per run with {ENV_PREFIX}<SECTION>__<OPTION>.\n"
)


class ConfigManager:
    """Read, layer and update the YAML settings file.

    Args:
        config_path: Settings file; defaults to ``~/.uuidify/config.yaml``.
        env: Environment consulted for ``UUIDIFY__`` overrides.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> UuidifyConfig:
        """Return the effective settings: defaults < file < environment < CLI.

        Args:
            cli_overrides: Dotted ``section.option`` values from the command line.
            include_env: Whether ``UUIDIFY__`` variables are applied.

        Raises:
            ConfigError: If any source is malformed or the result is invalid.
        """
        self.ensure_exists()
        return resolve_with_precedence(
            self._file_layer(),
            layer_from_env(self._env) if include_env else None,
            layer_from_dotted(cli_overrides or {}),
        )

    def ensure_exists(self) -> Path:
        """Write the default settings if the file is missing."""
        if not self._config_path.exists():
            self._write(UuidifyConfig().model_dump(mode="python"))
        return self._config_path

    def read_text(self) -> str:
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def set_value(self, key: str, raw_value: str) -> Tuple[str, Any, Any]:
        """Store one option in the file.

        Args:
            key: Dotted ``section.option`` key.
            raw_value: YAML scalar text, e.g. ``"false"`` or ``"8"``.

        Returns:
            Tuple[str, Any, Any]: Canonical key, previous and new file-level
            values.

        Raises:
            ConfigError: If the key is unknown or the value fails validation;
                the file is left untouched.
        """
        section, option = split_key(key, source="config set")
        self.ensure_exists()
        data = self._read_document()
        layer = layer_from_document(data, source=str(self._config_path))
        before = getattr(getattr(resolve_with_precedence(layer), section), option)

        layer.setdefault(section, {})[option] = parse_value(raw_value)
        after = getattr(getattr(resolve_with_precedence(layer), section), option)

        self._write(layer)
        return f"{section}.{option}", before, after

    def replace_text(self, text: str) -> UuidifyConfig:
        """Validate edited file contents and write them verbatim.

        Comments and layout in ``text`` are preserved.

        Raises:
            ConfigError: If ``text`` is not a valid settings document.
        """
        data = _parse_document(text, source="edited configuration")
        config = resolve_with_precedence(layer_from_document(data, source="edited configuration"))
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(text, encoding="utf-8")
        return config

    def _file_layer(self) -> dict[str, dict[str, Any]]:
        return layer_from_document(self._read_document(), source=str(self._config_path))

    def _read_document(self) -> dict[str, Any]:
        return _parse_document(self.read_text(), source=str(self._config_path))

    def _write(self, data: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        body = yaml.safe_dump(dict(data), sort_keys=False)
        self._config_path.write_text(_CONFIG_HEADER + body, encoding="utf-8")


def _parse_document(text: str, *, source: str) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"{source}: invalid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"{source}: expected a mapping of sections at the top level.")
    return raw


__all__ = [
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "UuidifyConfig",
    "resolve_with_precedence",
    "settable_keys",
]
