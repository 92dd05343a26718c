"""Key validation and layering for uuidify settings.

Settings are exactly two levels deep (``section.option``), so every source is
normalized into ``{section: {option: value}}`` and checked against the model
layout before the layers are stacked.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import UuidifyConfig

ENV_PREFIX = "UUIDIFY__"

Layer = Dict[str, Dict[str, Any]]


def settable_keys() -> Dict[str, Tuple[str, ...]]:
    """Return the ``section -> options`` layout of :class:`UuidifyConfig`."""
    layout: Dict[str, Tuple[str, ...]] = {}
    for section, field in UuidifyConfig.model_fields.items():
        layout[section] = tuple(field.annotation.model_fields)  # type: ignore[union-attr]
    return layout


def split_key(key: str, *, source: str) -> Tuple[str, str]:
    """Split a dotted key into a known ``(section, option)`` pair.

    Args:
        key: Key such as ``"naming.uppercase"``; matching is case-insensitive.
        source: Where the key came from, used in error messages.

    Raises:
        ConfigError: If the key is malformed or names an unknown setting.
    """
    parts = [part.strip().lower() for part in key.split(".")]
    if len(parts) != 2 or not all(parts):
        raise ConfigError(f"{source}: '{key}' must have the form 'section.option'.")

    section, option = parts
    layout = settable_keys()
    if section not in layout:
        raise ConfigError(
            f"{source}: unknown section '{section}'; expected one of {', '.join(layout)}."
        )
    if option not in layout[section]:
        raise ConfigError(
            f"{source}: unknown option '{option}' in '{section}'; "
            f"expected one of {', '.join(layout[section])}."
        )
    return section, option


def parse_value(raw: str) -> Any:
    """Interpret a textual value as a YAML scalar, keeping unparsable text as is."""
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def layer_from_env(env: Mapping[str, str]) -> Layer:
    """Collect ``UUIDIFY__SECTION__OPTION`` variables into a layer.

    Raises:
        ConfigError: If a prefixed variable does not name a known setting.
    """
    layer: Layer = {}
    for name, raw in env.items():
        if not name.startswith(ENV_PREFIX):
            continue
        dotted = name[len(ENV_PREFIX) :].replace("__", ".")
        section, option = split_key(dotted, source=f"environment variable {name}")
        layer.setdefault(section, {})[option] = parse_value(raw)
    return layer


def layer_from_dotted(values: Mapping[str, Any], *, source: str = "command line") -> Layer:
    """Collect ``{"section.option": value}`` overrides into a layer."""
    layer: Layer = {}
    for key, value in values.items():
        section, option = split_key(key, source=source)
        layer.setdefault(section, {})[option] = value
    return layer


def layer_from_document(data: Mapping[str, Any], *, source: str) -> Layer:
    """Validate the shape of a parsed config document.

    Option names are left to model validation so its messages reach the user.

    Raises:
        ConfigError: If a section is unknown or is not a mapping.
    """
    layout = settable_keys()
    layer: Layer = {}
    for section, values in data.items():
        if section not in layout:
            raise ConfigError(f"{source}: unknown section '{section}'.")
        if values is None:
            continue
        if not isinstance(values, Mapping):
            raise ConfigError(f"{source}: section '{section}' must be a mapping.")
        layer[section] = dict(values)
    return layer


def resolve_with_precedence(*layers: Optional[Layer]) -> UuidifyConfig:
    """Stack layers over the defaults, later layers winning per option.

    Typical order is file, environment, then command line.

    Raises:
        ConfigError: If the combined values fail validation.
    """
    merged: Layer = {}
    for layer in layers:
        for section, values in (layer or {}).items():
            merged.setdefault(section, {}).update(values)

    try:
        return UuidifyConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


__all__ = [
    "ENV_PREFIX",
    "layer_from_document",
    "layer_from_dotted",
    "layer_from_env",
    "parse_value",
    "resolve_with_precedence",
    "settable_keys",
    "split_key",
]
