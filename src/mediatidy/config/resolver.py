"""Layering of settings sources into one validated configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import MediaTidyConfig

SECTIONS = ("walker", "logging", "cli")

# Each variable sets one field; a two-part location names ``section.field``.
ENV_VARIABLES: dict[str, tuple[str, ...]] = {
    "MEDIATIDY_TARGET_DIRS": ("target_dirs",),
    "MEDIATIDY_IGNORED_DIRECTORIES": ("ignored_directories",),
    "MEDIATIDY_DEFAULT_ARGS": ("default_args",),
    "MEDIATIDY_SEASON_DIR_NAME": ("season_dir_name",),
    "MEDIATIDY_WORKERS": ("walker", "max_workers"),
    "MEDIATIDY_FOLLOW_SYMLINKS": ("walker", "follow_symlinks"),
    "MEDIATIDY_LOG_LEVEL": ("logging", "level"),
    "MEDIATIDY_LOG_FILE": ("logging", "file"),
}

_PATH_LISTS = {"target_dirs", "ignored_directories"}


def environment_layer(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect the settings named by ``MEDIATIDY_*`` variables.

    Directory lists are split on ``os.pathsep`` like ``PATH``; ``default_args``
    is split on whitespace. Scalars are left as strings for validation to coerce.
    """
    layer: dict[str, Any] = {}
    for variable, location in ENV_VARIABLES.items():
        raw = env.get(variable)
        if raw is None:
            continue
        field = location[-1]
        value: Any
        if field in _PATH_LISTS:
            value = [item for item in raw.split(os.pathsep) if item]
        elif field == "default_args":
            value = raw.split()
        else:
            value = raw

        if len(location) == 1:
            layer[field] = value
        else:
            layer.setdefault(location[0], {})[field] = value
    return layer


def merge_layers(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Merge layers left to right.

    Top-level settings are replaced wholesale, so a later ``target_dirs`` list
    replaces an earlier one. The ``walker``, ``logging`` and ``cli`` sections
    merge field by field.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            if key in SECTIONS and isinstance(value, Mapping):
                section = merged.get(key)
                merged[key] = {**(section if isinstance(section, dict) else {}), **value}
            else:
                merged[key] = value
    return merged


def build_config(*layers: Mapping[str, Any]) -> MediaTidyConfig:
    """Validate the merged layers on top of the built-in defaults.

    Raises:
        ConfigError: If any merged value fails validation.
    """
    try:
        return MediaTidyConfig.model_validate(merge_layers(*layers))
    except ValidationError as exc:
        raise ConfigError(describe_validation_error(exc)) from exc


def describe_validation_error(exc: ValidationError) -> str:
    """Render pydantic errors as one ``location: message`` line per problem."""
    lines = ["Invalid configuration:"]
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "(top level)"
        lines.append(f"  {location}: {error['msg']}")
    return "\n".join(lines)


__all__ = [
    "ENV_VARIABLES",
    "SECTIONS",
    "build_config",
    "describe_validation_error",
    "environment_layer",
    "merge_layers",
]
