"""Settings for mediatidy runs.

Settings are layered: built-in defaults, then the YAML settings file, then
``MEDIATIDY_*`` environment variables, then command line overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import LOG_LEVELS, MediaTidyConfig
from .resolver import ENV_VARIABLES, build_config, environment_layer, merge_layers

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.mediatidy/config.yaml")
CONFIG_PATH_VARIABLE = "MEDIATIDY_CONFIG"


class ConfigManager:
    """Locate the settings file and layer it with environment and CLI overrides.

    The file is optional; without one the built-in defaults apply. mediatidy
    never writes it.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._env = env if env is not None else os.environ
        location = config_path or self._env.get(CONFIG_PATH_VARIABLE) or DEFAULT_CONFIG_PATH
        self._config_path = Path(location).expanduser()

    @property
    def config_path(self) -> Path:
        """Return the settings file location, whether or not it exists."""
        return self._config_path

    def read_file(self) -> dict[str, Any]:
        """Return the settings stored in the file, or ``{}`` when there is no file.

        Raises:
            ConfigError: If the file cannot be read or is not a YAML mapping.
        """
        try:
            text = self._config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            LOGGER.debug("No settings file at %s; using defaults", self._config_path)
            return {}
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._config_path}: {exc}") from exc

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{self._config_path} is not valid YAML: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self._config_path} must contain a mapping of settings.")
        return data

    def load(
        self,
        *,
        overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> MediaTidyConfig:
        """Return the validated settings for one command.

        Args:
            overrides: Command line values, nested by section
                (``{"walker": {"max_workers": 2}}``).
            include_env: Whether ``MEDIATIDY_*`` variables are applied.

        Raises:
            ConfigError: If the file is unreadable or a value is invalid.
        """
        layers: list[Mapping[str, Any]] = [self.read_file()]
        if include_env:
            layers.append(environment_layer(self._env))
        if overrides:
            layers.append(overrides)
        return build_config(*layers)


__all__ = [
    "CONFIG_PATH_VARIABLE",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_VARIABLES",
    "LOG_LEVELS",
    "MediaTidyConfig",
    "build_config",
    "environment_layer",
    "merge_layers",
]
