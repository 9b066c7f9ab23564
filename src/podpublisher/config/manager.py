"""Configuration loading for Podpublisher.

Values are merged with this precedence (highest first):
explicit overrides (CLI options), environment variables (including a
``.env`` file), the optional YAML config file, built-in defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from podpublisher.config.schema import PublisherConfig
from podpublisher.utils.errors import ConfigNotFoundError, InvalidConfigError

logger = logging.getLogger(__name__)

# Config field -> environment variables, first one set wins
ENV_VARS: dict[str, tuple[str, ...]] = {
    "claude_api_key": ("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
    "hosting_endpoint": ("HOSTING_API_ENDPOINT",),
    "podcast_id": ("PODCAST_ID",),
    "source_timezone": ("PODPUBLISHER_TIMEZONE",),
    "model": ("PODPUBLISHER_MODEL",),
    "output_dir": ("PODPUBLISHER_OUTPUT_DIR",),
    "log_level": ("PODPUBLISHER_LOG_LEVEL",),
}


class ConfigManager:
    """Builds a PublisherConfig from file, environment and overrides."""

    def __init__(
        self,
        config_file: Path | None = None,
        env_file: Path | None = None,
    ) -> None:
        """Initialize the config manager.

        Args:
            config_file: Optional YAML config file
            env_file: Optional dotenv file (default: search for ``.env``)
        """
        self.config_file = config_file
        self.env_file = env_file

    def load_config(self, **overrides: Any) -> PublisherConfig:
        """Load and validate configuration.

        Args:
            **overrides: Field values that win over every other source.
                ``None`` values are ignored.

        Returns:
            Validated PublisherConfig instance

        Raises:
            ConfigNotFoundError: If an explicit config file doesn't exist
            InvalidConfigError: If any source holds invalid values
        """
        self._load_env_file()

        data: dict[str, Any] = {}
        data.update(self._read_config_file())
        data.update(self._read_environment())
        data.update({key: value for key, value in overrides.items() if value is not None})

        try:
            return PublisherConfig(**data)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid configuration: {e}") from e

    def _load_env_file(self) -> None:
        if self.env_file is not None:
            if not self.env_file.exists():
                raise ConfigNotFoundError(f"Environment file not found: {self.env_file}")
            load_dotenv(self.env_file)
            logger.debug(f"Loaded environment from {self.env_file}")
        else:
            load_dotenv(find_dotenv(usecwd=True))

    def _read_config_file(self) -> dict[str, Any]:
        if self.config_file is None:
            return {}

        if not self.config_file.exists():
            raise ConfigNotFoundError(f"Config file not found: {self.config_file}")

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: expected a mapping"
            )

        logger.debug(f"Loaded config file {self.config_file}")
        return data

    @staticmethod
    def _read_environment() -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field_name, env_vars in ENV_VARS.items():
            for env_var in env_vars:
                value = os.environ.get(env_var)
                if value:
                    values[field_name] = value
                    break
        return values
