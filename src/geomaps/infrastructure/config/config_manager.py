"""Configuration manager for loading and validating .geomaps.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from geomaps.domain.config import AppConfig, MapsConfig, RetryConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".geomaps.yml"


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .geomaps.yml and environment variables

    Configuration priority:
    1. Default values
    2. .geomaps.yml file (searched upward from current directory)
    3. Environment variables (GEOMAPS_*, GOOGLE_MAPS_*)
    4. CLI arguments (handled by CLI layer)
    """

    DEFAULT_CONFIG = {
        "maps": {
            "api_key": None,
            "client_id": None,
            "signing_key": None,
            "base_url": "https://maps.googleapis.com/maps/api/",
            "roads_base_url": "https://roads.googleapis.com/v1/",
            "timeout": 10.0,
            "language": None,
            "region": None,
        },
        # Defaults live on RetryConfig so that the file may use its aliases
        "retry": {},
    }

    # env var -> (section, key, converter)
    ENV_OVERRIDES = {
        "GOOGLE_MAPS_API_KEY": ("maps", "api_key", str),
        "GOOGLE_MAPS_CLIENT_ID": ("maps", "client_id", str),
        "GOOGLE_MAPS_SIGNING_KEY": ("maps", "signing_key", str),
        "GEOMAPS_BASE_URL": ("maps", "base_url", str),
        "GEOMAPS_TIMEOUT": ("maps", "timeout", float),
        "GEOMAPS_LANGUAGE": ("maps", "language", str),
        "GEOMAPS_REGION": ("maps", "region", str),
        "GEOMAPS_MAX_TRIES": ("retry", "max_tries", int),
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .geomaps.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {field}: {error['msg']}")
            raise ConfigurationError("Configuration validation failed:\n" + "\n".join(errors)) from e

    def _find_config_file(self) -> Optional[Path]:
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and environment, then validate

        Raises:
            ConfigurationError: If the file is not valid YAML or a section is not a mapping
            ValidationError: If configuration values are invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Failed to parse {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"{self.config_path} must contain a mapping at the top level")
            config_dict = self._merge_config(config_dict, file_config)
            for section in self.DEFAULT_CONFIG:
                if not isinstance(config_dict.get(section), dict):
                    raise ConfigurationError(f"Section '{section}' in {self.config_path} must be a mapping")
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        for env_name, (section, key, convert) in self.ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if not raw:
                continue
            try:
                config[section][key] = convert(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_name}: {raw!r}") from e
        return config

    def get_maps_config(self) -> MapsConfig:
        return self.config.maps

    def get_retry_config(self) -> RetryConfig:
        return self.config.retry

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)

        Args:
            key: Configuration key (e.g., "retry.max_tries" or "maps")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config.model_dump()
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
