"""Configuration management for the spot reconciler."""
import copy
import json
import logging
import os
import re
import threading
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from spot_reconciler.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_FILENAME, ENV_OVERRIDES
from spot_reconciler.config.schemas import AppConfig, validate_config
from spot_reconciler.domain.base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:default}
_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}")


class ConfigurationManager:
    """
    Builds the application configuration from layered sources.

    Sources, lowest priority first:
    - DEFAULT_CONFIG
    - A JSON configuration file (explicit path, or
      $SPOT_RECONCILER_CONFDIR/spot_reconciler.json when present)
    - Environment variable overrides (ENV_OVERRIDES)

    ${VAR:default} placeholders in string values are expanded from the
    environment before validation.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file

        Raises:
            ConfigurationError: If the configuration file cannot be loaded
        """
        self._lock = threading.RLock()
        self._config_file = config_file
        self._app_config: Optional[AppConfig] = None
        self._config = self._load_raw_config()

    def _load_raw_config(self) -> Dict[str, Any]:
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self._config_file:
            if not os.path.exists(self._config_file):
                raise ConfigurationError(f"Configuration file not found: {self._config_file}")
            self._deep_update(config, self._load_config_file(self._config_file))
        else:
            default_config_path = os.path.join(
                os.environ.get("SPOT_RECONCILER_CONFDIR", ""),
                DEFAULT_CONFIG_FILENAME,
            )
            if os.path.exists(default_config_path):
                self._deep_update(config, self._load_config_file(default_config_path))

        self._apply_env_overrides(config)
        return config

    @staticmethod
    def _load_config_file(config_path: str) -> Dict[str, Any]:
        """Load configuration from file."""
        try:
            with open(config_path, "r") as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {str(e)}")
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a JSON object")
        logger.debug("Loaded configuration file %s", config_path)
        return user_config

    @staticmethod
    def _deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                ConfigurationManager._deep_update(target[key], value)
            else:
                target[key] = value

    def _apply_env_overrides(self, config: Dict[str, Any]) -> None:
        """Apply environment variable overrides (highest priority)."""
        for env_var, path in ENV_OVERRIDES.items():
            if env_var in os.environ:
                self._set_nested_value(config, path, os.environ[env_var])

    @staticmethod
    def _set_nested_value(config: Dict[str, Any], path: Tuple[str, ...], value: Any) -> None:
        """Set a nested configuration value."""
        current = config
        for key in path[:-1]:
            current = current.setdefault(key, {})
        current[path[-1]] = value

    def _interpolate_values(self, config: Any) -> Any:
        """Interpolate ${VAR:default} placeholders in configuration values."""
        if isinstance(config, str):
            def replace(match: "re.Match") -> str:
                var_name, default = match.group(1), match.group(2)
                return os.environ.get(var_name, default if default is not None else match.group(0))
            return _PLACEHOLDER.sub(replace, config)
        elif isinstance(config, dict):
            return {k: self._interpolate_values(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._interpolate_values(v) for v in config]
        return config

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """
        Update configuration with user-provided values.

        Args:
            user_config: Configuration dictionary to merge over the current one
        """
        with self._lock:
            self._deep_update(self._config, user_config)
            self._app_config = None

    def get_config(self) -> Dict[str, Any]:
        """
        Get the complete configuration with all interpolations applied.

        Returns:
            Dict containing the complete configuration
        """
        with self._lock:
            return self._interpolate_values(self._config)

    @property
    def app_config(self) -> AppConfig:
        """Validated application configuration, built on first access."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._validate()
        return self._app_config

    def _validate(self) -> AppConfig:
        try:
            return validate_config(self.get_config())
        except PydanticValidationError as e:
            fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            raise ConfigurationError(f"Invalid configuration: {str(e)}", missing_fields=fields)

    def reload(self) -> None:
        """Reload configuration from sources."""
        with self._lock:
            self._config = self._load_raw_config()
            self._app_config = None
