"""Manages configuration for pyglean.

This module is responsible for loading, managing, and saving the SDK
configuration that the validators check. It aggregates settings from default
values, TOML files, and environment variables, providing a unified interface
for accessing them.
"""

import copy
import os
import sys
from pathlib import Path
from typing import Dict, Any, Optional

try:
    import tomllib  # Available in Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python versions < 3.11

import tomli_w

from ..utils.types import UNDEFINED

# The default path for the user-specific global configuration file.
USER_CONFIG_PATH = Path.home() / ".config" / "pyglean" / "config.toml"

# The project-level configuration file looked up in the working directory.
PROJECT_CONFIG_NAME = "pyglean.toml"

_BOOL_KEYS = ("upload_enabled", "log_pings")
_INT_KEYS = ("max_events", "header_max_length", "max_source_tags")
_LIST_KEYS = ("disable_validators", "enable_validators", "source_tags")


class Config:
    """Handles the SDK configuration checked by pyglean.

    This class loads configuration from multiple sources with a defined
    precedence:
    1.  Default values (lowest precedence).
    2.  Project-specific `pyglean.toml` file.
    3.  User-level `~/.config/pyglean/config.toml` file.
    4.  A custom configuration file specified at runtime, which replaces
        the two file locations above.
    5.  Environment variables (highest precedence).

    Values are kept exactly as they were read, whatever their type, since
    checking them is the validators' job.

    Attributes:
        DEFAULT_CONFIG (Dict[str, Any]): A dictionary containing the default
            configuration values.
    """

    DEFAULT_CONFIG: Dict[str, Any] = {
        "server_endpoint": "https://incoming.telemetry.mozilla.org",
        "upload_enabled": True,
        "max_events": 1,
        "disable_validators": [],
        "enable_validators": [],  # If specified, only these validators run.
        "debug": {
            "log_pings": False,
        },
        "validation": {
            "header_max_length": 20,
            "max_source_tags": 5,
        },
    }

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initializes the configuration manager.

        Args:
            config_path (Optional[Path]): An optional path to a specific
                configuration file to load. If provided, it takes precedence
                over default file locations.
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.loaded_files: list = []
        self._load_config(config_path)

    def _load_config(self, config_path: Optional[Path] = None) -> None:
        if config_path:
            self._load_file_config(Path(config_path))
        else:
            self._load_default_configs()

        self._load_env_config()

    def _load_default_configs(self) -> None:
        """Loads configs from standard locations if they exist."""
        project_config = Path.cwd() / PROJECT_CONFIG_NAME
        if project_config.exists():
            self._load_file_config(project_config)

        if USER_CONFIG_PATH.exists():
            self._load_file_config(USER_CONFIG_PATH)

    def _merge_configs(self, base: Dict[str, Any], new: Dict[str, Any]) -> None:
        """Recursively merges a new config dict into a base dict.

        Args:
            base (Dict[str, Any]): The base configuration dictionary.
            new (Dict[str, Any]): The new configuration to merge in.
        """
        for key, value in new.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value

    def _load_file_config(self, config_path: Path) -> None:
        """Loads and merges configuration from a TOML file.

        A file that cannot be read or parsed is reported and skipped.

        Args:
            config_path (Path): The path to the TOML configuration file.
        """
        try:
            with open(config_path, "rb") as f:
                file_config = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            print(f"Warning: Could not load config from {config_path}: {e}", file=sys.stderr)
            return
        self._merge_configs(self.config, file_config)
        self.loaded_files.append(str(config_path))

    def _load_env_config(self) -> None:
        """Loads and merges configuration from environment variables."""
        env_mapping = {
            "PYGLEAN_APPLICATION_ID": "application_id",
            "PYGLEAN_SERVER_ENDPOINT": "server_endpoint",
            "PYGLEAN_APP_BUILD": "app_build",
            "PYGLEAN_APP_DISPLAY_VERSION": "app_display_version",
            "PYGLEAN_CHANNEL": "channel",
            "PYGLEAN_UPLOAD_ENABLED": "upload_enabled",
            "PYGLEAN_MAX_EVENTS": "max_events",
            "PYGLEAN_DISABLE_VALIDATORS": "disable_validators",
            "PYGLEAN_ENABLE_VALIDATORS": "enable_validators",
            "PYGLEAN_LOG_PINGS": "debug.log_pings",
            "PYGLEAN_DEBUG_VIEW_TAG": "debug.debug_view_tag",
            "PYGLEAN_SOURCE_TAGS": "debug.source_tags",
            "PYGLEAN_HEADER_MAX_LENGTH": "validation.header_max_length",
            "PYGLEAN_MAX_SOURCE_TAGS": "validation.max_source_tags",
        }

        for env_var, config_key in env_mapping.items():
            value = os.getenv(env_var)
            if value is not None:
                self._set_nested_key(config_key, value)

    def _set_nested_key(self, key_path: str, value: str) -> None:
        """Sets a value in the config dict using a dot-separated path.

        Environment variables are always strings, so the value is cast
        according to the key it is stored under. A value that cannot be cast
        is stored as-is, so the validators report it.

        Args:
            key_path (str): The dot-separated key (e.g., "debug.log_pings").
            value (str): The string value from the environment variable.
        """
        keys = key_path.split('.')
        target_config = self.config
        for key in keys[:-1]:
            if key not in target_config or not isinstance(target_config[key], dict):
                target_config[key] = {}
            target_config = target_config[key]

        leaf_key = keys[-1]

        if leaf_key in _BOOL_KEYS:
            target_config[leaf_key] = value.lower() in ("true", "1", "yes", "on")
        elif leaf_key in _INT_KEYS:
            try:
                target_config[leaf_key] = int(value)
            except ValueError:
                print(f"Warning: Invalid integer value for {leaf_key}: {value}", file=sys.stderr)
                target_config[leaf_key] = value
        elif leaf_key in _LIST_KEYS:
            target_config[leaf_key] = [v.strip() for v in value.split(",") if v.strip()]
        else:
            target_config[leaf_key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieves a configuration value using a dot-separated key.

        Pass `UNDEFINED` as the default to tell a missing key apart from one
        explicitly set to None.

        Args:
            key (str): The dot-separated key (e.g., "debug.debug_view_tag").
            default (Any): The default value to return if the key is not found.

        Returns:
            Any: The configuration value or the default.
        """
        keys = key.split('.')
        value = self.config
        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def has(self, key: str) -> bool:
        """Checks whether a dot-separated key is set."""
        return self.get(key, UNDEFINED) is not UNDEFINED

    def set(self, key: str, value: Any) -> None:
        """Sets a configuration value in memory.

        Args:
            key (str): The dot-separated key (e.g., "debug.log_pings").
            value (Any): The value to set.
        """
        keys = key.split('.')
        target_config = self.config
        for k in keys[:-1]:
            target_config = target_config.setdefault(k, {})
        target_config[keys[-1]] = value

    def is_validator_enabled(self, validator_name: str) -> bool:
        """Checks if a specific validator is enabled.

        If `enable_validators` is set, the validator is enabled only if it's
        in that list. Otherwise, the validator is enabled unless it's in the
        `disable_validators` list.

        Args:
            validator_name (str): The name of the validator to check.

        Returns:
            bool: True if the validator is enabled, False otherwise.
        """
        enabled_list = self.get("enable_validators", [])
        if enabled_list:
            return validator_name in enabled_list

        disabled_list = self.get("disable_validators", [])
        return validator_name not in disabled_list

    def _get_user_config(self) -> Dict[str, Any]:
        """Loads and returns the contents of the user config file.

        Returns:
            Dict[str, Any]: The user configuration dictionary, or an empty
            dict if the file doesn't exist or fails to parse.
        """
        if not USER_CONFIG_PATH.exists():
            return {}
        try:
            with open(USER_CONFIG_PATH, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return {}

    def save_user_config(self) -> None:
        """Saves the current configuration to the user config file.

        Only settings that differ from the defaults are written, on top of
        whatever the user file already contains.

        Raises:
            IOError: If the configuration file cannot be written.
        """
        user_config = self._get_user_config()

        for key, value in self.config.items():
            if self.DEFAULT_CONFIG.get(key, UNDEFINED) != value:
                user_config[key] = value

        try:
            USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
            with open(USER_CONFIG_PATH, "wb") as f:
                tomli_w.dump(user_config, f)
        except (OSError, TypeError) as e:
            raise IOError(f"Failed to save configuration to {USER_CONFIG_PATH}: {e}")

    def __str__(self) -> str:
        return f"Config({self.config})"
