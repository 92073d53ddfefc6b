"""
Configuration loader for JSON files
"""
import os
import json
from pathlib import Path
from typing import Optional, Dict, Any
from colorama import Fore, Style

from ..errors import ConfigError

CONFIG_ENV_VAR = "BUCKETSYNC_CONFIG"
CONFIG_FILENAME = "bucketsync.json"

# Default configuration. Every key accepted by ``--config`` must appear here.
DEFAULT_CONFIG: Dict[str, Any] = {
    "bucket": "",
    "region": "",
    "endpoint_url": "",
    "profile": "",
    "access_key_file": "",
    "prefix": "",
    "local_dir": ".",
    "exceptions": [],
    "cache_control": "",
    "separator": ".",
    "force": False,
    "remove_old_version": False,
    "same_name_skip": False,
    "continue_on_error": False,
    "manifest": "",
}

_SENSITIVE_MARKERS = ('token', 'key', 'password', 'secret')


class ConfigLoader:
    """Handles loading and saving the configuration file."""

    @staticmethod
    def get_config_path():
        """
        Get full path to the configuration file.

        ``$BUCKETSYNC_CONFIG`` wins; otherwise ``bucketsync.json`` in the
        current working directory.

        Returns:
            Full path to config file
        """
        override = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if override:
            return str(Path(override).expanduser())
        return str(Path.cwd() / CONFIG_FILENAME)

    @staticmethod
    def load_config_json(path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load the config file merged over :data:`DEFAULT_CONFIG`.

        A missing file is not an error; the defaults are returned.

        Args:
            path: Explicit config path (defaults to :meth:`get_config_path`)

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If the file exists but is not a JSON object
        """
        config_path = Path(path or ConfigLoader.get_config_path())
        config = dict(DEFAULT_CONFIG)

        if not config_path.exists():
            return config

        try:
            with open(config_path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Error loading {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a JSON object")

        config.update(data)
        return config

    @staticmethod
    def save_config_json(config: Dict[str, Any], path: Optional[str] = None) -> str:
        """
        Write *config* to disk.

        Returns:
            Path the file was written to
        """
        config_path = Path(path or ConfigLoader.get_config_path())
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)
        return str(config_path)


def merge_cli_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay CLI values onto *config*, ignoring unset (``None``) values.

    Boolean flags only override when they are True, so a flag left off on
    the command line never disables a setting from the config file.
    """
    merged = dict(config)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, bool) and not value:
            continue
        if isinstance(value, list) and not value:
            continue
        merged[key] = value
    return merged


def mask_value(key: str, value: Any) -> Any:
    """Mask values whose key looks sensitive."""
    if any(marker in key.lower() for marker in _SENSITIVE_MARKERS):
        if value and len(str(value)) > 4:
            return f"{str(value)[:4]}...{'*' * 8}"
    return value


def handle_config_update(config_json_string: str, path: Optional[str] = None) -> int:
    """Handle config update command.

    Args:
        config_json_string: JSON string with config updates
        path: Explicit config path

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config_updates = json.loads(config_json_string)
    except json.JSONDecodeError as e:
        print(f"{Fore.RED}[ERROR] Invalid JSON in --config argument: {e}{Style.RESET_ALL}")
        return 1

    if not isinstance(config_updates, dict):
        print(f"{Fore.RED}[ERROR] --config must be a JSON object (dictionary){Style.RESET_ALL}")
        return 1

    invalid_keys = [key for key in config_updates if key not in DEFAULT_CONFIG]
    if invalid_keys:
        print(f"{Fore.RED}[ERROR] Invalid configuration key(s): {', '.join(invalid_keys)}{Style.RESET_ALL}")
        print(f"\n{Fore.YELLOW}Valid keys:{Style.RESET_ALL}")
        for key in sorted(DEFAULT_CONFIG):
            print(f"  • {key}")
        return 1

    try:
        current_config = ConfigLoader.load_config_json(path)
    except ConfigError as e:
        print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
        return 1

    current_config.update(config_updates)

    try:
        config_path = ConfigLoader.save_config_json(current_config, path)
    except OSError as e:
        print(f"{Fore.RED}[ERROR] Failed to update configuration: {e}{Style.RESET_ALL}")
        return 1

    print(f"\n{Fore.GREEN}[SUCCESS] Configuration updated successfully{Style.RESET_ALL}")
    print(f"\n{Fore.CYAN}Updated values:{Style.RESET_ALL}")
    for key, value in config_updates.items():
        print(f"  {key}: {mask_value(key, value)}")

    print(f"\n{Fore.CYAN}Config file: {config_path}{Style.RESET_ALL}\n")
    return 0
