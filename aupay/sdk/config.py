"""Configuration management for AU Pay Calc.

Configuration lives in a single settings.json holding machine-specific
defaults for the calculator:

- default_tax_year: tax year used when none is given (e.g. "2025-26")
- default_pay_frequency: weekly, fortnightly, monthly or quarterly
- full_time_hours: full-time hours per week (default 38)
- private_health_insurance: true if private hospital cover is held
- tax_rules_dir: extra directory of tax-rules/<year>.yaml files
- data_dir: custom data directory (usage counts)

Config directory resolution:
1. AU_PAY_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/au-pay-calc/ (XDG_CONFIG_HOME fallback)

Data paths follow XDG spec:
- settings.json "data_dir" key (if set via CLI)
- XDG_DATA_HOME/au-pay-calc/ or ~/.local/share/au-pay-calc/
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

APP_NAME = "au-pay-calc"
SETTINGS_FILENAME = "settings.json"

KNOWN_SETTINGS = {
    "default_tax_year": "Tax year used when --tax-year is omitted",
    "default_pay_frequency": "Pay frequency used when --frequency is omitted",
    "full_time_hours": "Full-time hours per week",
    "private_health_insurance": "Whether private hospital cover is held (true/false)",
    "tax_rules_dir": "Extra directory of <year>.yaml tax rules",
    "data_dir": "Directory for usage counts",
}


class ConfigError(Exception):
    """Raised when settings.json cannot be read."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. AU_PAY_CALC_CONFIG_PATH environment variable
    2. ~/.config/au-pay-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("AU_PAY_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        try:
            settings = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(f"Expected a JSON object in {settings_file}")
    return settings


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    logger.debug(f"Saved settings to {settings_file}")
    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "default_tax_year")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting from settings.json.

    Returns:
        True if the key was present and removed
    """
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_data_path() -> Path:
    """Get the data directory path.

    Uses settings.json "data_dir" if set, otherwise XDG_DATA_HOME/au-pay-calc/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
