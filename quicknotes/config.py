# quicknotes/config.py
# Description: Configuration management for the QuickNotes application.
#
# Imports
import copy
import sys
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
from pathlib import Path
from typing import Any, Dict, Optional
#
# Third-Party Imports
from loguru import logger
#
#######################################################################################################################
#
# Functions:

# --- Path to the application's configuration file ---
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "quicknotes" / "config.toml"

CONFIG_TOML_CONTENT = """
# Configuration for QuickNotes.
# Notes and display preferences are stored as JSON in the data directory;
# this file only controls where that directory is and how the app logs.

[general]
log_level = "INFO"              # DEBUG, INFO, WARNING, ERROR

[logging]
log_to_file = true
log_file = ""                   # Empty: <data_dir>/logs/quicknotes.log
rotation = "10 MB"
retention = "7 days"
log_to_console = false          # Writing to stderr garbles the terminal UI; enable for debugging only

[storage]
data_dir = ""                   # Empty: platform user data directory + /notes
"""

DEFAULT_CONFIG_FROM_TOML: Dict[str, Any] = tomllib.loads(CONFIG_TOML_CONTENT)

_CONFIG_CACHE: Optional[Dict[str, Any]] = None


def deep_merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``base`` with ``override`` merged in, recursing into tables."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_cli_config_and_ensure_existence(
    force_reload: bool = False,
    config_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load the TOML configuration, writing the default file on first run.

    User values are merged over the built-in defaults. A file that cannot be
    parsed is reported and the defaults are used instead. The result is cached
    until ``force_reload`` is passed.
    """
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None and not force_reload and config_path is None:
        return _CONFIG_CACHE

    path = config_path or DEFAULT_CONFIG_PATH
    loaded_config = copy.deepcopy(DEFAULT_CONFIG_FROM_TOML)

    if not path.exists():
        logger.info(f"Config file not found at {path}, creating it with defaults")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(CONFIG_TOML_CONTENT.lstrip(), encoding="utf-8")
            logger.info(f"Created default config file at {path}")
        except OSError as e:
            logger.error(f"Could not create default config file {path}: {e}. Using internal defaults.")
    else:
        try:
            with open(path, "rb") as f:
                user_config_from_file = tomllib.load(f)
            loaded_config = deep_merge_dicts(loaded_config, user_config_from_file)
            logger.info(f"Loaded config from {path}")
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Error decoding TOML config file {path}: {e}. Using internal defaults.")
        except OSError as e:
            logger.error(f"Could not read config file {path}: {e}. Using internal defaults.")

    if config_path is None:
        _CONFIG_CACHE = loaded_config
    return loaded_config


def get_cli_setting(section: str, key: str, default: Any = None,
                    config: Optional[Dict[str, Any]] = None) -> Any:
    """
    Look up ``[section] key``. Dotted sections address nested tables.
    Falls back to ``default`` when the section or key is missing.
    """
    current: Any = config if config is not None else load_cli_config_and_ensure_existence()
    for part in section.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    if not isinstance(current, dict):
        return default
    return current.get(key, default)

#
# End of config.py
#######################################################################################################################
