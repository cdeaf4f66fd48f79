"""
Logging configuration for QuickNotes.

The terminal belongs to the UI while the app runs, so the default stderr sink
is replaced with a rotating log file. A stderr sink can be turned back on from
the config file for debugging.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from .config import get_cli_setting
from .Utils.paths import get_default_log_file

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(level: Optional[str], default: str = "INFO") -> str:
    """Upper-case ``level`` and fall back to ``default`` for unknown names."""
    if not level:
        return default
    level = str(level).upper()
    return level if level in VALID_LOG_LEVELS else default


def configure_logging(
    data_dir: Union[str, Path],
    config: Optional[Dict[str, Any]] = None,
) -> Optional[Path]:
    """
    Configure loguru sinks from the ``[general]`` and ``[logging]`` sections.

    This should be called once at startup, before the app is created.

    Returns:
        The log file path, or None when file logging is disabled.
    """
    level = normalize_log_level(get_cli_setting("general", "log_level", "INFO", config=config))

    logger.remove()  # Remove default handler

    log_file: Optional[Path] = None
    if get_cli_setting("logging", "log_to_file", True, config=config):
        configured = get_cli_setting("logging", "log_file", "", config=config)
        log_file = Path(configured).expanduser() if configured else get_default_log_file(data_dir)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=str(log_file),
            level=level,
            rotation=get_cli_setting("logging", "rotation", "10 MB", config=config),
            retention=get_cli_setting("logging", "retention", "7 days", config=config),
            encoding="utf-8",
        )

    if get_cli_setting("logging", "log_to_console", False, config=config):
        logger.add(sink=sys.stderr, level=level, colorize=True)

    logger.info(f"QuickNotes logging configured: level={level}, file={log_file}")
    return log_file
