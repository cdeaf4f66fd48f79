# paths.py
# Description: Platform specific locations for QuickNotes data files.
#
# Imports
import os
import sys
from pathlib import Path
from typing import Optional, Union
#
#######################################################################################################################
#
# Functions:

NOTES_DIR_NAME = "notes"
NOTES_FILENAME = "notes.json"
SETTINGS_FILENAME = "settings.json"
LOGS_DIR_NAME = "logs"


def get_user_data_dir() -> Path:
    """
    Return the platform's per-user data directory.

    Windows uses %APPDATA%, macOS uses ~/Library/Application Support and
    everything else follows the XDG base directory spec. Falls back to the
    current directory when no home directory can be determined.
    """
    try:
        home = Path.home()
    except RuntimeError:
        return Path(".")

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else home / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"

    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home)
    return home / ".local" / "share"


def get_notes_data_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """Directory holding notes.json and settings.json. Created if missing."""
    if override:
        data_dir = Path(override).expanduser()
    else:
        data_dir = get_user_data_dir() / NOTES_DIR_NAME
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_notes_file_path(data_dir: Union[str, Path]) -> Path:
    return Path(data_dir) / NOTES_FILENAME


def get_settings_file_path(data_dir: Union[str, Path]) -> Path:
    return Path(data_dir) / SETTINGS_FILENAME


def get_default_log_file(data_dir: Union[str, Path]) -> Path:
    return Path(data_dir) / LOGS_DIR_NAME / "quicknotes.log"

#
# End of paths.py
#######################################################################################################################
