# notes_persistence.py
# Description: JSON load/save for the notes list and the user settings.
#
# Imports
import json
from pathlib import Path
from typing import List, Sequence, Union
#
# Third-Party Imports
from loguru import logger
from pydantic import TypeAdapter, ValidationError
#
# Local Imports
from ..models import AppSettings, Note
from ..Utils.atomic_file_ops import atomic_write_json
#
#######################################################################################################################
#
# Exceptions:

class NotesStorageError(Exception):
    """Base exception for notes/settings file errors."""
    pass


class NotesLoadError(NotesStorageError):
    """A notes or settings file exists but could not be read or parsed."""
    pass


class NotesSaveError(NotesStorageError):
    """A notes or settings file could not be written."""
    pass

#
#######################################################################################################################
#
# Functions:

_NOTE_LIST_ADAPTER = TypeAdapter(List[Note])


def _read_json(path: Path):
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise NotesLoadError(f"Could not read {path}: {e}") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise NotesLoadError(f"Malformed JSON in {path}: {e}") from e


def _write_json(path: Path, data) -> None:
    try:
        atomic_write_json(path, data, indent=2)
    except (OSError, TypeError) as e:
        raise NotesSaveError(f"Could not write {path}: {e}") from e


def load_notes(path: Union[str, Path]) -> List[Note]:
    """
    Load the ordered note list from ``path``.

    A missing file is an empty collection, not an error. The legacy
    ``editing``/``backup`` fields are accepted and ignored.

    Raises:
        NotesLoadError: The file exists but is unreadable, not JSON, or does
            not describe a list of notes.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No notes file at {path}, starting empty")
        return []

    data = _read_json(path)
    try:
        notes = _NOTE_LIST_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise NotesLoadError(f"Invalid note records in {path}: {e}") from e
    logger.info(f"Loaded {len(notes)} notes from {path}")
    return notes


def save_notes(path: Union[str, Path], notes: Sequence[Note]) -> None:
    """
    Write ``notes`` to ``path`` as a pretty-printed JSON array.

    Each record carries ``editing: false`` and ``backup: null`` so files stay
    readable by older builds that expect those fields.

    Raises:
        NotesSaveError: The file could not be written.
    """
    records = []
    for note in notes:
        record = note.model_dump()
        record["editing"] = False
        record["backup"] = None
        records.append(record)
    _write_json(Path(path), records)
    logger.debug(f"Saved {len(records)} notes to {path}")


def load_settings(path: Union[str, Path]) -> AppSettings:
    """
    Load user settings from ``path``, or the defaults if it does not exist.

    Raises:
        NotesLoadError: The file exists but cannot be parsed into settings.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return AppSettings()

    data = _read_json(path)
    try:
        return AppSettings.model_validate(data)
    except ValidationError as e:
        raise NotesLoadError(f"Invalid settings in {path}: {e}") from e


def save_settings(path: Union[str, Path], settings: AppSettings) -> None:
    """Write ``settings`` to ``path``. Raises NotesSaveError on failure."""
    _write_json(Path(path), settings.model_dump())
    logger.debug(f"Saved settings to {path}")

#
# End of notes_persistence.py
#######################################################################################################################
