# notes_service.py
# Description: Owns the note store and settings for a running QuickNotes session and
#              decides when they are written to disk.
#
# Imports
from pathlib import Path
from typing import Any, Optional, Union
#
# Third-Party Imports
from loguru import logger
#
# Local Imports
from ..models import AppSettings, Note
from ..Utils.paths import get_notes_file_path, get_settings_file_path
from .notes_persistence import (
    NotesStorageError,
    load_notes,
    load_settings,
    save_notes,
    save_settings,
)
from .notes_store import NoteStore
#
#######################################################################################################################
#
# Classes:

class NotesService:
    """
    Store, settings and save policy for one application session.

    The UI mutates state through this object and calls ``end_frame()`` once an
    input event has been handled. Notes are written at that point when they
    are dirty and auto-save is on, settings whenever they changed. A failed
    write leaves its flag set, so the next ``end_frame()`` retries it.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)
        self.notes_path = get_notes_file_path(self.data_dir)
        self.settings_path = get_settings_file_path(self.data_dir)

        try:
            notes = load_notes(self.notes_path)
        except NotesStorageError as e:
            logger.warning(f"Could not load notes, starting with an empty list: {e}")
            notes = []
        self.store = NoteStore(notes)

        try:
            self.settings = load_settings(self.settings_path)
        except NotesStorageError as e:
            logger.warning(f"Could not load settings, using defaults: {e}")
            self.settings = AppSettings()
        self.settings_changed = False

    # ---- Saving ----

    def save_notes(self) -> bool:
        try:
            save_notes(self.notes_path, self.store.notes)
        except NotesStorageError as e:
            logger.error(f"Failed to save notes: {e}")
            return False
        self.store.dirty = False
        return True

    def save_settings(self) -> bool:
        try:
            save_settings(self.settings_path, self.settings)
        except NotesStorageError as e:
            logger.error(f"Failed to save settings: {e}")
            return False
        self.settings_changed = False
        return True

    def end_frame(self) -> None:
        """Flush pending writes after an input event has been handled."""
        if self.store.dirty and self.settings.auto_save:
            self.save_notes()
        if self.settings_changed:
            self.save_settings()

    def shutdown(self) -> None:
        """Write anything still pending before the application exits."""
        if self.store.dirty:
            logger.info("Saving unsaved notes on exit")
            self.save_notes()
        if self.settings_changed:
            self.save_settings()

    # ---- Notes ----

    def add_note(self) -> Note:
        return self.store.add()

    def delete_selected(self) -> Optional[Note]:
        return self.store.delete_selected()

    def move_note(self, from_index: int, to_index: int) -> bool:
        return self.store.move(from_index, to_index)

    def _mark_edited(self) -> None:
        # Keystrokes only schedule a write when auto-save is on; Save writes explicitly.
        if self.settings.auto_save:
            self.store.dirty = True

    def edit_title(self, note_id: int, title: str) -> bool:
        changed = self.store.set_title(note_id, title)
        if changed:
            self._mark_edited()
        return changed

    def edit_body(self, note_id: int, body: str) -> bool:
        changed = self.store.set_body(note_id, body)
        if changed:
            self._mark_edited()
        return changed

    def begin_edit(self, note_id: int) -> bool:
        return self.store.begin_edit(note_id)

    def save_edit(self, note_id: int) -> bool:
        """Leave edit mode and write the notes file immediately."""
        if not self.store.commit_edit(note_id):
            return False
        self.store.dirty = True
        return self.save_notes()

    def close_edit(self, note_id: int) -> bool:
        """Leave edit mode, restoring the body from its backup."""
        restored = self.store.discard_edit(note_id)
        if restored and self.settings.auto_save:
            # The restored body may differ from what auto-save already wrote.
            self.store.dirty = True
        return restored

    # ---- Settings ----

    def update_settings(self, **changes: Any) -> AppSettings:
        """Apply ``changes`` through model validation and mark settings for saving."""
        updated = AppSettings.model_validate({**self.settings.model_dump(), **changes})
        if updated != self.settings:
            self.settings = updated
            self.settings_changed = True
        return self.settings

    def reset_settings(self) -> AppSettings:
        self.settings = AppSettings()
        self.settings_changed = True
        return self.settings

#
# End of notes_service.py
#######################################################################################################################
