"""
In-memory note collection.

The store owns the ordered list of notes (display order is persisted order),
the current selection, the search query and the dirty flag. Edit-mode
backups live in a side table keyed by note id so they never reach disk.
"""

import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from ..models import Note


@dataclass
class EditBuffer:
    """Body snapshot taken when a note enters edit mode."""
    backup: str


class NoteStore:
    """Ordered notes plus selection, search and edit state."""

    def __init__(self, notes: Optional[Iterable[Note]] = None):
        self._notes: List[Note] = list(notes or [])
        self.selected: Optional[int] = 0 if self._notes else None
        self.search_query: str = ""
        self.dirty: bool = False
        self._edit_buffers: Dict[int, EditBuffer] = {}

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self._notes)

    def __getitem__(self, index: int) -> Note:
        return self._notes[index]

    @property
    def notes(self) -> Tuple[Note, ...]:
        return tuple(self._notes)

    @property
    def selected_note(self) -> Optional[Note]:
        if self.selected is not None and 0 <= self.selected < len(self._notes):
            return self._notes[self.selected]
        return None

    @property
    def reorder_enabled(self) -> bool:
        """Drag-and-drop is only allowed on the unfiltered list."""
        return self.search_query == ""

    def index_of(self, note_id: int) -> Optional[int]:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def select(self, index: int) -> bool:
        if 0 <= index < len(self._notes):
            self.selected = index
            return True
        return False

    def _new_id(self) -> int:
        existing = {note.id for note in self._notes}
        while True:
            note_id = uuid.uuid4().int
            if note_id not in existing:
                return note_id

    def add(self) -> Note:
        """Insert a new note at the front and select it."""
        note = Note(id=self._new_id(), title=f"Note {len(self._notes) + 1}")
        self._notes.insert(0, note)
        self.selected = 0
        self.dirty = True
        logger.debug(f"Added note {note.id} ({note.title!r})")
        return note

    def delete_selected(self) -> Optional[Note]:
        """Remove the selected note. The first remaining note becomes selected."""
        note = self.selected_note
        if note is None:
            return None
        del self._notes[self.selected]
        self._edit_buffers.pop(note.id, None)
        self.selected = 0 if self._notes else None
        self.dirty = True
        logger.debug(f"Deleted note {note.id} ({note.title!r})")
        return note

    def filter(self, query: Optional[str] = None) -> Iterator[Tuple[int, str]]:
        """
        Yield ``(original_index, title)`` for notes matching ``query``.

        Case-insensitive substring match on title or body; an empty query
        matches everything. Evaluated lazily against the current notes, so it
        is recomputed on every call.
        """
        needle = (self.search_query if query is None else query).lower()
        for index, note in enumerate(self._notes):
            if not needle or needle in note.title.lower() or needle in note.body.lower():
                yield index, note.title

    def move(self, from_index: int, to_index: int) -> bool:
        """
        Move the note at ``from_index`` to insertion position ``to_index``.

        ``to_index`` counts gaps between rows (0 is before the first row,
        ``len`` is after the last). The selection follows the selected note by
        id. Returns False without touching the dirty flag when the move is out
        of range or would not change the order.
        """
        length = len(self._notes)
        if from_index < 0 or from_index >= length or to_index < 0 or to_index > length:
            return False
        if to_index in (from_index, from_index + 1):
            return False

        selected_id = self.selected_note.id if self.selected_note else None

        note = self._notes.pop(from_index)
        insert_at = to_index - 1 if to_index > from_index else to_index
        self._notes.insert(min(insert_at, len(self._notes)), note)

        self.selected = self.index_of(selected_id) if selected_id is not None else None
        self.dirty = True
        logger.debug(f"Moved note {note.id} from {from_index} to {insert_at}")
        return True

    # ---- Edit mode ----

    def is_editing(self, note_id: int) -> bool:
        return note_id in self._edit_buffers

    def backup_for(self, note_id: int) -> Optional[str]:
        buffer = self._edit_buffers.get(note_id)
        return buffer.backup if buffer else None

    def begin_edit(self, note_id: int) -> bool:
        """Enter edit mode, snapshotting the body. False if already editing."""
        index = self.index_of(note_id)
        if index is None or note_id in self._edit_buffers:
            return False
        self._edit_buffers[note_id] = EditBuffer(backup=self._notes[index].body)
        return True

    def commit_edit(self, note_id: int) -> bool:
        """Leave edit mode keeping the edited text."""
        index = self.index_of(note_id)
        if index is None or self._edit_buffers.pop(note_id, None) is None:
            return False
        self._notes[index].touch()
        return True

    def discard_edit(self, note_id: int) -> bool:
        """Leave edit mode restoring the body captured by begin_edit."""
        index = self.index_of(note_id)
        buffer = self._edit_buffers.pop(note_id, None)
        if index is None or buffer is None:
            return False
        self._notes[index].body = buffer.backup
        return True

    def set_title(self, note_id: int, title: str) -> bool:
        index = self.index_of(note_id)
        if index is None or self._notes[index].title == title:
            return False
        note = self._notes[index]
        note.title = title
        note.touch()
        return True

    def set_body(self, note_id: int, body: str) -> bool:
        index = self.index_of(note_id)
        if index is None or self._notes[index].body == body:
            return False
        note = self._notes[index]
        note.body = body
        note.touch()
        return True
