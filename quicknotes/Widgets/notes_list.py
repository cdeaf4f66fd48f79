# notes_list.py
# Description: Scrollable list of note titles with click-to-select and drag-to-reorder.
#
# Imports
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
#
# 3rd-Party Imports
from textual import events
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.geometry import Offset, Region
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Static
#
# Local Imports
from ..models import DEFAULT_NOTE_TITLE
from ..Notes.reorder import DropEdge, ReorderEngine
#
#######################################################################################################################
#
# Classes:

@dataclass(frozen=True)
class NoteRowEntry:
    """What the list shows for one note."""
    note_index: int
    title: str
    selected: bool = False


class NoteRow(Static):
    """A single title in the notes list."""

    DEFAULT_CSS = """
    NoteRow {
        width: 100%;
        height: 3;
        padding: 0 1;
        content-align: left middle;
    }
    NoteRow:hover {
        background: $boost;
    }
    NoteRow.-selected {
        background: $accent 40%;
        text-style: bold;
    }
    NoteRow.-dragging {
        background: $panel-darken-2 60%;
        color: $text;
        text-style: bold italic;
    }
    NoteRow.-drop-top {
        border-top: hkey $secondary;
    }
    NoteRow.-drop-bottom {
        border-bottom: hkey $secondary;
    }
    """

    def __init__(self, entry: NoteRowEntry, display_index: int, **kwargs):
        super().__init__(entry.title or DEFAULT_NOTE_TITLE, markup=False, **kwargs)
        self.note_index = entry.note_index
        self.display_index = display_index
        if entry.selected:
            self.add_class("-selected")


class NotesListView(VerticalScroll):
    """
    Note titles in display order.

    A press followed by a release on a row selects it. A press followed by
    pointer movement starts a reorder drag when reordering is enabled: the
    dragged row follows the pointer vertically and the row under the pointer
    shows where the note will land. Escape (via ``cancel_drag``) aborts.
    """

    DEFAULT_CSS = """
    NotesListView {
        width: 100%;
        height: 1fr;
        border: round $surface;
    }
    NotesListView > .notes-list-empty {
        color: $text-muted;
        padding: 1;
    }
    """

    entries: reactive[Tuple[NoteRowEntry, ...]] = reactive(tuple, recompose=True)

    class RowSelected(Message):
        """Posted when a row is clicked."""
        def __init__(self, note_index: int) -> None:
            super().__init__()
            self.note_index = note_index

    class MoveRequested(Message):
        """Posted when a drag is dropped; indices are NoteStore.move arguments."""
        def __init__(self, from_index: int, to_index: int) -> None:
            super().__init__()
            self.from_index = from_index
            self.to_index = to_index

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.reorder_enabled = True
        self.engine = ReorderEngine()
        self._pressed: Optional[Tuple[NoteRow, Offset]] = None
        self._ghost_dy = 0

    def compose(self) -> ComposeResult:
        if not self.entries:
            yield Static("No notes found.", classes="notes-list-empty")
            return
        for display_index, entry in enumerate(self.entries):
            yield NoteRow(entry, display_index)

    def set_entries(self, entries: Sequence[NoteRowEntry], reorder_enabled: bool) -> None:
        self.reorder_enabled = reorder_enabled
        self.entries = tuple(entries)

    # ---- Geometry ----

    def rows(self) -> List[NoteRow]:
        return sorted(self.query(NoteRow), key=lambda row: row.display_index)

    def row_regions(self) -> List[Region]:
        """Current screen regions of the rows, with the dragged row at its home position."""
        regions = [row.region for row in self.rows()]
        origin = self.engine.origin
        if origin is None or not 0 <= origin < len(regions):
            return regions

        # Rows are stacked without gaps, so the dragged row's home is next to an untouched neighbour
        dragged = regions[origin]
        if origin > 0:
            above = regions[origin - 1]
            regions[origin] = Region(above.x, above.bottom, dragged.width, dragged.height)
        elif origin + 1 < len(regions):
            below = regions[origin + 1]
            regions[origin] = Region(below.x, below.y - dragged.height, dragged.width, dragged.height)
        else:
            regions[origin] = dragged.translate(Offset(0, -self._ghost_dy))
        return regions

    def row_at(self, point: Offset) -> Optional[NoteRow]:
        for row, region in zip(self.rows(), self.row_regions()):
            if region.contains_point(point):
                return row
        return None

    # ---- Pointer handling ----

    def press_at(self, point: Offset) -> bool:
        """Record a press on the row under ``point``. False if there is no row there."""
        row = self.row_at(point)
        if row is None:
            return False
        self._pressed = (row, point)
        return True

    def drag_to(self, point: Offset) -> None:
        """Pointer moved with the button held."""
        if self._pressed is None:
            return
        row, start = self._pressed
        if not self.engine.is_dragging:
            if point == start:
                return
            if not self.engine.begin(row.display_index, start, enabled=self.reorder_enabled):
                return
            row.add_class("-dragging")
        self._update_drag_visuals(point)

    def release_at(self, point: Offset) -> None:
        """Pointer released: drop the dragged row, or select the pressed row."""
        if self._pressed is None:
            return
        row, _start = self._pressed
        self._pressed = None

        if self.engine.is_dragging:
            result = self.engine.release(point, self.row_regions())
            self._clear_drag_visuals()
            if result is not None and result[0] < len(self.entries):
                origin, target = result
                self.post_message(self.MoveRequested(self.entries[origin].note_index, target))
            return

        self.post_message(self.RowSelected(row.note_index))

    def cancel_drag(self) -> bool:
        """Abort an active drag. Returns False if nothing was being dragged."""
        if not self.engine.cancel():
            return False
        self._pressed = None
        self._clear_drag_visuals()
        self.release_mouse()
        return True

    def _update_drag_visuals(self, point: Offset) -> None:
        regions = self.row_regions()
        self._ghost_dy = self.engine.ghost_offset(point).y
        indicator = self.engine.indicator(point, regions)
        for row in self.rows():
            if row.display_index == self.engine.origin:
                row.styles.offset = (0, self._ghost_dy)
            row.set_class(indicator == (row.display_index, DropEdge.TOP), "-drop-top")
            row.set_class(indicator == (row.display_index, DropEdge.BOTTOM), "-drop-bottom")

    def _clear_drag_visuals(self) -> None:
        self._ghost_dy = 0
        for row in self.rows():
            row.styles.offset = (0, 0)
            row.remove_class("-dragging", "-drop-top", "-drop-bottom")

    # ---- Textual mouse events ----

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button != 1:
            return
        if self.press_at(event.screen_offset):
            self.capture_mouse()
            event.stop()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self._pressed is not None:
            self.drag_to(event.screen_offset)
            event.stop()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self._pressed is None:
            return
        self.release_mouse()
        self.release_at(event.screen_offset)
        event.stop()

#
# End of notes_list.py
#######################################################################################################################
