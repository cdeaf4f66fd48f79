# Notes_Window.py
# Description: This file contains the UI components for the Notes view (list + editor)
#
# Imports
from datetime import datetime
from typing import TYPE_CHECKING, Optional
#
# 3rd-Party Imports
from loguru import logger
from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.css.query import QueryError
from textual.widgets import Button, Input, Label, Static, TextArea
#
# Local Imports
from ..models import Note, get_word_count
from ..Widgets.notes_list import NoteRowEntry, NotesListView
#
if TYPE_CHECKING:
    from ..app import QuickNotesApp
#
#######################################################################################################################
#
# Functions:

NO_SELECTION_MESSAGE = "No note selected. Create one with New."


def format_modified(timestamp: int) -> str:
    """Format unix seconds as local ``DD-MM-YYYY HH:MM``."""
    try:
        return datetime.fromtimestamp(timestamp).strftime("%d-%m-%Y %H:%M")
    except (OverflowError, OSError, ValueError):
        return "Unknown"


class NotesWindow(Container):
    """
    Container for the Notes view: searchable, reorderable list on the left,
    the selected note on the right.
    """

    DEFAULT_CSS = """
    NotesWindow {
        layout: horizontal;
        height: 1fr;
    }

    #notes-sidebar-left {
        width: 30%;
        min-width: 20;
        max-width: 60;
        background: $boost;
        padding: 1;
        border-right: thick $background-darken-1;
    }

    #notes-search-row {
        height: 3;
    }

    #notes-search-row > Label {
        padding: 1 1 0 0;
    }

    #notes-search-input {
        width: 1fr;
    }

    #notes-drag-hint {
        color: $text-muted;
        text-style: italic;
    }

    #notes-main-content {
        width: 1fr;
        padding: 1 2;
    }

    #notes-title-label {
        text-style: bold;
        height: 3;
        content-align: left middle;
    }

    #notes-title-input {
        margin-bottom: 1;
    }

    #notes-editor-area {
        height: 1fr;
    }

    #notes-meta-area {
        height: 1;
        margin-top: 1;
    }

    .notes-meta {
        color: $text-muted;
        margin-right: 2;
    }

    #notes-controls-area {
        height: 3;
        align: right middle;
    }

    #notes-controls-area > Button {
        margin-left: 1;
    }

    #notes-empty-message {
        color: $text-muted;
        padding: 1;
    }
    """

    def __init__(self, app_instance: 'QuickNotesApp', **kwargs):
        super().__init__(**kwargs)
        self.app_instance = app_instance

    @property
    def service(self):
        return self.app_instance.notes_service

    def compose(self) -> ComposeResult:
        with Vertical(id="notes-sidebar-left"):
            with Horizontal(id="notes-search-row"):
                yield Label("Search:")
                yield Input(placeholder="Search notes...", id="notes-search-input")
            yield NotesListView(id="notes-list-view")
            yield Static("Drag to reorder", id="notes-drag-hint")
            yield Static("0 notes", id="notes-count-label")

        with Vertical(id="notes-main-content"):
            yield Static(NO_SELECTION_MESSAGE, id="notes-empty-message")
            with Vertical(id="notes-editor-panel"):
                yield Static("", id="notes-title-label", markup=False)
                yield Input(placeholder="Title", id="notes-title-input")
                yield TextArea(id="notes-editor-area", read_only=True)
                with Horizontal(id="notes-meta-area"):
                    yield Label("", id="notes-modified-label", classes="notes-meta")
                    yield Label("", id="notes-word-count", classes="notes-meta")
                with Horizontal(id="notes-controls-area"):
                    yield Button("Edit", id="notes-edit-button", variant="primary")
                    yield Button("Copy", id="notes-copy-button", variant="default")
                    yield Button("Save", id="notes-save-button", variant="success")
                    yield Button("Close", id="notes-close-button", variant="default")

    def on_mount(self) -> None:
        self.refresh_view()

    # ========== Rendering ==========

    def refresh_view(self) -> None:
        """Re-derive everything shown from the store (list, counts, editor)."""
        store = self.service.store
        try:
            list_view = self.query_one("#notes-list-view", NotesListView)
            list_view.set_entries(
                [NoteRowEntry(index, title, index == store.selected) for index, title in store.filter()],
                reorder_enabled=store.reorder_enabled,
            )
            self.query_one("#notes-drag-hint", Static).display = store.reorder_enabled
            self.query_one("#notes-count-label", Static).update(f"{len(store)} notes")
        except QueryError as e:
            logger.debug(f"Notes list not ready for refresh: {e}")
            return
        self._refresh_editor(store.selected_note)

    def _refresh_editor(self, note: Optional[Note]) -> None:
        empty_message = self.query_one("#notes-empty-message", Static)
        panel = self.query_one("#notes-editor-panel", Vertical)
        empty_message.display = note is None
        panel.display = note is not None
        if note is None:
            return

        editing = self.service.store.is_editing(note.id)
        settings = self.service.settings

        title_label = self.query_one("#notes-title-label", Static)
        title_label.update(note.title)
        title_label.display = not editing

        title_input = self.query_one("#notes-title-input", Input)
        title_input.display = editing
        if title_input.value != note.title:
            with title_input.prevent(Input.Changed):
                title_input.value = note.title

        editor = self.query_one("#notes-editor-area", TextArea)
        editor.read_only = not editing
        if editor.text != note.body:
            with editor.prevent(TextArea.Changed):
                editor.load_text(note.body)

        self.query_one("#notes-modified-label", Label).update(
            f"Last modified: {format_modified(note.modified)}"
        )
        word_count_label = self.query_one("#notes-word-count", Label)
        word_count_label.display = settings.show_word_count
        word_count_label.update(f"Words: {get_word_count(note.body)}")

        self.query_one("#notes-edit-button", Button).display = not editing
        self.query_one("#notes-copy-button", Button).display = not editing
        self.query_one("#notes-save-button", Button).display = editing
        self.query_one("#notes-close-button", Button).display = editing

    def _finish(self) -> None:
        """End of an input event: redraw from the store and flush pending saves."""
        self.refresh_view()
        self.app_instance.end_frame()

    # ========== List Event Handlers ==========

    @on(Input.Changed, "#notes-search-input")
    def handle_search_changed(self, event: Input.Changed) -> None:
        self.service.store.search_query = event.value
        self._finish()

    @on(NotesListView.RowSelected)
    def handle_row_selected(self, event: NotesListView.RowSelected) -> None:
        event.stop()
        self.service.store.select(event.note_index)
        self._finish()

    @on(NotesListView.MoveRequested)
    def handle_move_requested(self, event: NotesListView.MoveRequested) -> None:
        event.stop()
        self.service.move_note(event.from_index, event.to_index)
        self._finish()

    # ========== Editor Event Handlers ==========

    @on(Input.Changed, "#notes-title-input")
    def handle_title_changed(self, event: Input.Changed) -> None:
        note = self.service.store.selected_note
        if note is None or not self.service.store.is_editing(note.id):
            return
        if self.service.edit_title(note.id, event.value):
            self._finish()

    @on(TextArea.Changed, "#notes-editor-area")
    def handle_editor_changed(self, event: TextArea.Changed) -> None:
        note = self.service.store.selected_note
        if note is None or not self.service.store.is_editing(note.id):
            return
        if self.service.edit_body(note.id, event.text_area.text):
            self._finish()

    # ========== Button Event Handlers ==========

    @on(Button.Pressed, "#notes-edit-button")
    def handle_edit_button(self, event: Button.Pressed) -> None:
        event.stop()
        self.begin_edit()

    @on(Button.Pressed, "#notes-save-button")
    def handle_save_button(self, event: Button.Pressed) -> None:
        event.stop()
        self.save_edit()

    @on(Button.Pressed, "#notes-close-button")
    def handle_close_button(self, event: Button.Pressed) -> None:
        event.stop()
        note = self.service.store.selected_note
        if note is not None:
            self.service.close_edit(note.id)
        self._finish()

    @on(Button.Pressed, "#notes-copy-button")
    def handle_copy_button(self, event: Button.Pressed) -> None:
        event.stop()
        note = self.service.store.selected_note
        if note is not None:
            self.app.copy_to_clipboard(note.body)
            logger.debug(f"Copied body of note {note.id} to clipboard")

    # ========== Actions used by app bindings ==========

    def begin_edit(self) -> None:
        note = self.service.store.selected_note
        if note is None:
            return
        self.service.begin_edit(note.id)
        self._finish()
        try:
            self.query_one("#notes-editor-area", TextArea).focus()
        except QueryError:
            pass

    def save_edit(self) -> None:
        note = self.service.store.selected_note
        if note is not None:
            self.service.save_edit(note.id)
        self._finish()

    def cancel_drag(self) -> bool:
        try:
            return self.query_one("#notes-list-view", NotesListView).cancel_drag()
        except QueryError:
            return False

#
# End of Notes_Window.py
#######################################################################################################################
