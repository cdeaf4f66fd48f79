# app.py
# Description: QuickNotes Textual application and console entry point.
#
# Imports
from pathlib import Path
from typing import Optional, Union
#
# 3rd-Party Imports
from loguru import logger
from textual.actions import SkipAction
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import QueryError
from textual.reactive import reactive
from textual.widgets import Button, ContentSwitcher, Footer, Header, Static
#
# Local Imports
from .config import get_cli_setting, load_cli_config_and_ensure_existence
from .Logging_Config import configure_logging
from .Notes.notes_service import NotesService
from .UI.Notes_Window import NotesWindow
from .UI.Settings_Window import SettingsWindow
from .Utils.paths import get_notes_data_dir
#
#######################################################################################################################
#
# Classes:

VIEW_NOTES = "notes-view"
VIEW_SETTINGS = "settings-view"

DARK_THEME = "textual-dark"
LIGHT_THEME = "textual-light"


def resolve_data_dir(config: Optional[dict] = None) -> Path:
    """Notes directory: ``[storage] data_dir`` from the config file, else the platform default."""
    override = get_cli_setting("storage", "data_dir", "", config=config)
    return get_notes_data_dir(override or None)


class QuickNotesApp(App):
    """Terminal note-taking application."""

    CSS = """
    #top-bar {
        height: 3;
        padding: 0 1;
        background: $panel;
    }

    #top-bar > Button {
        margin-right: 1;
        min-width: 10;
    }

    #top-bar > .view-selector.-active {
        text-style: bold reverse;
    }

    .top-bar-separator {
        width: 3;
        height: 3;
        content-align: center middle;
        color: $text-muted;
    }

    #view-switcher {
        height: 1fr;
    }
    """

    TITLE = "Notes"

    BINDINGS = [
        Binding("ctrl+n", "new_note", "New", priority=True),
        Binding("ctrl+d", "delete_note", "Delete", priority=True),
        Binding("ctrl+e", "edit_note", "Edit", priority=True),
        Binding("ctrl+s", "save_note", "Save", priority=True),
        Binding("escape", "cancel_drag", "Cancel drag", show=False, priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    current_view: reactive[str] = reactive(VIEW_NOTES, init=False)

    def __init__(self, data_dir: Optional[Union[str, Path]] = None, **kwargs):
        super().__init__(**kwargs)
        self.notes_service = NotesService(data_dir if data_dir is not None else resolve_data_dir())

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="top-bar"):
            yield Button("Notes", id="view-notes-button", classes="view-selector -active")
            yield Button("Settings", id="view-settings-button", classes="view-selector")
            yield Static("|", classes="top-bar-separator")
            yield Button("New", id="notes-new-button", variant="success")
            yield Button("Delete", id="notes-delete-button", variant="error")
        with ContentSwitcher(initial=VIEW_NOTES, id="view-switcher"):
            yield NotesWindow(self, id=VIEW_NOTES)
            yield SettingsWindow(self, id=VIEW_SETTINGS)
        yield Footer()

    def on_mount(self) -> None:
        # Theme is set once here; later changes come through settings_applied()
        self.apply_theme()
        logger.info(
            f"QuickNotes started with {len(self.notes_service.store)} notes "
            f"from {self.notes_service.notes_path}"
        )

    # ========== Frame handling ==========

    def end_frame(self) -> None:
        """Called after every handled input event that may have changed state."""
        self.notes_service.end_frame()

    def apply_theme(self) -> None:
        self.theme = DARK_THEME if self.notes_service.settings.dark_mode else LIGHT_THEME

    def settings_applied(self) -> None:
        """A setting changed: re-theme, redraw the notes view and flush."""
        self.apply_theme()
        self.notes_window.refresh_view()
        self.end_frame()

    @property
    def notes_window(self) -> NotesWindow:
        return self.query_one(f"#{VIEW_NOTES}", NotesWindow)

    @property
    def settings_window(self) -> SettingsWindow:
        return self.query_one(f"#{VIEW_SETTINGS}", SettingsWindow)

    # ========== View selection ==========

    def watch_current_view(self, old_view: str, new_view: str) -> None:
        try:
            self.query_one("#view-switcher", ContentSwitcher).current = new_view
            on_notes = new_view == VIEW_NOTES
            self.query_one("#view-notes-button", Button).set_class(on_notes, "-active")
            self.query_one("#view-settings-button", Button).set_class(not on_notes, "-active")
            self.query_one("#notes-new-button", Button).display = on_notes
            self.query_one("#notes-delete-button", Button).display = on_notes
            self.query_one(".top-bar-separator", Static).display = on_notes
        except QueryError as e:
            logger.error(f"Could not switch to view {new_view}: {e}")
            return
        if on_notes:
            self.notes_window.refresh_view()
        else:
            self.settings_window.refresh_view()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "view-notes-button":
            self.current_view = VIEW_NOTES
        elif button_id == "view-settings-button":
            self.current_view = VIEW_SETTINGS
        elif button_id == "notes-new-button":
            self.action_new_note()
        elif button_id == "notes-delete-button":
            self.action_delete_note()
        else:
            return
        event.stop()

    # ========== Actions ==========

    def action_new_note(self) -> None:
        if self.current_view != VIEW_NOTES:
            return
        self.notes_service.add_note()
        self.notes_window.refresh_view()
        self.end_frame()

    def action_delete_note(self) -> None:
        if self.current_view != VIEW_NOTES:
            return
        self.notes_service.delete_selected()
        self.notes_window.refresh_view()
        self.end_frame()

    def action_edit_note(self) -> None:
        if self.current_view == VIEW_NOTES:
            self.notes_window.begin_edit()

    def action_save_note(self) -> None:
        if self.current_view == VIEW_NOTES:
            self.notes_window.save_edit()

    def action_cancel_drag(self) -> None:
        if not self.notes_window.cancel_drag():
            # Let escape reach the focused widget
            raise SkipAction()

    async def action_quit(self) -> None:
        self.notes_service.shutdown()
        self.exit()

#
#######################################################################################################################
#
# Entry point:

def main_cli_runner() -> None:
    """Entry point for the ``quicknotes`` command.

    Loads the TOML config, sets up logging, then runs the app. Anything still
    unsaved is written once the app exits.
    """
    config = load_cli_config_and_ensure_existence()
    data_dir = resolve_data_dir(config)
    configure_logging(data_dir, config)

    app = QuickNotesApp(data_dir=data_dir)
    try:
        app.run()
    except Exception:
        logger.exception("QuickNotes crashed")
        raise
    finally:
        app.notes_service.shutdown()
        logger.info("QuickNotes exited")


if __name__ == "__main__":
    main_cli_runner()

#
# End of app.py
#######################################################################################################################
