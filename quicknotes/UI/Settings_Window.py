# Settings_Window.py
# Description: Settings view - appearance, editor behaviour and storage information.
#
# Imports
from typing import TYPE_CHECKING
#
# 3rd-Party Imports
from loguru import logger
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import QueryError
from textual.widgets import Button, Checkbox, Label, Select, Static, Switch
#
# Local Imports
from ..models import FONT_SIZE_MAX, FONT_SIZE_MIN
#
if TYPE_CHECKING:
    from ..app import QuickNotesApp
#
#######################################################################################################################
#
# Functions:

FONT_SIZE_OPTIONS = [
    (f"{size}", float(size)) for size in range(int(FONT_SIZE_MIN), int(FONT_SIZE_MAX) + 1)
]


def font_size_option(font_size: float) -> float:
    """Nearest value offered by the font size selector."""
    return float(min(max(round(font_size), FONT_SIZE_MIN), FONT_SIZE_MAX))


class SettingsWindow(VerticalScroll):
    """Container for the Settings view."""

    DEFAULT_CSS = """
    SettingsWindow {
        padding: 1 2;
    }

    .settings-heading {
        text-style: bold;
        margin-bottom: 1;
    }

    .settings-group {
        height: auto;
        border: round $primary;
        padding: 0 1;
        margin-bottom: 1;
    }

    .settings-group-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .settings-row {
        height: auto;
        margin-bottom: 1;
    }

    .settings-row > Label {
        width: 14;
        padding: 1 0 0 0;
    }

    #settings-font-size-select {
        width: 16;
    }

    .settings-path {
        color: $text-muted;
        margin-bottom: 1;
    }
    """

    def __init__(self, app_instance: 'QuickNotesApp', **kwargs):
        super().__init__(**kwargs)
        self.app_instance = app_instance

    @property
    def service(self):
        return self.app_instance.notes_service

    def compose(self) -> ComposeResult:
        settings = self.service.settings
        yield Static("Settings", classes="settings-heading")

        with Vertical(classes="settings-group"):
            yield Static("Appearance", classes="settings-group-title")
            with Horizontal(classes="settings-row"):
                yield Label("Dark theme:")
                yield Switch(value=settings.dark_mode, id="settings-dark-mode-switch")
            with Horizontal(classes="settings-row"):
                yield Label("Font size:")
                yield Select(
                    FONT_SIZE_OPTIONS,
                    value=font_size_option(settings.font_size),
                    allow_blank=False,
                    id="settings-font-size-select",
                )

        with Vertical(classes="settings-group"):
            yield Static("Editor", classes="settings-group-title")
            yield Checkbox("Auto-save notes", value=settings.auto_save, id="settings-auto-save-checkbox")
            yield Checkbox("Show word count", value=settings.show_word_count, id="settings-word-count-checkbox")

        with Vertical(classes="settings-group"):
            yield Static("Storage Information", classes="settings-group-title")
            yield Label("Notes stored at:")
            yield Static("", id="settings-notes-path", classes="settings-path", markup=False)
            yield Label("Settings stored at:")
            yield Static("", id="settings-settings-path", classes="settings-path", markup=False)
            yield Label("", id="settings-total-notes")

        yield Button("Reset to Defaults", id="settings-reset-button", variant="warning")

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        """Push the current settings and storage info into the widgets."""
        settings = self.service.settings
        try:
            dark_switch = self.query_one("#settings-dark-mode-switch", Switch)
            font_select = self.query_one("#settings-font-size-select", Select)
            auto_save = self.query_one("#settings-auto-save-checkbox", Checkbox)
            word_count = self.query_one("#settings-word-count-checkbox", Checkbox)
        except QueryError as e:
            logger.debug(f"Settings view not ready for refresh: {e}")
            return

        if dark_switch.value != settings.dark_mode:
            with dark_switch.prevent(Switch.Changed):
                dark_switch.value = settings.dark_mode
        option = font_size_option(settings.font_size)
        if font_select.value != option:
            with font_select.prevent(Select.Changed):
                font_select.value = option
        if auto_save.value != settings.auto_save:
            with auto_save.prevent(Checkbox.Changed):
                auto_save.value = settings.auto_save
        if word_count.value != settings.show_word_count:
            with word_count.prevent(Checkbox.Changed):
                word_count.value = settings.show_word_count

        self.query_one("#settings-notes-path", Static).update(str(self.service.notes_path))
        self.query_one("#settings-settings-path", Static).update(str(self.service.settings_path))
        self.query_one("#settings-total-notes", Label).update(f"Total notes: {len(self.service.store)}")

    def _finish(self) -> None:
        self.app_instance.settings_applied()

    # ========== Event Handlers ==========

    @on(Switch.Changed, "#settings-dark-mode-switch")
    def handle_dark_mode_changed(self, event: Switch.Changed) -> None:
        event.stop()
        self.service.update_settings(dark_mode=event.value)
        self._finish()

    @on(Select.Changed, "#settings-font-size-select")
    def handle_font_size_changed(self, event: Select.Changed) -> None:
        event.stop()
        if event.value is Select.BLANK:
            return
        self.service.update_settings(font_size=float(event.value))
        self._finish()

    @on(Checkbox.Changed, "#settings-auto-save-checkbox")
    def handle_auto_save_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        self.service.update_settings(auto_save=event.value)
        self._finish()

    @on(Checkbox.Changed, "#settings-word-count-checkbox")
    def handle_word_count_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        self.service.update_settings(show_word_count=event.value)
        self._finish()

    @on(Button.Pressed, "#settings-reset-button")
    def handle_reset_button(self, event: Button.Pressed) -> None:
        event.stop()
        self.service.reset_settings()
        logger.info("Settings reset to defaults")
        self.refresh_view()
        self._finish()

#
# End of Settings_Window.py
#######################################################################################################################
