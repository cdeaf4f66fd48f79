"""Data models for QuickNotes using Pydantic."""

import time

from pydantic import BaseModel, Field, field_validator

DEFAULT_NOTE_TITLE = "Untitled"
FONT_SIZE_MIN = 12.0
FONT_SIZE_MAX = 24.0
NOTE_ID_LIMIT = 2 ** 128


def current_unix() -> int:
    """Current time as whole unix seconds."""
    return int(time.time())


def get_word_count(text: str) -> int:
    return len(text.split())


class Note(BaseModel):
    """A single note as it is stored on disk.

    Edit-mode state (the body backup taken when editing starts) is kept by the
    store, not here.
    """
    id: int
    title: str = DEFAULT_NOTE_TITLE
    body: str = ""
    modified: int = Field(default_factory=current_unix, ge=0)

    @field_validator("id")
    @classmethod
    def check_id_is_u128(cls, value: int) -> int:
        if not 0 <= value < NOTE_ID_LIMIT:
            raise ValueError("note id must be an unsigned 128-bit integer")
        return value

    def touch(self) -> None:
        self.modified = current_unix()


class AppSettings(BaseModel):
    """User preferences, persisted separately from the notes."""
    dark_mode: bool = True
    font_size: float = Field(17.0, allow_inf_nan=False)
    auto_save: bool = True
    show_word_count: bool = False

    @field_validator("font_size")
    @classmethod
    def clamp_font_size(cls, value: float) -> float:
        return min(max(value, FONT_SIZE_MIN), FONT_SIZE_MAX)
