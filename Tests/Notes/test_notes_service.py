"""
Tests for NotesService: loading, the end-of-frame save policy and edit mode.
"""

import json
from unittest.mock import patch

import pytest

from quicknotes.models import AppSettings
from quicknotes.Notes.notes_persistence import NotesSaveError, save_notes, save_settings
from quicknotes.Notes.notes_service import NotesService


def read_json(path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def service(data_dir, sample_notes):
    save_notes(data_dir / "notes.json", sample_notes)
    return NotesService(data_dir)


# ========== Loading ==========

class TestLoading:

    def test_fresh_directory(self, data_dir):
        service = NotesService(data_dir)
        assert len(service.store) == 0
        assert service.settings == AppSettings()
        assert not (data_dir / "notes.json").exists()

    def test_loads_existing_files(self, data_dir, sample_notes):
        save_notes(data_dir / "notes.json", sample_notes)
        save_settings(data_dir / "settings.json", AppSettings(dark_mode=False))
        service = NotesService(data_dir)
        assert [note.title for note in service.store] == ["Groceries", "Ideas", "Todo"]
        assert service.settings.dark_mode is False
        assert service.store.selected == 0

    def test_nan_font_size_falls_back_to_defaults(self, data_dir):
        (data_dir / "settings.json").write_text('{"dark_mode": false, "font_size": NaN}', encoding="utf-8")
        service = NotesService(data_dir)
        assert service.settings == AppSettings()

    def test_corrupt_files_fall_back(self, data_dir, loguru_messages):
        (data_dir / "notes.json").write_text("garbage", encoding="utf-8")
        (data_dir / "settings.json").write_text("garbage", encoding="utf-8")
        service = NotesService(data_dir)
        assert len(service.store) == 0
        assert service.settings == AppSettings()
        assert any("Could not load notes" in message for message in loguru_messages)


# ========== Save policy ==========

class TestEndFrame:

    def test_nothing_written_when_clean(self, data_dir):
        service = NotesService(data_dir)
        service.end_frame()
        assert not (data_dir / "notes.json").exists()
        assert not (data_dir / "settings.json").exists()

    def test_dirty_notes_saved_with_auto_save(self, service, data_dir):
        service.add_note()
        service.end_frame()
        assert len(read_json(data_dir / "notes.json")) == 4
        assert service.store.dirty is False

    def test_dirty_notes_kept_without_auto_save(self, service, data_dir):
        service.update_settings(auto_save=False)
        service.add_note()
        service.end_frame()
        assert len(read_json(data_dir / "notes.json")) == 3
        assert service.store.dirty is True
        assert read_json(data_dir / "settings.json")["auto_save"] is False

    def test_move_is_persisted(self, service, data_dir):
        assert service.move_note(0, 3) is True
        service.end_frame()
        assert [record["title"] for record in read_json(data_dir / "notes.json")] == ["Ideas", "Todo", "Groceries"]

    def test_delete_is_persisted(self, service, data_dir):
        service.delete_selected()
        service.end_frame()
        assert [record["id"] for record in read_json(data_dir / "notes.json")] == [2, 3]

    def test_failed_save_is_retried_next_frame(self, service, data_dir):
        service.add_note()
        with patch(
            "quicknotes.Notes.notes_service.save_notes",
            side_effect=NotesSaveError("disk full"),
        ):
            service.end_frame()
        assert service.store.dirty is True

        service.end_frame()
        assert service.store.dirty is False
        assert len(read_json(data_dir / "notes.json")) == 4

    def test_shutdown_saves_even_without_auto_save(self, service, data_dir):
        service.update_settings(auto_save=False)
        service.add_note()
        service.shutdown()
        assert len(read_json(data_dir / "notes.json")) == 4
        assert read_json(data_dir / "settings.json")["auto_save"] is False


# ========== Editing ==========

class TestEditing:

    def test_keystrokes_mark_dirty_with_auto_save(self, service):
        service.begin_edit(1)
        assert service.edit_body(1, "milk, eggs, bread") is True
        assert service.store.dirty is True

    def test_keystrokes_do_not_mark_dirty_without_auto_save(self, service):
        service.update_settings(auto_save=False)
        service.begin_edit(1)
        service.edit_title(1, "Shopping")
        assert service.store.dirty is False

    def test_save_edit_writes_immediately(self, service, data_dir):
        service.update_settings(auto_save=False)
        service.begin_edit(1)
        service.edit_body(1, "bread")
        assert service.save_edit(1) is True
        assert read_json(data_dir / "notes.json")[0]["body"] == "bread"
        assert service.store.is_editing(1) is False
        assert service.store.dirty is False

    def test_close_edit_restores_and_persists(self, service, data_dir):
        service.begin_edit(1)
        service.edit_body(1, "scribble")
        service.end_frame()
        assert read_json(data_dir / "notes.json")[0]["body"] == "scribble"

        assert service.close_edit(1) is True
        service.end_frame()
        assert service.store[0].body == "milk, eggs"
        assert read_json(data_dir / "notes.json")[0]["body"] == "milk, eggs"

    def test_close_without_edit(self, service):
        assert service.close_edit(1) is False
        assert service.store.dirty is False


# ========== Settings ==========

class TestSettings:

    def test_update_marks_changed_only_on_difference(self, service):
        service.update_settings(dark_mode=True)
        assert service.settings_changed is False
        service.update_settings(dark_mode=False)
        assert service.settings_changed is True

    def test_update_clamps_font_size(self, service):
        assert service.update_settings(font_size=4).font_size == 12.0

    def test_settings_saved_at_end_of_frame(self, service, data_dir):
        service.update_settings(show_word_count=True)
        service.end_frame()
        assert read_json(data_dir / "settings.json")["show_word_count"] is True
        assert service.settings_changed is False

    def test_reset(self, service, data_dir):
        service.update_settings(dark_mode=False, font_size=22.0)
        service.end_frame()
        service.reset_settings()
        service.end_frame()
        assert read_json(data_dir / "settings.json") == AppSettings().model_dump()
