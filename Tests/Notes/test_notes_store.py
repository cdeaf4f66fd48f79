"""
Unit tests for NoteStore: add/delete/filter/move, selection and edit mode.
"""

import random

import pytest

from quicknotes.models import Note
from quicknotes.Notes.notes_store import NoteStore


def titles(store):
    return [note.title for note in store]


# ========== Construction and selection ==========

class TestNoteStoreBasics:

    def test_empty_store_has_no_selection(self):
        store = NoteStore()
        assert len(store) == 0
        assert store.selected is None
        assert store.selected_note is None
        assert store.dirty is False

    def test_loaded_store_selects_first_note(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.selected == 0
        assert store.selected_note.title == "Groceries"
        assert store.dirty is False

    def test_select_out_of_range_is_ignored(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.select(5) is False
        assert store.selected == 0
        assert store.select(2) is True
        assert store.selected_note.title == "Todo"

    def test_index_of(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.index_of(3) == 2
        assert store.index_of(99) is None


# ========== add / delete ==========

class TestAddDelete:

    def test_add_inserts_at_front_and_selects(self, sample_notes):
        store = NoteStore(sample_notes)
        store.select(2)
        note = store.add()

        assert store[0] is note
        assert note.title == "Note 4"
        assert note.body == ""
        assert store.selected == 0
        assert store.dirty is True

    def test_add_to_empty_store(self):
        store = NoteStore()
        note = store.add()
        assert note.title == "Note 1"
        assert store.selected == 0

    def test_added_ids_are_unique(self):
        store = NoteStore()
        for _ in range(50):
            store.add()
        ids = {note.id for note in store}
        assert len(ids) == 50
        assert all(0 <= note_id < 2 ** 128 for note_id in ids)

    def test_delete_selected_selects_first_remaining(self, sample_notes):
        store = NoteStore(sample_notes)
        store.select(1)
        removed = store.delete_selected()

        assert removed.title == "Ideas"
        assert titles(store) == ["Groceries", "Todo"]
        assert store.selected == 0
        assert store.dirty is True

    def test_delete_last_note_clears_selection(self):
        store = NoteStore([Note(id=1, title="Only")])
        store.delete_selected()
        assert len(store) == 0
        assert store.selected is None

    def test_delete_without_selection_is_noop(self):
        store = NoteStore()
        assert store.delete_selected() is None
        assert store.dirty is False

    def test_delete_drops_edit_state(self, sample_notes):
        store = NoteStore(sample_notes)
        store.begin_edit(1)
        store.delete_selected()
        assert store.is_editing(1) is False


# ========== filter ==========

class TestFilter:

    def test_empty_query_matches_all(self, sample_notes):
        store = NoteStore(sample_notes)
        assert list(store.filter()) == [(0, "Groceries"), (1, "Ideas"), (2, "Todo")]

    def test_matches_title_or_body_case_insensitive(self, sample_notes):
        store = NoteStore(sample_notes)
        assert list(store.filter("IDEAS")) == [(1, "Ideas")]
        assert list(store.filter("plumber")) == [(2, "Todo")]
        assert list(store.filter("e")) == [(0, "Groceries"), (1, "Ideas"), (2, "Todo")]

    def test_no_match(self, sample_notes):
        store = NoteStore(sample_notes)
        assert list(store.filter("zebra")) == []

    def test_uses_search_query_by_default(self, sample_notes):
        store = NoteStore(sample_notes)
        store.search_query = "milk"
        assert list(store.filter()) == [(0, "Groceries")]

    def test_reflects_later_edits(self, sample_notes):
        store = NoteStore(sample_notes)
        store.set_body(2, "zebra crossing")
        assert list(store.filter("zebra")) == [(1, "Ideas")]

    def test_reorder_only_enabled_without_query(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.reorder_enabled is True
        store.search_query = "x"
        assert store.reorder_enabled is False


# ========== move ==========

class TestMove:

    @pytest.mark.parametrize(
        "from_index,to_index,expected",
        [
            (0, 3, ["Ideas", "Todo", "Groceries"]),
            (0, 2, ["Ideas", "Groceries", "Todo"]),
            (2, 0, ["Todo", "Groceries", "Ideas"]),
            (2, 1, ["Groceries", "Todo", "Ideas"]),
        ],
    )
    def test_move_positions(self, sample_notes, from_index, to_index, expected):
        store = NoteStore(sample_notes)
        assert store.move(from_index, to_index) is True
        assert titles(store) == expected
        assert store.dirty is True

    @pytest.mark.parametrize("from_index,to_index", [(1, 1), (1, 2)])
    def test_move_onto_itself_is_noop(self, sample_notes, from_index, to_index):
        store = NoteStore(sample_notes)
        assert store.move(from_index, to_index) is False
        assert titles(store) == ["Groceries", "Ideas", "Todo"]
        assert store.dirty is False

    @pytest.mark.parametrize("from_index,to_index", [(-1, 0), (3, 0), (0, 4), (0, -1)])
    def test_move_out_of_range_is_rejected(self, sample_notes, from_index, to_index):
        store = NoteStore(sample_notes)
        assert store.move(from_index, to_index) is False
        assert titles(store) == ["Groceries", "Ideas", "Todo"]

    def test_selection_follows_selected_note(self, sample_notes):
        store = NoteStore(sample_notes)
        store.select(0)
        store.move(0, 3)
        assert store.selected_note.title == "Groceries"
        assert store.selected == 2

    def test_selection_follows_when_other_note_moves(self, sample_notes):
        store = NoteStore(sample_notes)
        store.select(1)
        store.move(2, 0)
        assert store.selected_note.title == "Ideas"
        assert store.selected == 2

    def test_move_keeps_all_notes(self, sample_notes):
        store = NoteStore(sample_notes)
        store.move(1, 3)
        assert sorted(note.id for note in store) == [1, 2, 3]


# ========== Edit mode ==========

class TestEditMode:

    def test_begin_edit_snapshots_body(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.begin_edit(1) is True
        assert store.is_editing(1) is True
        assert store.backup_for(1) == "milk, eggs"

    def test_begin_edit_twice_keeps_first_backup(self, sample_notes):
        store = NoteStore(sample_notes)
        store.begin_edit(1)
        store.set_body(1, "changed")
        assert store.begin_edit(1) is False
        assert store.backup_for(1) == "milk, eggs"

    def test_discard_restores_backup(self, sample_notes):
        store = NoteStore(sample_notes)
        store.begin_edit(1)
        store.set_body(1, "changed")
        assert store.discard_edit(1) is True
        assert store[0].body == "milk, eggs"
        assert store.is_editing(1) is False
        assert store.backup_for(1) is None

    def test_commit_keeps_text_and_touches(self, sample_notes):
        store = NoteStore(sample_notes)
        store.begin_edit(1)
        store.set_body(1, "changed")
        assert store.commit_edit(1) is True
        assert store[0].body == "changed"
        assert store[0].modified > 1_700_000_000
        assert store.is_editing(1) is False

    def test_commit_without_edit_is_noop(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.commit_edit(1) is False
        assert store.discard_edit(1) is False

    def test_set_body_updates_modified_only_on_change(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.set_body(1, "milk, eggs") is False
        assert store[0].modified == 1_700_000_000
        assert store.set_body(1, "bread") is True
        assert store[0].modified > 1_700_000_000

    def test_set_title_unknown_note(self, sample_notes):
        store = NoteStore(sample_notes)
        assert store.set_title(42, "x") is False


# ========== Operation sequences ==========

class TestSelectionAcrossSequences:

    @pytest.mark.parametrize("seed", range(20))
    def test_selection_stays_valid(self, sample_notes, seed):
        rng = random.Random(seed)
        store = NoteStore(sample_notes)
        for _ in range(200):
            operation = rng.choice(["add", "delete", "select", "move"])
            size = len(store)
            if operation == "add":
                store.add()
            elif operation == "delete":
                store.delete_selected()
            elif operation == "select":
                store.select(rng.randint(-1, size))
            else:
                selected_id = store.selected_note.id if store.selected_note else None
                ids_before = sorted(note.id for note in store)
                store.move(rng.randint(-1, size), rng.randint(-1, size + 1))
                assert sorted(note.id for note in store) == ids_before
                if selected_id is not None:
                    assert store.selected_note.id == selected_id

            assert store.selected is None or 0 <= store.selected < len(store)
            assert (store.selected is None) == (len(store) == 0)
