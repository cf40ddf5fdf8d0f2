"""Tests for the record store and its selection semantics."""
from __future__ import annotations

import pytest

from coin_cards.csv_parser import parse
from coin_cards.records import Record, RecordStore, SourceFile


def make_file(name: str, text: str) -> SourceFile:
    _, records = parse(text)
    return SourceFile(name=name, size=len(text), records=records)


@pytest.fixture
def store() -> RecordStore:
    store = RecordStore()
    store.admit(["Subject", "Year"])
    store.add_file(make_file("a.csv", "Subject,Year\nA1,1900\nA2,1901\n"))
    store.add_file(make_file("b.csv", "Subject,Year\nB1,1950\n"))
    return store


def subjects(records):
    return [r.get("Subject") for r in records]


class TestRecord:
    def test_lookup_is_case_insensitive_fallback(self):
        record = Record(fields=("year", "Value"), values={"year": "1899", "Value": "$5"})

        assert record.lookup("Year") == "1899"
        assert record.lookup("Value") == "$5"
        assert record.lookup("Missing") == ""
        assert record.get("Year") == ""

    def test_selected_is_not_a_field(self):
        record = Record(fields=("selected",), values={"selected": "yes"})
        assert record.selected is False
        assert record.get("selected") == "yes"


class TestSelection:
    def test_nothing_selected_initially(self, store):
        assert store.selected_subset() == []
        assert not store.show_table
        assert not store.is_all_selected()

    def test_subset_requires_file_and_record_flags(self, store):
        store.files[0].records[1].selected = True
        assert store.selected_subset() == []

        store.toggle_file_selection(0)
        assert subjects(store.selected_subset()) == ["A2"]
        assert store.show_table

    def test_subset_order_is_file_then_row(self, store):
        store.set_all_selected(True)
        store.toggle_file_selection(1)
        store.toggle_file_selection(0)

        assert subjects(store.selected_subset()) == ["A1", "A2", "B1"]

    def test_set_all_selected_touches_unselected_files(self, store):
        store.toggle_file_selection(0)
        store.set_all_selected(True)

        assert all(r.selected for r in store.files[1].records)
        assert store.all_selected

    def test_set_all_selected_is_idempotent(self, store):
        store.toggle_file_selection(0)
        store.toggle_file_selection(1)
        store.set_all_selected(True)
        first = subjects(store.selected_subset())
        store.set_all_selected(True)

        assert subjects(store.selected_subset()) == first
        assert store.all_selected

    def test_all_selected_false_without_selected_files(self, store):
        store.set_all_selected(True)
        assert not store.all_selected

    def test_row_toggle_updates_aggregate(self, store):
        store.toggle_file_selection(0)
        store.set_all_selected(True)
        assert store.all_selected

        assert store.toggle_record(0, 0) is False
        assert not store.all_selected
        assert subjects(store.selected_subset()) == ["A2"]

        store.set_record_selected(0, 0, True)
        assert store.all_selected

    def test_deselect_all(self, store):
        store.toggle_file_selection(0)
        store.set_all_selected(True)
        store.set_all_selected(False)

        assert store.selected_subset() == []
        assert not store.all_selected


class TestRemoval:
    def test_remove_keeps_schema_while_files_remain(self, store):
        removed = store.remove_file(0)

        assert removed.name == "a.csv"
        assert len(store) == 1
        assert store.headers == ["Subject", "Year"]

    def test_removing_last_file_resets_schema(self, store):
        store.remove_file(1)
        store.remove_file(0)

        assert len(store) == 0
        assert store.headers == []
        assert store.admit(["Other"])

    def test_bad_index_raises(self, store):
        with pytest.raises(IndexError):
            store.remove_file(5)
        with pytest.raises(IndexError):
            store.toggle_file_selection(5)

    def test_negative_index_raises(self, store):
        with pytest.raises(IndexError):
            store.remove_file(-1)
        with pytest.raises(IndexError):
            store.toggle_file_selection(-1)
        with pytest.raises(IndexError):
            store.toggle_record(0, -1)
        with pytest.raises(IndexError):
            store.set_record_selected(0, 2, True)

        assert len(store) == 2
        assert not any(f.selected for f in store)
        assert not any(r.selected for f in store for r in f.records)
