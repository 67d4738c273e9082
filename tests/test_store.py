from datetime import date

import pytest

from todolist.repositories import TaskStore

from .helpers import FIXED_NOW, fixed_clock, make_record


class TestAdd:
    def test_add_inserts_newest_first(self):
        store = TaskStore(clock=fixed_clock)
        first = store.add("First task", date(2024, 5, 1), "low")
        second = store.add("Second task", date(2024, 5, 2), "high")
        assert [r["id"] for r in store.all()] == [second["id"], first["id"]]
        assert len(store) == 2

    def test_new_record_fields(self):
        store = TaskStore(clock=fixed_clock)
        rec = store.add("  Water plants ", date(2024, 5, 1), "medium")
        assert rec["name"] == "Water plants"
        assert rec["completed"] is False
        assert rec["created_at"] == FIXED_NOW
        assert rec["id"] == int(FIXED_NOW.timestamp() * 1000)

    def test_ids_unique_when_clock_does_not_advance(self):
        store = TaskStore(clock=fixed_clock)
        ids = [store.add(f"Task {i}", date(2024, 5, 1), "low")["id"] for i in range(5)]
        assert len(set(ids)) == 5
        assert ids == sorted(ids)

    def test_ids_never_collide_with_loaded_records(self):
        future_id = int(FIXED_NOW.timestamp() * 1000) + 10
        store = TaskStore([make_record(future_id)], clock=fixed_clock)
        rec = store.add("Another task", date(2024, 5, 1), "low")
        assert rec["id"] == future_id + 1


class TestToggle:
    def test_double_toggle_restores_record(self):
        store = TaskStore([make_record(1, name="Buy milk")], clock=fixed_clock)
        original = store.get(1)

        toggled = store.toggle_completed(1)
        assert toggled["completed"] is True
        store.toggle_completed(1)

        assert store.get(1) == original

    def test_toggle_unknown_id(self):
        store = TaskStore([make_record(1)], clock=fixed_clock)
        assert store.toggle_completed(999) is None
        assert store.all() == [make_record(1)]


class TestRemove:
    def test_remove_existing(self):
        store = TaskStore([make_record(1), make_record(2)], clock=fixed_clock)
        assert store.remove(1) is True
        assert [r["id"] for r in store.all()] == [2]
        assert store.get(1) is None

    def test_remove_unknown_leaves_store_unchanged(self):
        records = [make_record(1, name="One"), make_record(2, name="Two")]
        store = TaskStore(records, clock=fixed_clock)
        assert store.remove(3) is False
        assert len(store) == 2
        assert store.all() == records


class TestSnapshots:
    def test_all_returns_copies(self):
        store = TaskStore([make_record(1)], clock=fixed_clock)
        snapshot = store.all()
        snapshot[0]["completed"] = True
        snapshot.clear()
        assert store.all() == [make_record(1)]

    def test_constructor_copies_input(self):
        records = [make_record(1)]
        store = TaskStore(records, clock=fixed_clock)
        records[0]["name"] = "Changed"
        assert store.get(1)["name"] == "Task"


class TestPriority:
    def test_unknown_priority_rejected(self):
        store = TaskStore(clock=fixed_clock)
        with pytest.raises(ValueError):
            store.add("Some task", date(2024, 5, 1), "urgent")  # type: ignore[arg-type]
        assert len(store) == 0
