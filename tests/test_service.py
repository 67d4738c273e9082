import json
import logging
from datetime import date, timedelta

import pytest

from todolist.errors import SubmissionRejected, TaskNotFoundError
from todolist.filtering import FilterCriteria, TaskStats
from todolist.service import TodoService
from todolist.storage import InMemoryStorage
from todolist.validation import ErrorCode

from .helpers import TODAY, fixed_clock


class _BrokenStorage(InMemoryStorage):
    def _write(self, value: str) -> None:
        raise OSError("disk full")


class TestSubmit:
    def test_valid_submission_adds_one_pending_task(self, service: TodoService):
        before = len(service.tasks())
        rec = service.submit_new_task("Write report", TODAY, "high")
        assert len(service.tasks()) == before + 1
        assert rec["completed"] is False
        assert service.tasks()[0] == rec

    def test_datetime_due_date_is_stored_as_day(self, service: TodoService):
        rec = service.submit_new_task("Write report", fixed_clock(), "low")
        assert rec["due_date"] == TODAY

    def test_rejection_carries_every_error(self, service: TodoService):
        with pytest.raises(SubmissionRejected) as excinfo:
            service.submit_new_task("ab", TODAY - timedelta(days=1))
        assert [e.code for e in excinfo.value.errors] == [ErrorCode.TOO_SHORT, ErrorCode.PAST_DATE]
        assert service.tasks() == []

    def test_duplicate_only_while_pending(self, service: TodoService):
        rec = service.submit_new_task("Buy milk", TODAY)
        with pytest.raises(SubmissionRejected) as excinfo:
            service.submit_new_task("buy milk ", TODAY)
        assert excinfo.value.errors[0].code == ErrorCode.DUPLICATE

        service.toggle_task(rec["id"])
        again = service.submit_new_task("buy milk ", TODAY)
        assert again["name"] == "buy milk"
        assert len(service.tasks()) == 2

    def test_unknown_priority_is_a_rejected_submission(self, service: TodoService):
        with pytest.raises(SubmissionRejected) as excinfo:
            service.submit_new_task("Valid name", TODAY, "urgent")  # type: ignore[arg-type]
        assert [(e.field, e.code) for e in excinfo.value.errors] == [("priority", ErrorCode.INVALID_PRIORITY)]
        assert service.tasks() == []


class TestToggleAndDelete:
    def test_toggle_twice_restores_record(self, service: TodoService):
        rec = service.submit_new_task("Walk the dog", TODAY)
        service.toggle_task(rec["id"])
        assert service.stats() == TaskStats(total=1, completed=1, pending=0)
        service.toggle_task(rec["id"])
        assert service.get_task(rec["id"]) == rec

    def test_unknown_ids_raise_not_found(self, service: TodoService):
        service.submit_new_task("Walk the dog", TODAY)
        before = service.tasks()
        with pytest.raises(TaskNotFoundError):
            service.toggle_task(42)
        with pytest.raises(TaskNotFoundError) as excinfo:
            service.delete_task(42)
        assert excinfo.value.task_id == 42
        assert service.tasks() == before

    def test_delete_removes_task(self, service: TodoService):
        rec = service.submit_new_task("Walk the dog", TODAY)
        service.delete_task(rec["id"])
        assert service.tasks() == []
        with pytest.raises(TaskNotFoundError):
            service.get_task(rec["id"])


class TestPersistence:
    def test_every_mutation_is_saved(self, storage: InMemoryStorage, service: TodoService):
        rec = service.submit_new_task("Water plants", TODAY, "medium")
        payload = json.loads(storage.slots["todoApp"])
        assert [t["task"] for t in payload["todos"]] == ["Water plants"]
        assert "lastUpdated" in payload

        service.toggle_task(rec["id"])
        assert json.loads(storage.slots["todoApp"])["todos"][0]["completed"] is True

        service.delete_task(rec["id"])
        assert json.loads(storage.slots["todoApp"])["todos"] == []

    def test_new_service_loads_saved_tasks(self, storage: InMemoryStorage, service: TodoService):
        service.submit_new_task("First task", TODAY, "low")
        service.submit_new_task("Second task", date(2024, 6, 1), "high")

        reloaded = TodoService(storage, clock=fixed_clock)
        assert reloaded.tasks() == service.tasks()

    def test_save_failure_is_logged_not_raised(self, caplog: pytest.LogCaptureFixture):
        svc = TodoService(_BrokenStorage(), clock=fixed_clock)
        with caplog.at_level(logging.ERROR, logger="todolist"):
            rec = svc.submit_new_task("Still works", TODAY)
        assert svc.tasks() == [rec]
        assert "Error saving tasks" in caplog.text

    def test_corrupt_slot_loads_empty(self, caplog: pytest.LogCaptureFixture):
        storage = InMemoryStorage(slots={"todoApp": "{not json"})
        with caplog.at_level(logging.ERROR, logger="todolist"):
            svc = TodoService(storage, clock=fixed_clock)
        assert svc.tasks() == []
        assert "Error loading tasks" in caplog.text


class TestFilters:
    def test_set_filter_is_partial(self, service: TodoService):
        service.set_filter(status="pending")
        service.set_filter(search_text="Milk")
        assert service.criteria == FilterCriteria(status="pending", search_text="milk")

    def test_clear_search_keeps_other_criteria(self, service: TodoService):
        service.set_filter(priority="high", search_text="milk")
        service.clear_search()
        assert service.criteria == FilterCriteria(priority="high")

    def test_clear_filters(self, service: TodoService):
        service.set_filter(status="completed", priority="low", due_date=TODAY, search_text="x")
        assert service.clear_filters() == FilterCriteria()

    def test_iso_string_date_filter_from_command(self, service: TodoService):
        service.submit_new_task("Due today", TODAY)
        service.submit_new_task("Due later", TODAY + timedelta(days=2))

        criteria = service.set_filter(due_date=TODAY.isoformat())
        assert criteria.due_date == TODAY
        vm = service.view()
        assert [t.name for t in vm.tasks] == ["Due today"]
        assert vm.empty is False

    def test_unknown_filter_field_raises_value_error(self, service: TodoService):
        with pytest.raises(ValueError):
            service.set_filter(colour="red")
        assert service.criteria == FilterCriteria()

    def test_view_follows_criteria(self, service: TodoService):
        service.submit_new_task("Buy milk", TODAY, "low")
        done = service.submit_new_task("Buy bread", TODAY, "high")
        service.toggle_task(done["id"])

        service.set_filter(status="pending")
        vm = service.view()
        assert [t.name for t in vm.tasks] == ["Buy milk"]
        assert vm.stats == TaskStats(total=2, completed=1, pending=1)


class TestExport:
    def test_export_document(self, service: TodoService):
        rec = service.submit_new_task("Export me", date(2024, 5, 1), "high")
        text = service.export_all()
        assert text.startswith("[\n  {")
        data = json.loads(text)
        assert data == [
            {
                "id": rec["id"],
                "task": "Export me",
                "date": "2024-05-01",
                "priority": "high",
                "completed": False,
                "createdAt": "2024-04-30T09:30:00",
            }
        ]

    def test_export_filename_uses_current_date(self, service: TodoService):
        assert service.export_filename() == "todos_2024-04-30.json"
