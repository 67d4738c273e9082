from __future__ import annotations

from datetime import date, datetime

from todolist.models import TaskRecord

# All date rules are evaluated against this fixed "now".
FIXED_NOW = datetime(2024, 4, 30, 9, 30, 0)
TODAY = FIXED_NOW.date()


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_record(
    id: int,
    name: str = "Task",
    due_date: date = date(2024, 5, 1),
    priority: str = "medium",
    completed: bool = False,
) -> TaskRecord:
    return {
        "id": id,
        "name": name,
        "due_date": due_date,
        "priority": priority,  # type: ignore[typeddict-item]
        "completed": completed,
        "created_at": FIXED_NOW,
    }
