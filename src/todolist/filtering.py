"""
Filtering, ordering and statistics over task records.

Nothing in here touches the store: every function takes a sequence of records
and returns a new list or value.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

from .models import PRIORITIES, PRIORITY_WEIGHTS, TaskRecord

STATUS_FILTERS = ("all", "completed", "pending")
PRIORITY_FILTERS = ("all",) + PRIORITIES


def _as_filter_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    # ISO strings are accepted; a blank string means no date filter.
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        return date.fromisoformat(s) if s else None
    raise ValueError("due_date must be a date, datetime or ISO8601 date string")


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class FilterCriteria:
    """
    View parameters narrowing which records are displayed. Never persisted.

    - status: 'all', 'completed' or 'pending'
    - priority: 'all' or one of the task priorities
    - due_date: exact due date to match, or None for any
    - search_text: case-insensitive substring of the task name, '' for any
    """

    status: str = "all"
    priority: str = "all"
    due_date: Optional[date] = None
    search_text: str = ""

    def __post_init__(self) -> None:
        if self.status not in STATUS_FILTERS:
            raise ValueError(f"status must be one of {', '.join(STATUS_FILTERS)}")
        if self.priority not in PRIORITY_FILTERS:
            raise ValueError(f"priority must be one of {', '.join(PRIORITY_FILTERS)}")
        object.__setattr__(self, "due_date", _as_filter_date(self.due_date))
        object.__setattr__(self, "search_text", (self.search_text or "").lower())

    def merged(self, **changes: Any) -> "FilterCriteria":
        """Return a copy with the given fields replaced; unknown fields raise ValueError."""
        unknown = sorted(set(changes) - {f.name for f in fields(self)})
        if unknown:
            raise ValueError(f"unknown filter field(s): {', '.join(unknown)}")
        return replace(self, **changes)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int


def matches(record: TaskRecord, criteria: FilterCriteria) -> bool:
    if criteria.status == "completed" and not record["completed"]:
        return False
    if criteria.status == "pending" and record["completed"]:
        return False
    if criteria.priority != "all" and record["priority"] != criteria.priority:
        return False
    if criteria.due_date is not None and record["due_date"] != criteria.due_date:
        return False
    if criteria.search_text and criteria.search_text not in record["name"].lower():
        return False
    return True


# PUBLIC_INTERFACE
def filter_records(records: Iterable[TaskRecord], criteria: FilterCriteria) -> List[TaskRecord]:
    """Return the records passing every criterion, in their original order."""
    return [r for r in records if matches(r, criteria)]


def _sort_key(record: TaskRecord):
    return (record["completed"], -PRIORITY_WEIGHTS[record["priority"]], record["due_date"])


# PUBLIC_INTERFACE
def sort_records(records: Iterable[TaskRecord]) -> List[TaskRecord]:
    """
    Order records for display.

    Pending before completed, then priority high to low, then earliest due
    date first. sorted() is stable, so full ties keep their input order.
    """
    return sorted(records, key=_sort_key)


# PUBLIC_INTERFACE
def is_overdue(due_date: date, today: Optional[date] = None) -> bool:
    """True when the due date is strictly before the current calendar day."""
    return due_date < (today or date.today())


# PUBLIC_INTERFACE
def compute_stats(records: Iterable[TaskRecord]) -> TaskStats:
    items = list(records)
    total = len(items)
    completed = sum(1 for r in items if r["completed"])
    return TaskStats(total=total, completed=completed, pending=total - completed)
