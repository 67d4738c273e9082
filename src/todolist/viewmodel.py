from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from .filtering import FilterCriteria, TaskStats, filter_records, is_overdue, sort_records
from .models import TaskRecord

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class TaskView:
    id: int
    name: str
    due_date: date
    due_date_label: str
    priority: str
    completed: bool
    overdue: bool


@dataclass(frozen=True)
class ViewModel:
    tasks: List[TaskView]
    stats: TaskStats
    criteria: FilterCriteria
    empty: bool
    default_due_date: date


# PUBLIC_INTERFACE
def format_due_date(value: date) -> str:
    """Long date label in the fixed display locale, e.g. 'Wednesday, May 1, 2024'."""
    return f"{_WEEKDAYS[value.weekday()]}, {_MONTHS[value.month - 1]} {value.day}, {value.year}"


# PUBLIC_INTERFACE
def build_view_model(
    records: Iterable[TaskRecord],
    criteria: FilterCriteria,
    stats: TaskStats,
    today: Optional[date] = None,
) -> ViewModel:
    """
    Derive everything a list view needs to render from the current state.

    Rows are filtered and sorted; completed tasks are never flagged overdue.
    """
    current = today or date.today()
    rows = [
        TaskView(
            id=r["id"],
            name=r["name"],
            due_date=r["due_date"],
            due_date_label=format_due_date(r["due_date"]),
            priority=r["priority"],
            completed=r["completed"],
            overdue=is_overdue(r["due_date"], current) and not r["completed"],
        )
        for r in sort_records(filter_records(records, criteria))
    ]
    return ViewModel(
        tasks=rows,
        stats=stats,
        criteria=criteria,
        empty=not rows,
        default_due_date=current,
    )
