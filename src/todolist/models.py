from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Literal, Tuple, TypedDict

Priority = Literal["low", "medium", "high"]

PRIORITIES: Tuple[str, ...] = ("low", "medium", "high")

# Higher weight sorts first.
PRIORITY_WEIGHTS: Dict[str, int] = {"high": 3, "medium": 2, "low": 1}

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100


# PUBLIC_INTERFACE
class TaskRecord(TypedDict):
    """
    A single to-do entry held by the task store.

    Fields:
    - id: Unique integer identifier derived from the creation time (ms)
    - name: Trimmed task name (3..100 chars)
    - due_date: Calendar day the task is due
    - priority: One of 'low', 'medium', 'high'
    - completed: Completion flag; the only field mutated after creation
    - created_at: Local creation timestamp
    """

    id: int
    name: str
    due_date: date
    priority: Priority
    completed: bool
    created_at: datetime
