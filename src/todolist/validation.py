"""
Validation rules for new task submissions.

All checks are pure: they look at the submitted values, the records currently
in the store and the current calendar day, and return error values instead of
raising. The command service decides what to do with them.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from .models import NAME_MAX_LENGTH, NAME_MIN_LENGTH, PRIORITIES, TaskRecord

DateInput = Union[date, datetime, None]


class ErrorCode(str, Enum):
    EMPTY = "empty"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    DUPLICATE = "duplicate"
    MISSING_DATE = "missing_date"
    PAST_DATE = "past_date"
    INVALID_PRIORITY = "invalid_priority"


MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.EMPTY: "Task name must not be empty",
    ErrorCode.TOO_SHORT: f"Task name must be at least {NAME_MIN_LENGTH} characters",
    ErrorCode.TOO_LONG: f"Task name must be at most {NAME_MAX_LENGTH} characters",
    ErrorCode.DUPLICATE: "A pending task with this name already exists",
    ErrorCode.MISSING_DATE: "Due date must not be empty",
    ErrorCode.PAST_DATE: "Due date must not be earlier than today",
    ErrorCode.INVALID_PRIORITY: f"Priority must be one of {', '.join(PRIORITIES)}",
}


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class FieldError:
    """A validation failure scoped to one form field ('name', 'date' or 'priority')."""

    field: str
    code: ErrorCode

    @property
    def message(self) -> str:
        return MESSAGES[self.code]


def _as_day(value: Union[date, datetime]) -> date:
    # datetime is a subclass of date; drop the time of day.
    if isinstance(value, datetime):
        return value.date()
    return value


# PUBLIC_INTERFACE
def validate_name(name: Optional[str], existing: Iterable[TaskRecord]) -> Optional[FieldError]:
    """
    Check a task name against the length rules and the pending tasks.

    Returns None when the name is acceptable. Completed tasks never count as
    duplicates.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        return FieldError("name", ErrorCode.EMPTY)
    if len(trimmed) < NAME_MIN_LENGTH:
        return FieldError("name", ErrorCode.TOO_SHORT)
    if len(trimmed) > NAME_MAX_LENGTH:
        return FieldError("name", ErrorCode.TOO_LONG)

    lowered = trimmed.lower()
    if any(r["name"].lower() == lowered and not r["completed"] for r in existing):
        return FieldError("name", ErrorCode.DUPLICATE)
    return None


# PUBLIC_INTERFACE
def validate_date(value: DateInput, today: Optional[date] = None) -> Optional[FieldError]:
    """Require a due date that is not before the current calendar day."""
    if value is None:
        return FieldError("date", ErrorCode.MISSING_DATE)
    current = today or date.today()
    if _as_day(value) < current:
        return FieldError("date", ErrorCode.PAST_DATE)
    return None


# PUBLIC_INTERFACE
def validate_priority(priority: Optional[str]) -> Optional[FieldError]:
    if priority not in PRIORITIES:
        return FieldError("priority", ErrorCode.INVALID_PRIORITY)
    return None


# PUBLIC_INTERFACE
def validate_submission(
    name: Optional[str],
    due_date: DateInput,
    existing: Iterable[TaskRecord],
    today: Optional[date] = None,
    priority: Optional[str] = "medium",
) -> List[FieldError]:
    """
    Run every field check and collect every failure.

    An empty list means the submission may be added to the store.
    """
    errors: List[FieldError] = []
    for error in (
        validate_name(name, existing),
        validate_date(due_date, today),
        validate_priority(priority),
    ):
        if error is not None:
            errors.append(error)
    return errors
