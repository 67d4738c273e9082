from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .validation import FieldError


class TodoError(Exception):
    """Base class for errors reported by the command service."""


class SubmissionRejected(TodoError):
    """
    Raised when a new task fails validation.

    Carries every field error found, so a form can show the name and the date
    problems together.
    """

    def __init__(self, errors: List["FieldError"]) -> None:
        self.errors = list(errors)
        fields = ", ".join(e.field for e in self.errors)
        super().__init__(f"Task submission rejected ({fields})")


class TaskNotFoundError(TodoError):
    """Raised when a command targets an id that is not in the store."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")
