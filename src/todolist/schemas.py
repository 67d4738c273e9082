from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Priority, TaskRecord

# Incoming due dates may be a date, a datetime, or an ISO8601 string
DueDateInput = Union[date, datetime, str]

StatusFilter = Literal["all", "completed", "pending"]
PriorityFilter = Literal["all", "low", "medium", "high"]


def _parse_due_date(value: Optional[DueDateInput]) -> Optional[date]:
    """
    Normalize due date input into a calendar day.
    - None or a blank string means "no date" (the form field was left empty).
    - A datetime is reduced to its date; the time of day is ignored.
    - A string is parsed as an ISO date, falling back to an ISO datetime.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return date.fromisoformat(s)
        except ValueError:
            try:
                return datetime.fromisoformat(s).date()
            except ValueError as e:
                raise ValueError(
                    "Invalid date format. Use an ISO8601 date string (e.g., '2025-01-31')."
                ) from e

    raise ValueError("Invalid type for date; expected date, datetime, or ISO8601 string.")


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for submitting a new task.

    Name and date rules are not enforced here: the validation module reports
    both fields' errors together, so missing or blank values pass through.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Buy groceries",
                "due_date": "2025-02-01",
                "priority": "medium",
            }
        }
    )

    name: Optional[str] = Field(default=None, description="Task name (3..100 chars after trimming)")
    due_date: Optional[date] = Field(default=None, description="Due date as an ISO8601 date")
    priority: Priority = Field(default="medium", description="Task priority: low, medium or high")

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[date]:
        return _parse_due_date(v)


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a task record.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1714550400000,
                "name": "Buy groceries",
                "due_date": "2025-02-01",
                "priority": "medium",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123456",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the task")
    name: str = Field(..., description="Task name")
    due_date: date = Field(..., description="Due date")
    priority: Priority = Field(..., description="Task priority")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")


# PUBLIC_INTERFACE
class TaskExport(BaseModel):
    """
    One task in the export document and in the persisted payload.

    Field names on the wire:
    id, task, date, priority, completed, createdAt.
    """

    id: int
    name: str = Field(..., alias="task")
    due_date: date = Field(..., alias="date")
    priority: Priority
    completed: bool
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_record(cls, record: TaskRecord) -> "TaskExport":
        return cls.model_validate(
            {
                "id": record["id"],
                "task": record["name"],
                "date": record["due_date"],
                "priority": record["priority"],
                "completed": record["completed"],
                "createdAt": record["created_at"],
            }
        )

    def to_record(self) -> TaskRecord:
        return {
            "id": self.id,
            "name": self.name,
            "due_date": self.due_date,
            "priority": self.priority,
            "completed": self.completed,
            "created_at": self.created_at,
        }


# PUBLIC_INTERFACE
class StoragePayload(BaseModel):
    """Document stored in the persistence slot."""

    todos: List[TaskExport] = Field(default_factory=list)
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")


# PUBLIC_INTERFACE
class FilterUpdate(BaseModel):
    """
    Partial update of the filter criteria. Only fields present in the request
    are changed; an explicit null due_date clears the date filter.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": "pending", "search_text": "milk"}}
    )

    status: Optional[StatusFilter] = None
    priority: Optional[PriorityFilter] = None
    due_date: Optional[date] = None
    search_text: Optional[str] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[date]:
        return _parse_due_date(v)


# PUBLIC_INTERFACE
class FilterOut(BaseModel):
    status: StatusFilter
    priority: PriorityFilter
    due_date: Optional[date] = None
    search_text: str = ""


# PUBLIC_INTERFACE
class StatsOut(BaseModel):
    total: int = Field(..., description="Number of tasks in the store")
    completed: int = Field(..., description="Number of completed tasks")
    pending: int = Field(..., description="Number of tasks still pending")


class TaskViewOut(BaseModel):
    id: int
    name: str
    due_date: date
    due_date_label: str = Field(..., description="Due date formatted for display")
    priority: Priority
    completed: bool
    overdue: bool = Field(..., description="Pending and due before today")


# PUBLIC_INTERFACE
class ViewModelOut(BaseModel):
    """
    Everything a list view needs: sorted rows, statistics and active filters.
    """

    tasks: List[TaskViewOut]
    stats: StatsOut
    criteria: FilterOut
    empty: bool = Field(..., description="True when no task passes the filters")
    default_due_date: date = Field(..., description="Suggested due date for the new-task form")
