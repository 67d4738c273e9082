from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Iterable, List, Optional

from .models import PRIORITIES, Priority, TaskRecord

Clock = Callable[[], datetime]


# PUBLIC_INTERFACE
class TaskStore:
    """
    Ordered in-memory collection of task records, newest first.

    The store does not validate; callers run the validation rules before
    calling add(). Every read returns copies so callers cannot mutate stored
    records behind the store's back.
    """

    def __init__(self, records: Optional[Iterable[TaskRecord]] = None, clock: Clock = datetime.now) -> None:
        self._clock = clock
        self._items: List[TaskRecord] = [r.copy() for r in (records or [])]
        self._last_id = max((r["id"] for r in self._items), default=0)

    def _allocate_id(self) -> int:
        # Millisecond timestamp, bumped past anything already issued or loaded.
        candidate = int(self._clock().timestamp() * 1000)
        i = max(candidate, self._last_id + 1)
        self._last_id = i
        return i

    def _find(self, task_id: int) -> Optional[TaskRecord]:
        for item in self._items:
            if item["id"] == task_id:
                return item
        return None

    def add(self, name: str, due_date: date, priority: Priority) -> TaskRecord:
        if priority not in PRIORITIES:
            raise ValueError(f"priority must be one of {', '.join(PRIORITIES)}")
        entity: TaskRecord = {
            "id": self._allocate_id(),
            "name": name.strip(),
            "due_date": due_date,
            "priority": priority,
            "completed": False,
            "created_at": self._clock(),
        }
        self._items.insert(0, entity)
        return entity.copy()

    def get(self, task_id: int) -> Optional[TaskRecord]:
        item = self._find(task_id)
        return None if item is None else item.copy()

    def toggle_completed(self, task_id: int) -> Optional[TaskRecord]:
        """Flip the completion flag. Return the updated record or None if not found."""
        item = self._find(task_id)
        if item is None:
            return None
        item["completed"] = not item["completed"]
        return item.copy()

    def remove(self, task_id: int) -> bool:
        """Delete a record by id. Return True if deleted, False if not found."""
        item = self._find(task_id)
        if item is None:
            return False
        self._items.remove(item)
        return True

    def all(self) -> List[TaskRecord]:
        return [t.copy() for t in self._items]

    def __len__(self) -> int:
        return len(self._items)
