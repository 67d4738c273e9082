"""
Command service: the single owner of the task store and the filter criteria.

Every mutating command runs validate, mutate, persist in one locked step, so
commands arriving from a threaded front end still apply one at a time.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from threading import RLock
from typing import Any, List, Optional, Union, cast

from .errors import SubmissionRejected, TaskNotFoundError
from .filtering import FilterCriteria, TaskStats, compute_stats
from .models import Priority, TaskRecord
from .repositories import Clock, TaskStore
from .storage import PersistenceAdapter
from .utils import export_document, export_filename
from .validation import validate_submission
from .viewmodel import ViewModel, build_view_model

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoService:
    """
    Accepts the commands a front end can issue and keeps the persisted copy of
    the task list in step with the in-memory store.
    """

    def __init__(self, storage: PersistenceAdapter, clock: Clock = datetime.now) -> None:
        self._storage = storage
        self._clock = clock
        self._lock = RLock()
        self._store = TaskStore(storage.load(), clock=clock)
        self._criteria = FilterCriteria()
        logger.info("TodoService ready slot=%s total=%d", storage.key, len(self._store))

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def today(self) -> date:
        return self._clock().date()

    def _persist(self) -> None:
        self._storage.save(self._store.all())

    # ---- commands ----

    def submit_new_task(
        self,
        name: Optional[str],
        due_date: Union[date, datetime, None],
        priority: Priority = "medium",
    ) -> TaskRecord:
        """
        Validate and add a task.

        Raises:
            SubmissionRejected: with every field error when validation fails.
        """
        with self._lock:
            errors = validate_submission(name, due_date, self._store.all(), self.today(), priority)
            if errors:
                logger.debug("Rejected submission: %s", [e.code.value for e in errors])
                raise SubmissionRejected(errors)
            if isinstance(due_date, datetime):
                due_date = due_date.date()
            record = self._store.add(cast(str, name), cast(date, due_date), priority)
            self._persist()
            logger.info("Added task id=%s priority=%s", record["id"], record["priority"])
            return record

    def toggle_task(self, task_id: int) -> TaskRecord:
        """Flip completion of a task. Raises TaskNotFoundError for unknown ids."""
        with self._lock:
            record = self._store.toggle_completed(task_id)
            if record is None:
                raise TaskNotFoundError(task_id)
            self._persist()
            logger.info("Toggled task id=%s completed=%s", task_id, record["completed"])
            return record

    def delete_task(self, task_id: int) -> None:
        """
        Remove a task. The caller is responsible for confirming with the user.

        Raises:
            TaskNotFoundError: if the id is not in the store.
        """
        with self._lock:
            if not self._store.remove(task_id):
                raise TaskNotFoundError(task_id)
            self._persist()
            logger.info("Deleted task id=%s", task_id)

    def set_filter(self, **changes: Any) -> FilterCriteria:
        """Replace only the given criteria fields; raises ValueError on unknown fields or values."""
        with self._lock:
            self._criteria = self._criteria.merged(**changes)
            return self._criteria

    def clear_filters(self) -> FilterCriteria:
        with self._lock:
            self._criteria = FilterCriteria()
            return self._criteria

    def clear_search(self) -> FilterCriteria:
        return self.set_filter(search_text="")

    # ---- queries ----

    def get_task(self, task_id: int) -> TaskRecord:
        with self._lock:
            record = self._store.get(task_id)
        if record is None:
            raise TaskNotFoundError(task_id)
        return record

    def tasks(self) -> List[TaskRecord]:
        with self._lock:
            return self._store.all()

    def stats(self) -> TaskStats:
        return compute_stats(self.tasks())

    def view(self) -> ViewModel:
        with self._lock:
            records = self._store.all()
            return build_view_model(records, self._criteria, compute_stats(records), self.today())

    def export_all(self) -> str:
        return export_document(self.tasks())

    def export_filename(self) -> str:
        return export_filename(self.today())
