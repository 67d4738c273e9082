"""
To-do list manager package.

The core (validation, task store, filtering and sorting) has no web
dependencies; ``todolist.main`` wraps it in a FastAPI application and exposes
the app instance for convenience imports.
"""
from .errors import SubmissionRejected, TaskNotFoundError, TodoError  # noqa: F401
from .filtering import FilterCriteria, compute_stats, filter_records, is_overdue, sort_records  # noqa: F401
from .service import TodoService  # noqa: F401
from .storage import InMemoryStorage, PersistenceAdapter  # noqa: F401
