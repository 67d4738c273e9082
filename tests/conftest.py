from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from todolist.main import create_app
from todolist.service import TodoService
from todolist.settings import Settings
from todolist.storage import InMemoryStorage

from .helpers import fixed_clock


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def service(storage: InMemoryStorage) -> TodoService:
    """TodoService over an in-memory slot with the clock pinned to FIXED_NOW."""
    return TodoService(storage, clock=fixed_clock)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        persistence_backend="memory",
        sqlite_db_path="./data/todos.db",
        storage_key="todoApp",
        cors_allow_origins=["*"],
        log_level="INFO",
    )


@pytest.fixture()
def client(settings: Settings, service: TodoService) -> TestClient:
    return TestClient(create_app(settings, service=service))
