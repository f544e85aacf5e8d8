"""Shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.quick_entry_service.main import app
from src.quick_entry_service.models.task import Project
from src.quick_entry_service.services.batch import sessions


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_batch_sessions():
    yield
    sessions.clear()


@pytest.fixture
def projects() -> list[Project]:
    return [Project(id="p-work", name="Work"), Project(id="p-personal", name="Personal")]


@pytest.fixture
def task_api() -> MagicMock:
    """Task backend client with every call mocked."""
    api = MagicMock()
    api.list_projects = AsyncMock(return_value=[])
    api.create_task = AsyncMock(return_value={"id": "t-1"})
    api.create_tasks_batch = AsyncMock(return_value={"success": [], "failed": []})
    return api
