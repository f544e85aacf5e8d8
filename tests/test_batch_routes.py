"""Tests for batch creation endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.quick_entry_service.services.task_api import TaskApiError

PROJECTS = [{"id": "p-work", "name": "Work"}, {"id": "p-personal", "name": "Personal"}]

BUFFER = "Buy groceries tomorrow #shopping !high @personal\n\nDraft slides @xyz\nReview docs next week @work p2"


@pytest.fixture
def session_id(client: TestClient) -> str:
    """Open a session and parse the sample buffer."""
    response = client.post("/batch", json={"projects": PROJECTS})
    assert response.status_code == 200
    assert response.json()["state"] == "empty"
    session_id = response.json()["id"]

    response = client.post(f"/batch/{session_id}/parse", json={"text": BUFFER, "today": "2024-01-01"})
    assert response.status_code == 200
    return session_id


def test_parse_buffer(client: TestClient, session_id: str) -> None:
    """Test that the blank line is dropped and warnings are reported."""
    data = client.get(f"/batch/{session_id}").json()

    assert data["state"] == "parsed"
    assert len(data["drafts"]) == 3
    assert data["submittable_count"] == 2
    assert data["drafts"][1]["has_warning"] is True
    assert data["drafts"][1]["warning_message"] == 'Project "@xyz" not found'
    assert data["drafts"][2]["due_date"] == "2024-01-08"


def test_parse_buffer_with_huge_offset(client: TestClient) -> None:
    """Test that an out-of-range "in N weeks" line still parses with the rest."""
    session_id = client.post("/batch", json={"projects": PROJECTS}).json()["id"]

    response = client.post(
        f"/batch/{session_id}/parse",
        json={"text": "Renew in 3000000 weeks @work\nPay rent tomorrow @personal", "today": "2024-01-01"},
    )

    assert response.status_code == 200
    drafts = response.json()["drafts"]
    assert drafts[0]["due_date"] is None
    assert drafts[0]["title"] == "Renew in 3000000 weeks"
    assert drafts[1]["due_date"] == "2024-01-02"


def test_open_session_with_default_project(client: TestClient) -> None:
    response = client.post("/batch", json={"projects": PROJECTS, "default_project_id": "p-work"})
    session_id = response.json()["id"]

    data = client.post(f"/batch/{session_id}/parse", json={"text": "Call mom at 3pm"}).json()

    assert data["drafts"][0]["project_ref"] == {"name": "Work", "id": "p-work"}
    assert data["drafts"][0]["due_time"] == "15:00"


def test_open_session_backend_down(client: TestClient, task_api: MagicMock) -> None:
    task_api.list_projects.side_effect = TaskApiError("Task backend unreachable")
    with patch("src.quick_entry_service.routes.batch.get_task_api", return_value=task_api):
        response = client.post("/batch", json={})
    assert response.status_code == 502


def test_unknown_session(client: TestClient) -> None:
    assert client.get("/batch/nope").status_code == 404
    assert client.post("/batch/nope/parse", json={"text": "x"}).status_code == 404


def test_edit_flow(client: TestClient, session_id: str) -> None:
    """Test start, save and the recomputed warning."""
    response = client.post(f"/batch/{session_id}/drafts/2/edit")
    assert response.status_code == 200
    assert client.get(f"/batch/{session_id}").json()["state"] == "editing"

    response = client.put(f"/batch/{session_id}/drafts/2", json={"project_id": "p-work"})
    assert response.status_code == 200
    draft = response.json()
    assert draft["project_ref"] == {"name": "Work", "id": "p-work"}
    assert draft["has_warning"] is False

    data = client.get(f"/batch/{session_id}").json()
    assert data["state"] == "parsed"
    assert data["submittable_count"] == 3


def test_save_edit_requires_editing(client: TestClient, session_id: str) -> None:
    response = client.put(f"/batch/{session_id}/drafts/2", json={"title": "x"})
    assert response.status_code == 409


def test_save_edit_unknown_project(client: TestClient, session_id: str) -> None:
    client.post(f"/batch/{session_id}/drafts/2/edit")
    response = client.put(f"/batch/{session_id}/drafts/2", json={"project_id": "p-missing"})
    assert response.status_code == 422


def test_cancel_edit(client: TestClient, session_id: str) -> None:
    client.post(f"/batch/{session_id}/drafts/1/edit")
    response = client.delete(f"/batch/{session_id}/drafts/1/edit")
    assert response.status_code == 200
    assert response.json()["state"] == "parsed"


def test_delete_draft(client: TestClient, session_id: str) -> None:
    response = client.delete(f"/batch/{session_id}/drafts/2")
    assert response.status_code == 200
    assert [d["id"] for d in response.json()["drafts"]] == ["1", "3"]

    assert client.delete(f"/batch/{session_id}/drafts/2").status_code == 404


def test_submit_full_success(client: TestClient, session_id: str, task_api: MagicMock) -> None:
    """Test the bulk submission summary."""
    task_api.create_tasks_batch.return_value = {"success": [{"id": "t-1"}, {"id": "t-2"}], "failed": []}

    with patch("src.quick_entry_service.routes.batch.get_task_api", return_value=task_api):
        response = client.post(f"/batch/{session_id}/submit")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["title"] == "Created 2 tasks successfully"
    assert data["result"]["successes"] == ["t-1", "t-2"]
    assert data["session"]["state"] == "completed"
    assert data["session"]["progress"] == {"current": 2, "total": 2}
    assert len(task_api.create_tasks_batch.call_args.args[0]) == 2


def test_submit_partial_failure(client: TestClient, session_id: str, task_api: MagicMock) -> None:
    task_api.create_tasks_batch.return_value = {
        "success": [{"id": "t-1"}],
        "failed": [{"index": 1, "error": "Invalid task data"}],
    }

    with patch("src.quick_entry_service.routes.batch.get_task_api", return_value=task_api):
        data = client.post(f"/batch/{session_id}/submit").json()

    assert data["success"] is False
    assert data["title"] == "Created 1 tasks"
    assert data["description"] == "1 tasks failed to create"
    assert data["result"]["failures"] == [
        {"line": "Review docs next week @work p2", "reason": "Invalid task data"}
    ]
    assert data["session"]["state"] == "parsed"


def test_submit_transport_failure(client: TestClient, session_id: str, task_api: MagicMock) -> None:
    task_api.create_tasks_batch.side_effect = TaskApiError("Failed to create batch tasks", 500)

    with patch("src.quick_entry_service.routes.batch.get_task_api", return_value=task_api):
        data = client.post(f"/batch/{session_id}/submit").json()

    assert data["success"] is False
    assert data["title"] == "Failed to create tasks"
    assert data["description"] == "Failed to create batch tasks"
    assert len(data["session"]["drafts"]) == 3


def test_submit_while_editing_conflicts(client: TestClient, session_id: str) -> None:
    client.post(f"/batch/{session_id}/drafts/1/edit")
    assert client.post(f"/batch/{session_id}/submit").status_code == 409


def test_discard_session(client: TestClient, session_id: str) -> None:
    """Test that dismissing the panel drops the session."""
    response = client.delete(f"/batch/{session_id}")
    assert response.status_code == 200
    assert client.get(f"/batch/{session_id}").status_code == 404
