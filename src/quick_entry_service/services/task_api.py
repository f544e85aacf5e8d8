"""HTTP client for the task backend that owns projects and tasks."""

import logging
from functools import lru_cache
from typing import Any

import httpx

from ..config import settings
from ..models.task import Project, TaskCreatePayload

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class TaskApiError(Exception):
    """The task backend rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Pull the backend's error message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or f"HTTP {response.status_code}"


class TaskApiClient:
    """Thin async wrapper over the task backend's REST endpoints."""

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Task backend root, e.g. "https://tasks.example.com"
            token: Bearer token; omitted from requests when empty
            timeout: Request timeout in seconds
            transport: Optional transport override
        """
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(f"Task backend error on {method} {path} ({e.response.status_code}): {message}")
            raise TaskApiError(message, e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Task backend unreachable on {method} {path}: {e}")
            raise TaskApiError(f"Task backend unreachable: {e}") from e

    async def list_projects(self) -> list[Project]:
        """Fetch the user's projects."""
        data = await self._request("GET", "/api/projects")
        return [Project(id=str(item["id"]), name=item["name"]) for item in data]

    async def create_task(self, payload: TaskCreatePayload) -> dict[str, Any]:
        """Create one task and return the backend's task object."""
        return await self._request("POST", "/api/tasks", json=payload.to_wire())

    async def create_tasks_batch(self, payloads: list[TaskCreatePayload]) -> dict[str, Any]:
        """
        Create several tasks in one request.

        Returns:
            {"success": [task, ...], "failed": [{"index": i, "error": "..."}, ...]}
        """
        body = {"tasks": [payload.to_wire() for payload in payloads]}
        return await self._request("POST", "/api/tasks/batch", json=body)


@lru_cache(maxsize=1)
def get_task_api() -> TaskApiClient:
    """Get or create the TaskApiClient singleton."""
    return TaskApiClient(
        base_url=settings.tasks_api_url,
        token=settings.tasks_api_token,
        timeout=settings.request_timeout,
    )
