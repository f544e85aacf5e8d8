"""Single-add task creation through the task backend."""

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from ..config import settings
from ..models.task import ParsedDraft, Project, TaskCreatePayload, TaskCreateResponse
from .quick_parser import SINGLE_ADD, build_task_payload, parse_task_text, submission_blocker
from .task_api import TaskApiClient, TaskApiError

logger = logging.getLogger(__name__)


def local_zone() -> ZoneInfo:
    """Zone used for "today" and for due datetimes."""
    return ZoneInfo(settings.timezone)


def local_today() -> date:
    return datetime.now(local_zone()).date()


async def load_projects(projects: list[Project] | None, api: TaskApiClient) -> list[Project]:
    """Use the caller's project list, or fetch it from the task backend."""
    if projects is not None:
        return projects
    return await api.list_projects()


async def create_task(payload: TaskCreatePayload, api: TaskApiClient) -> TaskCreateResponse:
    """
    Create a task in the task backend.

    Args:
        payload: Task details in the backend's wire format
        api: Task backend client

    Returns:
        TaskCreateResponse with success status
    """
    try:
        created = await api.create_task(payload)
    except TaskApiError as e:
        return TaskCreateResponse(
            success=False,
            message=f"Failed to create task: {e.message}",
            task_title=payload.title,
        )

    task_id = created.get("id")
    logger.info(f"Task created: {payload.title} ({task_id})")

    return TaskCreateResponse(
        success=True,
        message="Task created successfully",
        task_title=payload.title,
        task_id=str(task_id) if task_id is not None else None,
    )


async def capture_task(
    text: str,
    projects: list[Project],
    api: TaskApiClient,
    today: date | None = None,
    default_project_id: str | None = None,
) -> TaskCreateResponse:
    """
    Parse quick-add text and create the task in one step.

    The create call is never made for a draft without a title or project.
    """
    draft: ParsedDraft = parse_task_text(
        text,
        projects,
        today or local_today(),
        SINGLE_ADD,
        default_project_id or settings.default_project_id,
    )

    blocker = submission_blocker(draft)
    if blocker:
        return TaskCreateResponse(success=False, message=blocker, task_title=draft.title, draft=draft)

    response = await create_task(build_task_payload(draft, local_zone()), api)
    response.draft = draft
    return response
