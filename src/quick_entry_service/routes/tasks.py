"""Single-add task parsing and creation endpoints."""

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..models.task import (
    ParsedDraft,
    Project,
    TaskCreatePayload,
    TaskCreateResponse,
    TaskParseRequest,
)
from ..services.quick_parser import SINGLE_ADD, parse_task_text
from ..services.task_api import TaskApiError, get_task_api
from ..services.task_creation import capture_task, create_task, load_projects, local_today

router = APIRouter(tags=["tasks"])


async def _resolve_projects(projects: list[Project] | None) -> list[Project]:
    try:
        return await load_projects(projects, get_task_api())
    except TaskApiError as e:
        raise HTTPException(status_code=502, detail=f"Could not load projects: {e.message}")


@router.post("/parse", response_model=ParsedDraft)
async def parse_task(request: TaskParseRequest) -> ParsedDraft:
    """
    Parse quick-add text into a task draft.

    Recognized markers:
    - Dates: today, tomorrow, next week, (next) friday, in 3 days, 12/25
    - Times: at 3pm, at 14:30
    - Priority: !urgent/!high/!medium/!low, p1-p4, !!!, !!, !
    - #tag, @project, * (important)

    Example input: "Review docs tomorrow at 3pm !high #work @project"
    """
    projects = await _resolve_projects(request.projects)
    return parse_task_text(
        request.text,
        projects,
        request.today or local_today(),
        SINGLE_ADD,
        request.default_project_id or settings.default_project_id,
    )


@router.post("/create", response_model=TaskCreateResponse)
async def create_task_endpoint(request: TaskCreatePayload) -> TaskCreateResponse:
    """Create a task in the task backend from a structured payload."""
    return await create_task(request, get_task_api())


@router.post("/capture", response_model=TaskCreateResponse)
async def capture_task_endpoint(request: TaskParseRequest) -> TaskCreateResponse:
    """
    Parse and create task in one step.

    Convenience endpoint that combines /parse and /create. Drafts without a
    title or a project are reported back and never sent.
    """
    projects = await _resolve_projects(request.projects)
    return await capture_task(
        request.text,
        projects,
        get_task_api(),
        today=request.today,
        default_project_id=request.default_project_id,
    )
