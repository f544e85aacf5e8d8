"""Batch task creation endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..models.batch import (
    BatchDraft,
    BatchParseRequest,
    BatchSessionCreateRequest,
    BatchSessionResponse,
    BatchSubmitResponse,
    DraftEditRequest,
)
from ..services.batch import (
    BatchSession,
    BatchStateError,
    DraftNotFoundError,
    SessionNotFoundError,
    sessions,
)
from ..services.task_api import TaskApiError, get_task_api
from ..services.task_creation import load_projects, local_today, local_zone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/batch", tags=["batch"])


def _get_session(session_id: str) -> BatchSession:
    try:
        return sessions.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Batch session not found: {session_id}")


def _to_response(session: BatchSession) -> BatchSessionResponse:
    return BatchSessionResponse(
        id=session.id,
        state=session.state,
        drafts=session.drafts,
        editing_id=session.editing_id,
        submittable_count=len(session.submittable_drafts),
        progress=session.progress,
    )


def _http_error(e: Exception) -> HTTPException:
    """Map batch service errors onto HTTP status codes."""
    if isinstance(e, DraftNotFoundError):
        return HTTPException(status_code=404, detail=f"Draft not found: {e.args[0]}")
    if isinstance(e, BatchStateError):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


@router.post("", response_model=BatchSessionResponse)
async def open_session(request: BatchSessionCreateRequest) -> BatchSessionResponse:
    """Open a batch session with the user's projects and an optional default project."""
    try:
        projects = await load_projects(request.projects, get_task_api())
    except TaskApiError as e:
        raise HTTPException(status_code=502, detail=f"Could not load projects: {e.message}")

    session = sessions.create(
        projects,
        default_project_id=request.default_project_id or settings.default_project_id,
        max_lines=settings.max_batch_lines,
    )
    logger.info(f"Opened batch session {session.id} with {len(projects)} projects")
    return _to_response(session)


@router.get("/{session_id}", response_model=BatchSessionResponse)
async def get_session(session_id: str) -> BatchSessionResponse:
    return _to_response(_get_session(session_id))


@router.delete("/{session_id}")
async def discard_session(session_id: str) -> dict[str, str]:
    """Dismiss the batch panel; unsaved drafts are dropped."""
    _get_session(session_id)
    sessions.remove(session_id)
    return {"status": "discarded", "id": session_id}


@router.post("/{session_id}/parse", response_model=BatchSessionResponse)
async def parse_buffer(session_id: str, request: BatchParseRequest) -> BatchSessionResponse:
    """
    Parse a multi-line buffer, one task per line.

    Example buffer:
        Buy groceries tomorrow #shopping !high
        Call mom at 3pm
        Review docs next week @work #review p2
    """
    session = _get_session(session_id)
    try:
        session.parse(request.text, request.today or local_today())
    except (BatchStateError, ValueError) as e:
        raise _http_error(e)
    return _to_response(session)


@router.post("/{session_id}/drafts/{draft_id}/edit", response_model=BatchDraft)
async def start_edit(session_id: str, draft_id: str) -> BatchDraft:
    session = _get_session(session_id)
    try:
        return session.start_edit(draft_id)
    except (BatchStateError, DraftNotFoundError) as e:
        raise _http_error(e)


@router.delete("/{session_id}/drafts/{draft_id}/edit", response_model=BatchSessionResponse)
async def cancel_edit(session_id: str, draft_id: str) -> BatchSessionResponse:
    session = _get_session(session_id)
    if session.editing_id != draft_id:
        raise HTTPException(status_code=409, detail=f"Draft {draft_id} is not being edited")
    session.cancel_edit()
    return _to_response(session)


@router.put("/{session_id}/drafts/{draft_id}", response_model=BatchDraft)
async def save_edit(session_id: str, draft_id: str, request: DraftEditRequest) -> BatchDraft:
    """Save an inline edit. Fields left out keep their parsed value."""
    session = _get_session(session_id)
    if session.editing_id != draft_id:
        raise HTTPException(status_code=409, detail=f"Draft {draft_id} is not being edited")
    try:
        return session.save_edit(request)
    except (BatchStateError, ValueError) as e:
        raise _http_error(e)


@router.delete("/{session_id}/drafts/{draft_id}", response_model=BatchSessionResponse)
async def delete_draft(session_id: str, draft_id: str) -> BatchSessionResponse:
    session = _get_session(session_id)
    try:
        session.delete(draft_id)
    except (BatchStateError, DraftNotFoundError) as e:
        raise _http_error(e)
    return _to_response(session)


@router.post("/{session_id}/submit", response_model=BatchSubmitResponse)
async def submit(session_id: str) -> BatchSubmitResponse:
    """
    Create every submittable draft with one bulk request.

    Drafts missing a title or project are not sent. On full success the
    session is completed; otherwise the remaining drafts stay for a retry.
    """
    session = _get_session(session_id)
    try:
        outcome = await session.submit(get_task_api(), local_zone())
    except BatchStateError as e:
        raise _http_error(e)

    return BatchSubmitResponse(
        success=outcome.success,
        title=outcome.title,
        description=outcome.description,
        result=outcome.result,
        session=_to_response(session),
    )
