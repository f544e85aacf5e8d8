"""Batch task creation models."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from .task import ParsedDraft, Priority, Project


class BatchState(str, Enum):
    """Lifecycle of a batch creation session."""

    EMPTY = "empty"
    PARSED = "parsed"
    EDITING = "editing"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


class BatchDraft(ParsedDraft):
    """Draft parsed from one line of a batch buffer."""

    id: str
    original_line: str


class BatchProgress(BaseModel):
    """Created-so-far counter shown while a bulk request runs."""

    current: int = 0
    total: int = 0


class BatchCreateFailure(BaseModel):
    """One task the backend refused to create."""

    line: str
    reason: str


class BatchSubmissionResult(BaseModel):
    """Per-item outcome of a bulk create."""

    successes: list[str] = Field(default_factory=list)  # Created task ids
    failures: list[BatchCreateFailure] = Field(default_factory=list)


class BatchSessionCreateRequest(BaseModel):
    """Request to open a batch session."""

    default_project_id: str | None = None
    projects: list[Project] | None = Field(
        None, description="Known projects; fetched from the task backend when omitted"
    )


class BatchParseRequest(BaseModel):
    """Multi-line buffer to parse, one task per line."""

    text: str = Field(..., max_length=50000)
    today: date | None = None


class DraftEditRequest(BaseModel):
    """Inline edit of a batch draft. Omitted or blank fields keep their value."""

    title: str | None = None
    due_date: date | None = None
    priority: Priority | None = None
    project_id: str | None = None


class BatchSessionResponse(BaseModel):
    """Current state of a batch session."""

    id: str
    state: BatchState
    drafts: list[BatchDraft]
    editing_id: str | None = None
    submittable_count: int
    progress: BatchProgress | None = None


class BatchSubmitResponse(BaseModel):
    """Summary of a bulk submission."""

    success: bool
    title: str
    description: str | None = None
    result: BatchSubmissionResult | None = None
    session: BatchSessionResponse
