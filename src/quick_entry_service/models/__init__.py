"""Pydantic models for request/response schemas."""

from .batch import (
    BatchCreateFailure,
    BatchDraft,
    BatchParseRequest,
    BatchProgress,
    BatchSessionCreateRequest,
    BatchSessionResponse,
    BatchState,
    BatchSubmissionResult,
    BatchSubmitResponse,
    DraftEditRequest,
)
from .task import (
    ParsedDraft,
    Priority,
    Project,
    ProjectRef,
    TaskCreatePayload,
    TaskCreateResponse,
    TaskParseRequest,
)

__all__ = [
    "ParsedDraft",
    "Priority",
    "Project",
    "ProjectRef",
    "TaskParseRequest",
    "TaskCreatePayload",
    "TaskCreateResponse",
    "BatchState",
    "BatchDraft",
    "BatchProgress",
    "BatchCreateFailure",
    "BatchSubmissionResult",
    "BatchSessionCreateRequest",
    "BatchParseRequest",
    "DraftEditRequest",
    "BatchSessionResponse",
    "BatchSubmitResponse",
]
