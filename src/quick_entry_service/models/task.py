"""Task-related Pydantic models."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Project(BaseModel):
    """Project known to the task backend."""

    id: str
    name: str


class ProjectRef(BaseModel):
    """Project reference on a draft. A missing id means the name did not resolve."""

    name: str | None = None
    id: str | None = None


class ParsedDraft(BaseModel):
    """Structured task draft produced from one line of quick-entry text."""

    title: str = ""
    due_date: date | None = None
    due_time: str | None = Field(None, description="24-hour HH:MM")
    priority: Priority = Priority.MEDIUM
    tags: list[str] = Field(default_factory=list)
    project_ref: ProjectRef | None = None
    is_important: bool = False
    has_warning: bool = False
    warning_message: str | None = None

    @property
    def project_id(self) -> str | None:
        return self.project_ref.id if self.project_ref else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def submittable(self) -> bool:
        """A draft can be sent only with a title and a resolved project."""
        return bool(self.title) and self.project_id is not None


class TaskParseRequest(BaseModel):
    """Request to parse quick-entry text into a draft."""

    text: str = Field(
        ...,
        description="Quick-add input like 'Review docs tomorrow at 3pm !high #work @project'",
        min_length=1,
        max_length=1000,
    )
    projects: list[Project] | None = Field(
        None, description="Known projects; fetched from the task backend when omitted"
    )
    default_project_id: str | None = None
    today: date | None = Field(None, description="Reference date, defaults to today")


class TaskCreatePayload(BaseModel):
    """Task creation payload in the task backend's wire format."""

    title: str = Field(..., min_length=1)
    projectId: str
    priority: Priority = Priority.MEDIUM
    status: str = "todo"
    dueDate: str | None = Field(None, description="ISO-8601 datetime")
    dueTime: str | None = None
    isImportant: bool | None = None

    def to_wire(self) -> dict[str, Any]:
        """JSON body for the task backend; batch payloads carry no isImportant."""
        data = self.model_dump(mode="json")
        if data["isImportant"] is None:
            del data["isImportant"]
        return data


class TaskCreateResponse(BaseModel):
    """Response from task creation."""

    success: bool
    message: str
    task_title: str
    task_id: str | None = None
    draft: ParsedDraft | None = None
