"""Batch task creation: parse a multi-line buffer, edit drafts, bulk submit."""

import itertools
import logging
from dataclasses import dataclass
from datetime import date
from uuid import uuid4
from zoneinfo import ZoneInfo

from ..models.batch import (
    BatchCreateFailure,
    BatchDraft,
    BatchProgress,
    BatchState,
    BatchSubmissionResult,
    DraftEditRequest,
)
from ..models.task import Project, ProjectRef
from .quick_parser import build_task_payload, parse_task_line
from .task_api import TaskApiClient, TaskApiError

logger = logging.getLogger(__name__)


class BatchStateError(Exception):
    """Operation not allowed in the session's current state."""


class DraftNotFoundError(LookupError):
    """No draft with that id in the session."""


class SessionNotFoundError(LookupError):
    """No batch session with that id."""


@dataclass
class BatchOutcome:
    """Summary of a submit attempt, worded for a toast."""

    success: bool
    title: str
    description: str | None = None
    result: BatchSubmissionResult | None = None


class BatchSession:
    """
    Editable preview of tasks parsed from a multi-line buffer.

    States: EMPTY -> PARSED -> (EDITING <-> PARSED) -> SUBMITTING -> COMPLETED.
    Drafts only exist in memory; discarding the session drops them.
    """

    def __init__(
        self,
        projects: list[Project],
        default_project_id: str | None = None,
        session_id: str | None = None,
        max_lines: int | None = None,
    ):
        self.id = session_id or uuid4().hex
        self.projects = projects
        self.default_project_id = default_project_id
        self.max_lines = max_lines
        self.state = BatchState.EMPTY
        self.drafts: list[BatchDraft] = []
        self.editing_id: str | None = None
        self.progress: BatchProgress | None = None
        self._ids = itertools.count(1)

    def _require(self, *states: BatchState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise BatchStateError(f"Cannot do that while {self.state.value} (needs {allowed})")

    def _find(self, draft_id: str) -> BatchDraft:
        for draft in self.drafts:
            if draft.id == draft_id:
                return draft
        raise DraftNotFoundError(draft_id)

    def _project_name(self, project_id: str | None) -> str | None:
        return next((p.name for p in self.projects if p.id == project_id), None)

    @property
    def submittable_drafts(self) -> list[BatchDraft]:
        return [d for d in self.drafts if d.submittable]

    def parse(self, text: str, today: date) -> list[BatchDraft]:
        """
        Replace the drafts with one per non-blank line of text.

        Blank lines are dropped before parsing, so they never become drafts.

        Args:
            text: Multi-line buffer, one task per line
            today: Reference date for relative date phrases

        Returns:
            The new drafts
        """
        self._require(BatchState.EMPTY, BatchState.PARSED)

        lines = [line for line in text.splitlines() if line.strip()]
        if self.max_lines and len(lines) > self.max_lines:
            raise ValueError(f"Too many lines: {len(lines)} (limit {self.max_lines})")

        drafts = []
        for line in lines:
            parsed = parse_task_line(line, self.projects, today, self.default_project_id)
            drafts.append(
                BatchDraft(
                    id=str(next(self._ids)),
                    original_line=line,
                    **parsed.model_dump(exclude={"submittable"}),
                )
            )

        self.drafts = drafts
        self.editing_id = None
        self.state = BatchState.PARSED if drafts else BatchState.EMPTY
        logger.debug(f"Batch {self.id}: parsed {len(drafts)} drafts")
        return drafts

    def start_edit(self, draft_id: str) -> BatchDraft:
        self._require(BatchState.PARSED, BatchState.EDITING)
        draft = self._find(draft_id)
        self.editing_id = draft.id
        self.state = BatchState.EDITING
        return draft

    def cancel_edit(self) -> None:
        self._require(BatchState.EDITING)
        self.editing_id = None
        self.state = BatchState.PARSED

    def save_edit(self, edit: DraftEditRequest) -> BatchDraft:
        """
        Apply an inline edit to the draft being edited.

        The text parser is not re-run. Warnings are recomputed from the two
        hard requirements only: a title and a project.
        """
        self._require(BatchState.EDITING)
        current = self._find(self.editing_id)

        if edit.project_id and self._project_name(edit.project_id) is None:
            raise ValueError(f"Unknown project: {edit.project_id}")

        title = (edit.title or "").strip() or current.title
        project_id = edit.project_id or current.project_id
        project_name = self._project_name(project_id) or (
            current.project_ref.name if current.project_ref else None
        )

        if not title:
            warning = "No task title"
        elif not project_id:
            warning = "No project selected"
        else:
            warning = None

        updated = current.model_copy(
            update={
                "title": title,
                "due_date": edit.due_date if edit.due_date is not None else current.due_date,
                "priority": edit.priority or current.priority,
                "project_ref": ProjectRef(name=project_name, id=project_id),
                "has_warning": warning is not None,
                "warning_message": warning,
            }
        )
        self.drafts = [updated if d.id == current.id else d for d in self.drafts]
        self.editing_id = None
        self.state = BatchState.PARSED
        return updated

    def delete(self, draft_id: str) -> None:
        """Remove one draft; the others are untouched."""
        self._require(BatchState.PARSED, BatchState.EDITING)
        draft = self._find(draft_id)
        self.drafts = [d for d in self.drafts if d.id != draft.id]
        if self.editing_id == draft.id:
            self.editing_id = None
            self.state = BatchState.PARSED
        if not self.drafts:
            self.editing_id = None
            self.state = BatchState.EMPTY

    def discard(self) -> None:
        """Drop all unsaved drafts."""
        self.drafts = []
        self.editing_id = None
        self.progress = None
        self.state = BatchState.EMPTY

    async def submit(self, api: TaskApiClient, tz: ZoneInfo) -> BatchOutcome:
        """
        Send every submittable draft in one bulk request.

        Drafts without a title or project are left out of the request and
        stay in the session. Created drafts are removed; on a transport
        error nothing is removed and nothing is retried.
        """
        self._require(BatchState.PARSED)

        valid = self.submittable_drafts
        if not valid:
            return BatchOutcome(success=False, title="No valid tasks to create")

        payloads = [build_task_payload(d, tz, include_important=False) for d in valid]
        total = len(payloads)
        self.state = BatchState.SUBMITTING
        self.progress = BatchProgress(current=0, total=total)

        try:
            response = await api.create_tasks_batch(payloads)
        except TaskApiError as e:
            logger.error(f"Batch {self.id}: bulk create failed: {e.message}")
            self.state = BatchState.PARSED
            self.progress = None
            return BatchOutcome(success=False, title="Failed to create tasks", description=e.message)

        result = BatchSubmissionResult(
            successes=[str(task.get("id")) for task in response.get("success") or []],
        )
        failed_ids = set()
        for failure in response.get("failed") or []:
            index = failure.get("index")
            draft = valid[index] if isinstance(index, int) and 0 <= index < total else None
            if draft:
                failed_ids.add(draft.id)
            result.failures.append(
                BatchCreateFailure(
                    line=draft.original_line if draft else "",
                    reason=failure.get("error") or failure.get("reason") or "Unknown error",
                )
            )

        created_ids = {d.id for d in valid} - failed_ids
        self.drafts = [d for d in self.drafts if d.id not in created_ids]

        created, failed = len(result.successes), len(result.failures)
        self.progress = BatchProgress(current=created, total=total)
        logger.info(f"Batch {self.id}: created {created} of {total} tasks, {failed} failed")

        if failed:
            self.state = BatchState.PARSED
            return BatchOutcome(
                success=False,
                title=f"Created {created} tasks",
                description=f"{failed} tasks failed to create",
                result=result,
            )

        self.state = BatchState.COMPLETED
        return BatchOutcome(success=True, title=f"Created {created} tasks successfully", result=result)


class BatchSessionStore:
    """In-process registry of open batch sessions."""

    def __init__(self):
        self._sessions: dict[str, BatchSession] = {}

    def create(
        self,
        projects: list[Project],
        default_project_id: str | None = None,
        max_lines: int | None = None,
    ) -> BatchSession:
        session = BatchSession(projects, default_project_id, max_lines=max_lines)
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> BatchSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def remove(self, session_id: str) -> None:
        session = self.get(session_id)
        session.discard()
        del self._sessions[session_id]

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


sessions = BatchSessionStore()
