"""Rule-based quick-entry parser shared by single-add and batch creation."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from ..models.task import ParsedDraft, Priority, Project, ProjectRef, TaskCreatePayload
from .date_matcher import match_due_date
from .priority import DEFAULT_PRIORITY_ALIASES, build_priority_rules, match_priority
from .tag_parser import extract_project, extract_tags
from .time_matcher import match_due_time

IMPORTANT_PATTERN = re.compile(r"\s*\*\s*")

NO_TITLE_WARNING = "No task title found"
EMPTY_LINE_WARNING = "Empty line"
NO_PROJECT_NOTICE = "Please select a project using @projectname"
NO_TITLE_NOTICE = "Task title is required"


@dataclass(frozen=True)
class ParserConfig:
    """Differences between the single-add box and the batch creator."""

    enable_important_marker: bool = False
    enable_bang_priority: bool = False
    priority_aliases: dict[str, Priority] = field(
        default_factory=lambda: dict(DEFAULT_PRIORITY_ALIASES)
    )
    warn_unresolved_project: bool = False
    warn_missing_title: bool = False
    fallback_to_first_project: bool = False


SINGLE_ADD = ParserConfig(
    enable_important_marker=True,
    enable_bang_priority=True,
    fallback_to_first_project=True,
)

BATCH = ParserConfig(
    warn_unresolved_project=True,
    warn_missing_title=True,
)


def normalize_title(text: str) -> str:
    """Collapse runs of whitespace and trim."""
    return re.sub(r"\s+", " ", text).strip()


def _default_project_ref(
    projects: list[Project],
    default_project_id: str | None,
    fallback_to_first: bool,
) -> ProjectRef | None:
    if default_project_id:
        name = next((p.name for p in projects if p.id == default_project_id), None)
        return ProjectRef(name=name, id=default_project_id)
    if fallback_to_first and projects:
        return ProjectRef(name=projects[0].name, id=projects[0].id)
    return None


def parse_task_text(
    text: str,
    projects: list[Project],
    today: date,
    config: ParserConfig = SINGLE_ADD,
    default_project_id: str | None = None,
) -> ParsedDraft:
    """
    Turn one line of quick-entry text into a draft.

    Markers are matched in a fixed order (date, time, priority, important,
    tags, project) and each matched marker is removed before the next
    matcher runs. Whatever text is left becomes the title.

    Args:
        text: Raw input like "Review docs tomorrow at 3pm !high #work @project"
        projects: Known projects for @project resolution
        today: Reference date for relative date phrases
        config: Mode-specific marker set
        default_project_id: Project used when no @project resolves

    Returns:
        ParsedDraft; the same inputs always produce the same draft
    """
    draft = ParsedDraft()

    date_match = match_due_date(text, today)
    draft.due_date = date_match.due_date
    remaining = date_match.remaining

    time_match = match_due_time(remaining)
    draft.due_time = time_match.due_time
    remaining = time_match.remaining

    rules = build_priority_rules(config.priority_aliases, config.enable_bang_priority)
    priority_match = match_priority(remaining, rules)
    draft.priority = priority_match.priority
    remaining = priority_match.remaining

    if config.enable_important_marker and "*" in remaining:
        draft.is_important = True
        remaining = IMPORTANT_PATTERN.sub(" ", remaining)

    tag_match = extract_tags(remaining)
    draft.tags = tag_match.tags
    remaining = tag_match.remaining

    project_match = extract_project(remaining, projects)
    remaining = project_match.remaining
    if project_match.project:
        draft.project_ref = ProjectRef(name=project_match.project.name, id=project_match.project.id)
    elif project_match.token:
        draft.project_ref = ProjectRef(name=project_match.token, id=None)
        if config.warn_unresolved_project:
            draft.has_warning = True
            draft.warning_message = f'Project "@{project_match.token}" not found'

    draft.title = normalize_title(remaining)
    if not draft.title and config.warn_missing_title:
        draft.has_warning = True
        draft.warning_message = NO_TITLE_WARNING

    if draft.project_id is None:
        fallback = _default_project_ref(
            projects, default_project_id, config.fallback_to_first_project
        )
        if fallback:
            draft.project_ref = fallback

    return draft


def parse_task_line(
    line: str,
    projects: list[Project],
    today: date,
    default_project_id: str | None = None,
) -> ParsedDraft:
    """Parse one batch line; a blank line yields an "Empty line" warning draft."""
    if not line.strip():
        return ParsedDraft(has_warning=True, warning_message=EMPTY_LINE_WARNING)
    return parse_task_text(line.strip(), projects, today, BATCH, default_project_id)


def submission_blocker(draft: ParsedDraft) -> str | None:
    """Reason a draft cannot be created yet, or None when it can."""
    if not draft.title:
        return NO_TITLE_NOTICE
    if draft.project_id is None:
        return NO_PROJECT_NOTICE
    return None


def due_datetime(draft: ParsedDraft, tz: ZoneInfo) -> str | None:
    """Combine due date and optional time into an ISO-8601 datetime."""
    if draft.due_date is None:
        return None
    at = time.fromisoformat(draft.due_time) if draft.due_time else time()
    return datetime.combine(draft.due_date, at, tzinfo=tz).isoformat()


def build_task_payload(
    draft: ParsedDraft,
    tz: ZoneInfo,
    include_important: bool = True,
) -> TaskCreatePayload:
    """Shape a submittable draft as a task backend creation payload."""
    if draft.project_id is None:
        raise ValueError(NO_PROJECT_NOTICE)
    return TaskCreatePayload(
        title=draft.title,
        projectId=draft.project_id,
        priority=draft.priority,
        dueDate=due_datetime(draft, tz),
        dueTime=draft.due_time,
        isImportant=draft.is_important if include_important else None,
    )
