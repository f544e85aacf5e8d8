"""Tag (#word) and project (@word) extraction."""

import re
from dataclasses import dataclass, field

from ..models.task import Project

TAG_PATTERN = re.compile(r"#(\w+)")
PROJECT_PATTERN = re.compile(r"@(\w+)")


@dataclass
class TagMatch:
    """Tags found in text, in order of appearance."""

    tags: list[str] = field(default_factory=list)
    remaining: str = ""


@dataclass
class ProjectMatch:
    """The @project token typed by the user and the project it resolved to."""

    token: str | None
    project: Project | None
    remaining: str


def extract_tags(text: str) -> TagMatch:
    """Collect every #tag (duplicates kept) and strip them all."""
    tags = TAG_PATTERN.findall(text)
    return TagMatch(tags=tags, remaining=TAG_PATTERN.sub("", text))


def resolve_project(token: str, projects: list[Project]) -> Project | None:
    """
    Fuzzy-match a typed project token against known projects.

    Case-insensitive substring match in either direction. The first project
    in list order wins, so "@work" picks whichever of "Work" and "Homework"
    comes first.
    """
    needle = token.lower()
    for project in projects:
        name = project.name.lower()
        if needle in name or name in needle:
            return project
    return None


def extract_project(text: str, projects: list[Project]) -> ProjectMatch:
    """Resolve the first @project token; every @token is stripped from the text."""
    match = PROJECT_PATTERN.search(text)
    if not match:
        return ProjectMatch(token=None, project=None, remaining=text)

    token = match.group(1)
    return ProjectMatch(
        token=token,
        project=resolve_project(token, projects),
        remaining=PROJECT_PATTERN.sub("", text),
    )
