"""CLI for trying quick-entry parsing locally."""

from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .models.task import ParsedDraft, Priority, Project
from .services.batch import BatchSession
from .services.quick_parser import SINGLE_ADD, parse_task_text, submission_blocker
from .services.task_creation import local_today

app = typer.Typer(help="Quick-entry task parser CLI")
console = Console()

PRIORITY_COLORS = {
    Priority.URGENT: "red",
    Priority.HIGH: "yellow",
    Priority.MEDIUM: "white",
    Priority.LOW: "green",
}


def _projects(specs: list[str] | None) -> list[Project]:
    """Build projects from "Name" or "id=Name" options."""
    projects = []
    for spec in specs or []:
        project_id, sep, name = spec.partition("=")
        if not sep:
            project_id, name = spec.lower(), spec
        projects.append(Project(id=project_id, name=name))
    return projects


def _today(value: str | None) -> date:
    if not value:
        return local_today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Invalid date: {value} (expected YYYY-MM-DD)[/red]")
        raise typer.Exit(1)


def _priority(draft: ParsedDraft) -> str:
    color = PRIORITY_COLORS[draft.priority]
    return f"[{color}]{draft.priority.value}[/{color}]"


def _project(draft: ParsedDraft) -> str:
    if not draft.project_ref:
        return "-"
    if draft.project_ref.id is None:
        return f"[red]{draft.project_ref.name} (unresolved)[/red]"
    return draft.project_ref.name or draft.project_ref.id


@app.command()
def parse(
    text: str = typer.Argument(..., help="Quick-add text"),
    project: list[str] = typer.Option(None, "--project", "-p", help="Known project, NAME or ID=NAME"),
    default_project: str = typer.Option(None, "--default-project", "-d", help="Default project id"),
    today: str = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
):
    """Parse one quick-add line and show the draft."""
    draft = parse_task_text(text, _projects(project), _today(today), SINGLE_ADD, default_project)

    console.print(f"\n[bold]{draft.title or '(no title)'}[/bold]")
    console.print(f"  Due date: {draft.due_date or '-'}")
    console.print(f"  Due time: {draft.due_time or '-'}")
    console.print(f"  Priority: {_priority(draft)}")
    console.print(f"  Tags: {', '.join(draft.tags) or '-'}")
    console.print(f"  Project: {_project(draft)}")
    if draft.is_important:
        console.print("  [yellow]* Important[/yellow]")

    blocker = submission_blocker(draft)
    if blocker:
        console.print(f"[red]{blocker}[/red]")
        raise typer.Exit(1)


@app.command()
def batch(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File with one task per line"),
    project: list[str] = typer.Option(None, "--project", "-p", help="Known project, NAME or ID=NAME"),
    default_project: str = typer.Option(None, "--default-project", "-d", help="Default project id"),
    today: str = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
):
    """Parse a multi-line file and show one row per draft."""
    session = BatchSession(_projects(project), default_project)
    drafts = session.parse(file.read_text(), _today(today))

    if not drafts:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(title=f"Parsed Tasks ({len(session.submittable_drafts)}/{len(drafts)} ready)")
    table.add_column("#", style="cyan")
    table.add_column("Title")
    table.add_column("Due")
    table.add_column("Priority")
    table.add_column("Tags")
    table.add_column("Project")
    table.add_column("Warning", style="yellow")

    for draft in drafts:
        due = " ".join(str(v) for v in (draft.due_date, draft.due_time) if v) or "-"
        table.add_row(
            draft.id,
            draft.title or "[dim](none)[/dim]",
            due,
            _priority(draft),
            " ".join(f"#{t}" for t in draft.tags),
            _project(draft),
            draft.warning_message or "",
        )

    console.print(table)


if __name__ == "__main__":
    app()
