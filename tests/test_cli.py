"""Tests for the command-line interface."""

from pathlib import Path

from typer.testing import CliRunner

from src.quick_entry_service.cli import app

runner = CliRunner()


def test_parse_command() -> None:
    result = runner.invoke(
        app,
        [
            "parse",
            "Call mom at 3pm !high",
            "--project",
            "p-personal=Personal",
            "--today",
            "2024-01-01",
        ],
    )

    assert result.exit_code == 0
    assert "Call mom" in result.output
    assert "15:00" in result.output
    assert "high" in result.output
    assert "Personal" in result.output


def test_parse_command_without_project_fails() -> None:
    """Test that a draft that cannot be created exits non-zero."""
    result = runner.invoke(app, ["parse", "Call mom @xyz", "--today", "2024-01-01"])

    assert result.exit_code == 1
    assert "Please select a project" in result.output


def test_parse_command_rejects_bad_date() -> None:
    result = runner.invoke(app, ["parse", "Call mom", "--today", "01/01/2024"])
    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_batch_command(tmp_path: Path) -> None:
    tasks_file = tmp_path / "tasks.txt"
    tasks_file.write_text("Buy milk #home @work\n\nPay rent p1\n")

    result = runner.invoke(app, ["batch", str(tasks_file), "--project", "Work", "--today", "2024-01-01"])

    assert result.exit_code == 0
    assert "1/2 ready" in result.output
    assert "Buy milk" in result.output
    assert "Pay rent" in result.output


def test_batch_command_empty_file(tmp_path: Path) -> None:
    tasks_file = tmp_path / "tasks.txt"
    tasks_file.write_text("\n\n")

    result = runner.invoke(app, ["batch", str(tasks_file)])

    assert result.exit_code == 0
    assert "No tasks found" in result.output
