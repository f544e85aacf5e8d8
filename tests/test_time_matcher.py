"""Tests for due-time phrase matching."""

import pytest

from src.quick_entry_service.services.time_matcher import match_due_time, to_24_hour


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Call mom at 3pm", "15:00"),
        ("Call mom at 3 PM", "15:00"),
        ("Lunch at 12pm", "12:00"),
        ("Backup at 12am", "00:00"),
        ("Run at 9:30am", "09:30"),
        ("Standup at 09:15", "09:15"),
        ("Deploy at 14:30", "14:30"),
    ],
)
def test_time_phrases(text: str, expected: str) -> None:
    """Test 12-hour and 24-hour forms normalize to HH:MM."""
    result = match_due_time(text)
    assert result.due_time == expected
    assert " at " not in result.remaining


def test_twelve_hour_form_tried_first() -> None:
    """Test that a 12-hour time wins over a 24-hour one in the same text."""
    result = match_due_time("Sync at 14:00 or at 3:05pm")
    assert result.due_time == "15:05"
    assert "at 14:00" in result.remaining


@pytest.mark.parametrize("text", ["Meet at 13pm", "Meet at 25:00", "Meet at 10:75", "Meet at noon"])
def test_out_of_range_times_do_not_match(text: str) -> None:
    """Test that impossible clock readings are left in the text."""
    result = match_due_time(text)
    assert result.due_time is None
    assert result.remaining == text


def test_to_24_hour() -> None:
    """Test the meridiem conversion edge cases."""
    assert to_24_hour(12, 0, "am") == "00:00"
    assert to_24_hour(12, 30, "pm") == "12:30"
    assert to_24_hour(11, 59, "PM") == "23:59"
    assert to_24_hour(1, 5, "am") == "01:05"
