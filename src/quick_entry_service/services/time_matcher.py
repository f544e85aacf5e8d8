"""Due-time phrase matching ("at 3pm", "at 14:30")."""

import re
from dataclasses import dataclass

TIME_12H_PATTERN = re.compile(r"\bat (1[0-2]|0?[1-9])(?::([0-5]\d))?\s*(am|pm)\b", re.IGNORECASE)
TIME_24H_PATTERN = re.compile(r"\bat ([01]?\d|2[0-3]):([0-5]\d)\b", re.IGNORECASE)


@dataclass
class TimeMatch:
    """Result of scanning text for a due time."""

    due_time: str | None
    remaining: str


def to_24_hour(hours: int, minutes: int, meridiem: str) -> str:
    """Convert a 12-hour clock reading to HH:MM."""
    is_pm = meridiem.lower() == "pm"
    if is_pm and hours != 12:
        hours += 12
    if not is_pm and hours == 12:
        hours = 0
    return f"{hours:02d}:{minutes:02d}"


def match_due_time(text: str) -> TimeMatch:
    """Find an "at ..." time, trying the 12-hour form before the 24-hour one."""
    match = TIME_12H_PATTERN.search(text)
    if match:
        minutes = int(match.group(2)) if match.group(2) else 0
        due_time = to_24_hour(int(match.group(1)), minutes, match.group(3))
    else:
        match = TIME_24H_PATTERN.search(text)
        if not match:
            return TimeMatch(None, text)
        due_time = f"{int(match.group(1)):02d}:{int(match.group(2)):02d}"

    start, end = match.span()
    return TimeMatch(due_time, text[:start] + text[end:])
