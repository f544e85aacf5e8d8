"""Due-date phrase matching for quick-entry text."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# "by Friday", "on 3/15", "due tomorrow": the connector goes with the phrase
_CONNECTOR = r"(?:\b(?:by|on|due)\s+)?"

LITERAL_DATE_PATTERN = re.compile(
    _CONNECTOR + r"(?<![\d-])\b(\d{1,2})[/-](\d{1,2})(?:[/-](\d{4}|\d{2}))?\b",
    re.IGNORECASE,
)


@dataclass
class DateMatch:
    """Result of scanning text for a due date."""

    due_date: date | None
    span: tuple[int, int] | None
    remaining: str


class DateRule:
    """A keyword date phrase and how to turn it into a calendar date."""

    def __init__(self, name: str, pattern: str, resolve: Callable[[date, re.Match], date | None]):
        self.name = name
        self.pattern = re.compile(_CONNECTOR + pattern, re.IGNORECASE)
        self.resolve = resolve

    def search(self, text: str) -> re.Match | None:
        return self.pattern.search(text)


def next_weekday(today: date, weekday: int) -> date:
    """Next occurrence of weekday strictly after today."""
    delta = (weekday - today.weekday()) % 7
    return today + timedelta(days=delta or 7)


def start_of_next_week(today: date) -> date:
    """Monday of the week after today's week."""
    return today - timedelta(days=today.weekday()) + timedelta(weeks=1)


def _offset(today: date, count: str, unit_days: int) -> date | None:
    """today plus count units; None when count has too many digits to read."""
    try:
        return today + timedelta(days=int(count) * unit_days)
    except ValueError:
        return None


def _weekday_rule(prefix: str, index: int, name: str) -> DateRule:
    return DateRule(
        name=f"{prefix}{name}",
        pattern=rf"\b{prefix}{name}\b",
        resolve=lambda today, _m: next_weekday(today, index),
    )


# --- Keyword rules ---
# First rule in list order wins, not the leftmost phrase in the text.
# "next week" and "next <weekday>" must come before the bare weekdays.

DATE_RULES: list[DateRule] = [
    DateRule("today", r"\btoday\b", lambda today, _m: today),
    DateRule("tomorrow", r"\btomorrow\b", lambda today, _m: today + timedelta(days=1)),
    DateRule("next_week", r"\bnext week\b", lambda today, _m: start_of_next_week(today)),
    *[_weekday_rule("next ", i, day) for i, day in enumerate(WEEKDAYS)],
    *[_weekday_rule("", i, day) for i, day in enumerate(WEEKDAYS)],
    DateRule("in_days", r"\bin (\d+) days?\b", lambda today, m: _offset(today, m.group(1), 1)),
    DateRule("in_weeks", r"\bin (\d+) weeks?\b", lambda today, m: _offset(today, m.group(1), 7)),
]


def _literal_date(match: re.Match, today: date) -> date | None:
    """Build a date from MM/DD[/YY[YY]] groups, or None if not a real day."""
    month, day = int(match.group(1)), int(match.group(2))
    year = int(match.group(3)) if match.group(3) else today.year
    if year < 100:
        year += 2000
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _cut(text: str, span: tuple[int, int]) -> str:
    start, end = span
    return text[:start] + text[end:]


def match_due_date(text: str, today: date) -> DateMatch:
    """
    Find the due date in text and remove the phrase that expressed it.

    A literal MM/DD date takes precedence over keyword phrases. An impossible
    calendar date (e.g. 4/31) is ignored and keyword matching runs on the
    untouched text. The same goes for an offset too large to land on a
    date. Digits glued to a leading year or dash (as in 2024-01-05) are not
    read as a month.

    Args:
        text: Working text of the entry
        today: Reference date for relative phrases

    Returns:
        DateMatch with the date (or None) and the text without the phrase
    """
    literal = LITERAL_DATE_PATTERN.search(text)
    if literal:
        due = _literal_date(literal, today)
        if due is not None:
            return DateMatch(due, literal.span(), _cut(text, literal.span()))

    for rule in DATE_RULES:
        match = rule.search(text)
        if not match:
            continue
        try:
            due = rule.resolve(today, match)
        except OverflowError:
            due = None
        if due is not None:
            return DateMatch(due, match.span(), _cut(text, match.span()))

    return DateMatch(None, None, text)
