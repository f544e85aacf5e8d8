"""Priority marker matching (!high, p1, !!!)."""

import re
from dataclasses import dataclass

from ..models.task import Priority

DEFAULT_PRIORITY_ALIASES: dict[str, Priority] = {
    "p1": Priority.URGENT,
    "p2": Priority.HIGH,
    "p3": Priority.MEDIUM,
    "p4": Priority.LOW,
}


class PriorityRule:
    """A priority marker; every occurrence is stripped when it wins."""

    def __init__(self, pattern: str, priority: Priority):
        self.pattern = re.compile(pattern, re.IGNORECASE)
        self.priority = priority

    def apply(self, text: str) -> str | None:
        """Return text with the marker replaced, or None if absent."""
        if not self.pattern.search(text):
            return None
        return self.pattern.sub(" ", text)


NAMED_RULES: list[PriorityRule] = [
    PriorityRule(rf"\s*!{priority.value}\b", priority)
    for priority in (Priority.URGENT, Priority.HIGH, Priority.MEDIUM, Priority.LOW)
]

# Single-add shorthands. Longest run first; the bare "!" is a catch-all and goes last.
TRIPLE_BANG = PriorityRule(r"\s*!!!\s*", Priority.URGENT)
DOUBLE_BANG = PriorityRule(r"\s*!!\s*", Priority.HIGH)
SINGLE_BANG = PriorityRule(r"\s*!\s*", Priority.HIGH)


def build_priority_rules(
    aliases: dict[str, Priority] | None = None,
    bang_shorthand: bool = False,
) -> list[PriorityRule]:
    """Assemble the ordered rule list for one parser mode."""
    rules: list[PriorityRule] = []
    if bang_shorthand:
        rules += [TRIPLE_BANG, DOUBLE_BANG]
    rules += NAMED_RULES
    for alias, priority in (aliases or {}).items():
        rules.append(PriorityRule(rf"\s*\b{re.escape(alias)}\b", priority))
    if bang_shorthand:
        rules.append(SINGLE_BANG)
    return rules


@dataclass
class PriorityMatch:
    """Result of scanning text for a priority marker."""

    priority: Priority
    matched: bool
    remaining: str


def match_priority(text: str, rules: list[PriorityRule]) -> PriorityMatch:
    """Apply the first rule that matches; medium when none does."""
    for rule in rules:
        remaining = rule.apply(text)
        if remaining is not None:
            return PriorityMatch(rule.priority, True, remaining)
    return PriorityMatch(Priority.MEDIUM, False, text)
