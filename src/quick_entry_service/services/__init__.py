"""Business logic services."""

from .batch import BatchSession, BatchSessionStore, sessions
from .quick_parser import BATCH, SINGLE_ADD, ParserConfig, parse_task_line, parse_task_text
from .task_api import TaskApiClient, TaskApiError, get_task_api
from .task_creation import capture_task, create_task

__all__ = [
    "parse_task_text",
    "parse_task_line",
    "ParserConfig",
    "SINGLE_ADD",
    "BATCH",
    "BatchSession",
    "BatchSessionStore",
    "sessions",
    "TaskApiClient",
    "TaskApiError",
    "get_task_api",
    "create_task",
    "capture_task",
]
