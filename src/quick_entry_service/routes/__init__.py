"""API route modules."""

from . import batch, health, tasks

__all__ = ["health", "tasks", "batch"]
