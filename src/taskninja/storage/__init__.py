"""Storage layer for the task list."""

from .tasks import TaskStore

__all__ = ["TaskStore"]
