"""Task model and task list."""

from .dates import (
    Date,
    DateTimeError,
    DueDate,
    DueTime,
    InvalidDateTime,
    Time,
    parse_date,
    parse_time,
)
from .task import Task
from .task_list import TaskList

__all__ = [
    "Date",
    "DateTimeError",
    "DueDate",
    "DueTime",
    "InvalidDateTime",
    "Time",
    "parse_date",
    "parse_time",
    "Task",
    "TaskList",
]
