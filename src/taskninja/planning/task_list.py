"""Ordered task list: numbering, mutation, filtering and search."""

from datetime import date
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional
import logging

from rich.text import Text

from .dates import Date, DueDate, DueTime
from .task import Task
from ..exceptions import TaskNotFoundError

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)


def _due_today(task: Task, today: Optional[date]) -> bool:
    # Tasks without a valid due date are never due today.
    return isinstance(task.due_date, Date) and task.due_date.is_today(today)


FILTERS: dict[str, Callable[[Task, Optional[date]], bool]] = {
    "complete": lambda task, today: task.complete,
    "incomplete": lambda task, today: not task.complete,
    "flagged": lambda task, today: task.flagged,
    "unflagged": lambda task, today: not task.flagged,
    "due_today": _due_today,
}


class TaskList:
    """
    Ordered collection of tasks.

    Positions are derived state: after every structural change the tasks
    are renumbered 1..N to match list order. Operations that take an
    ``index`` expect the 0-based index into the current order.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self.tasks: list[Task] = list(tasks or [])
        self.renumber()

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def renumber(self):
        """Reassign positions to match the current order."""
        for position, task in enumerate(self.tasks, start=1):
            task.position = position

    def _get(self, index: int) -> Task:
        if not 0 <= index < len(self.tasks):
            raise TaskNotFoundError(str(index + 1))
        return self.tasks[index]

    # ==================== Mutation ====================

    def add_task(self, task: Task, priority: Optional[int] = None) -> Task:
        """
        Add a task.

        Args:
            task: Task to add
            priority: 1-based rank to insert at; clamped to 1..N+1.
                Appends when omitted.

        Returns:
            The added task, with its position assigned
        """
        if priority is None:
            task.position = len(self.tasks) + 1
            self.tasks.append(task)
        else:
            index = max(0, min(priority - 1, len(self.tasks)))
            task.position = index + 1
            self.tasks.insert(index, task)
            # Stable sort keeps the new task ahead of the one it displaced.
            self.tasks.sort(key=lambda t: t.position)
            self.renumber()

        logger.debug("Task added at %s: %s", task.position, task.title)
        return task

    def new_task(
        self,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[DueDate] = None,
        due_time: Optional[DueTime] = None,
        priority: Optional[int] = None,
        complete: bool = False,
        flagged: bool = False,
    ) -> Task:
        """Create a task and add it to the list."""
        task = self.add_task(
            Task.create(
                title=title,
                description=description,
                due_date=due_date,
                due_time=due_time,
                complete=complete,
                flagged=flagged,
            ),
            priority,
        )
        self.renumber()
        return task

    def mark_complete(self, index: int) -> str:
        task = self._get(index).mark_complete()
        return f"'{task.title}' marked complete."

    def mark_incomplete(self, index: int) -> str:
        task = self._get(index).mark_incomplete()
        return f"'{task.title}' marked incomplete."

    def mark_all_complete(self) -> int:
        for task in self.tasks:
            task.mark_complete()
        return len(self.tasks)

    def mark_all_incomplete(self) -> int:
        for task in self.tasks:
            task.mark_incomplete()
        return len(self.tasks)

    def edit_task(
        self,
        index: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        due_date: Optional[DueDate] = None,
        due_time: Optional[DueTime] = None,
        flagged: Optional[bool] = None,
        priority: Optional[int] = None,
    ) -> str:
        """
        Apply the supplied fields to a task; others are left untouched.

        A new priority moves the task to that rank.
        """
        task = self._get(index)

        if title is not None:
            task.edit_title(title)
        if description is not None:
            task.edit_description(description)
        if due_date is not None:
            task.edit_due_date(due_date)
        if due_time is not None:
            task.edit_due_time(due_time)
        if flagged is not None:
            task.set_flagged(flagged)
        if priority is not None:
            self.tasks.pop(index)
            self.renumber()
            self.add_task(task, priority)

        self.renumber()
        logger.debug("Task %s edited: %s", task.position, task.title)
        return f"'{task.title}' edited."

    def remove_task(self, index: int) -> str:
        task = self._get(index)
        self.tasks.pop(index)
        self.renumber()
        logger.debug("Task removed: %s", task.title)
        return f"'{task.title}' removed."

    def clear(self) -> int:
        """Remove every task; returns how many were removed."""
        count = len(self.tasks)
        self.tasks.clear()
        return count

    # ==================== Queries ====================

    def filter_tasks(self, filters: Iterable[str], today: Optional[date] = None) -> list[Task]:
        """
        Apply named filters in order, each narrowing the previous result.

        Raises:
            ValueError: Unknown filter name
        """
        result = list(self.tasks)
        for name in filters:
            predicate = FILTERS.get(name)
            if predicate is None:
                raise ValueError(f"Unknown filter: {name}")
            result = [task for task in result if predicate(task, today)]
        return result

    def search(self, query: str, exact: bool = False) -> list[Task]:
        """
        Find tasks whose title or description contains the query.

        Case-insensitive unless ``exact`` is set.
        """
        if not exact:
            query = query.lower()

        matches = []
        for task in self.tasks:
            fields = [task.title, task.description or ""]
            if not exact:
                fields = [f.lower() for f in fields]
            if any(query in f for f in fields):
                matches.append(task)
        return matches

    def render(self, config: "Config", tasks: Optional[Iterable[Task]] = None) -> Text:
        """Render tasks (all by default) separated by blank lines."""
        tasks = self.tasks if tasks is None else tasks
        return Text("\n\n").join(task.render(config) for task in tasks)

    # ==================== Serialization ====================

    def to_dict(self) -> dict:
        return {"tasks": [task.to_dict() for task in self.tasks]}

    @classmethod
    def from_dict(cls, data: dict) -> "TaskList":
        return cls(Task.from_dict(item) for item in data.get("tasks", []))
