"""Task list persistence as a JSON document."""

from pathlib import Path
from typing import Optional
import json
import logging

from ..config import config
from ..exceptions import ReadError, SaveError
from ..planning import TaskList

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Reads and writes the task list.

    The whole list is rewritten on every save.
    Storage path: ~/.taskninja/tasks.json (see Config.data_file)
    """

    def __init__(self, data_file: Optional[Path] = None):
        self.data_file = Path(data_file or config.data_file)

    def read(self) -> TaskList:
        """
        Read the task list from disk.

        Raises:
            ReadError: File missing, unreadable, or not a task list
        """
        try:
            with open(self.data_file, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ReadError(f"cannot open {self.data_file}: {e.strerror}") from e
        except json.JSONDecodeError as e:
            raise ReadError(f"invalid JSON in {self.data_file}: {e}") from e

        try:
            return TaskList.from_dict(data)
        except (AttributeError, KeyError, TypeError) as e:
            raise ReadError(f"malformed task list in {self.data_file}: {e!r}") from e

    def load(self) -> TaskList:
        """Read the task list, falling back to an empty one."""
        if not self.data_file.exists():
            logger.debug("No task file at %s, starting empty", self.data_file)
            return TaskList()

        try:
            task_list = self.read()
        except ReadError as e:
            logger.warning("%s; starting with an empty list", e)
            return TaskList()

        logger.debug("Loaded %d task(s) from %s", len(task_list), self.data_file)
        return task_list

    def save(self, task_list: TaskList):
        """
        Overwrite the task file with the given list.

        Raises:
            SaveError: Directory or file could not be written
        """
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.data_file, "w", encoding="utf-8") as f:
                json.dump(task_list.to_dict(), f, indent=4, ensure_ascii=False)
        except OSError as e:
            raise SaveError(f"cannot write {self.data_file}: {e.strerror}") from e

        logger.debug("Saved %d task(s) to %s", len(task_list), self.data_file)
