"""Command interpreter: turns a token list into one task list operation."""

from dataclasses import dataclass, fields as dataclass_fields
from enum import Enum
from typing import Callable, Optional, Sequence, Union
import logging

from rich.text import Text

from .help import MAIN_HELP, OPERATION_HELP, HelpText
from ..config import Config, config as default_config
from ..exceptions import (
    InvalidArgumentError,
    InvalidHelpOperationError,
    InvalidMainOperationError,
    MissingRequiredArgumentError,
    SaveError,
    TaskNotFoundError,
)
from ..planning import DueDate, DueTime, Task, TaskList, parse_date, parse_time
from ..storage import TaskStore

logger = logging.getLogger(__name__)

Response = Union[str, HelpText, Text]

HELP_FLAGS = {"help", "-h", "--help"}
ALL_TARGETS = {"all", "-a", "--all"}
EXACT_FLAGS = {"-e", "--exact"}
FLAG_ON = {"flag", "-f", "--flag"}
FLAG_OFF = {"unflag", "-u", "--unflag"}

LIST_FILTERS = {
    "complete": "complete",
    "-c": "complete",
    "--complete": "complete",
    "incomplete": "incomplete",
    "-i": "incomplete",
    "--incomplete": "incomplete",
    "flagged": "flagged",
    "-f": "flagged",
    "--flagged": "flagged",
    "unflagged": "unflagged",
    "-u": "unflagged",
    "--unflagged": "unflagged",
    "due_today": "due_today",
    "today": "due_today",
    "-t": "due_today",
    "--today": "due_today",
}


class Expecting(Enum):
    """Scanner state: which field the next token is the value for."""

    TITLE = "title"
    DESCRIPTION = "description"
    DATE = "date"
    TIME = "time"
    PRIORITY = "priority"


VALUE_FLAGS = {
    "-t": Expecting.TITLE,
    "--title": Expecting.TITLE,
    "-d": Expecting.DESCRIPTION,
    "--description": Expecting.DESCRIPTION,
    "due": Expecting.DATE,
    "-D": Expecting.DATE,
    "--date": Expecting.DATE,
    "at": Expecting.TIME,
    "-T": Expecting.TIME,
    "--time": Expecting.TIME,
    "-p": Expecting.PRIORITY,
    "--priority": Expecting.PRIORITY,
}


@dataclass
class TaskFields:
    """Field values collected from the command line; None means not given."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[DueDate] = None
    due_time: Optional[DueTime] = None
    flagged: Optional[bool] = None
    priority: Optional[int] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in dataclass_fields(self))

    def as_kwargs(self) -> dict:
        return {f.name: getattr(self, f.name) for f in dataclass_fields(self)}


@dataclass(frozen=True)
class Operation:
    name: str
    alias: str
    handler: Callable[[list[str]], Response]
    mutating: bool = False


class CommandInterpreter:
    """
    Executes one command against a task list.

    Mutating operations persist the list afterwards whether or not the
    operation itself succeeded. A failed save is logged and does not
    replace the operation's result.
    """

    def __init__(
        self,
        task_list: TaskList,
        store: Optional[TaskStore] = None,
        config: Optional[Config] = None,
    ):
        self.task_list = task_list
        self.store = store
        self.config = config or default_config

        self._operations: dict[str, Operation] = {}
        for operation in (
            Operation("help", "h", self._help),
            Operation("add", "a", self._add, mutating=True),
            Operation("delete", "d", self._delete, mutating=True),
            Operation("complete", "c", self._complete, mutating=True),
            Operation("incomplete", "i", self._incomplete, mutating=True),
            Operation("list", "l", self._list),
            Operation("search", "s", self._search),
            Operation("edit", "e", self._edit, mutating=True),
        ):
            self._operations[operation.name] = operation
            self._operations[operation.alias] = operation

    def execute(self, tokens: Sequence[str]) -> Response:
        """
        Run the command described by ``tokens``.

        Returns:
            A message or a rendered listing

        Raises:
            CommandError: The command could not be carried out
        """
        tokens = list(tokens)
        if not tokens:
            return MAIN_HELP

        operation = self._operations.get(tokens[0])
        if operation is None:
            raise InvalidMainOperationError(tokens[0])

        args = tokens[1:]
        if args and args[0] in HELP_FLAGS:
            return OPERATION_HELP[operation.name]

        logger.debug("Dispatching %s with %s", operation.name, args)
        if not operation.mutating:
            return operation.handler(args)

        try:
            return operation.handler(args)
        finally:
            self._persist()

    def _persist(self):
        if self.store is None:
            return
        try:
            self.store.save(self.task_list)
        except SaveError as e:
            logger.warning("%s", e)

    # ==================== Argument scanning ====================

    def _scan_fields(
        self,
        operation: str,
        args: Sequence[str],
        positional_title: bool = False,
        allow_unflag: bool = False,
    ) -> TaskFields:
        """
        Consume flag/value pairs left to right.

        A bare token is accepted as the title only in the first position
        and only when ``positional_title`` is set.
        """
        fields = TaskFields()
        expecting: Optional[Expecting] = None

        for position, token in enumerate(args):
            if expecting is not None:
                self._assign(operation, fields, expecting, token)
                expecting = None
            elif token in VALUE_FLAGS:
                expecting = VALUE_FLAGS[token]
            elif token in FLAG_ON:
                fields.flagged = True
            elif allow_unflag and token in FLAG_OFF:
                fields.flagged = False
            elif positional_title and position == 0 and fields.title is None:
                fields.title = token
            else:
                raise InvalidArgumentError(operation, token)

        if expecting is not None:
            raise MissingRequiredArgumentError(operation, expecting.value)
        return fields

    @staticmethod
    def _assign(operation: str, fields: TaskFields, expecting: Expecting, value: str):
        if expecting is Expecting.TITLE:
            fields.title = value
        elif expecting is Expecting.DESCRIPTION:
            fields.description = value
        elif expecting is Expecting.DATE:
            # Unparsable dates and times are kept as error-carrying values.
            fields.due_date = parse_date(value)
        elif expecting is Expecting.TIME:
            fields.due_time = parse_time(value)
        elif expecting is Expecting.PRIORITY:
            try:
                priority = int(value)
            except ValueError:
                raise InvalidArgumentError(operation, "priority") from None
            if priority < 0:
                raise InvalidArgumentError(operation, "priority")
            fields.priority = priority

    def _target(self, operation: str, args: Sequence[str], allow_all: bool = True) -> Optional[int]:
        """
        Resolve the task argument of delete/complete/incomplete/edit.

        Returns:
            0-based index, or None when every task is targeted
        """
        if not args:
            raise MissingRequiredArgumentError(operation, "task")
        if len(args) > 1:
            raise InvalidArgumentError(operation, args[1])

        token = args[0]
        if allow_all and token in ALL_TARGETS:
            return None
        try:
            position = int(token)
        except ValueError:
            raise InvalidArgumentError(operation, token) from None
        if not 1 <= position <= len(self.task_list):
            raise TaskNotFoundError(token)
        return position - 1

    def _render(self, tasks: list[Task], empty_message: str) -> Response:
        if not tasks:
            return Text(empty_message)
        return self.task_list.render(self.config, tasks)

    # ==================== Operations ====================

    def _help(self, args: list[str]) -> Response:
        if not args:
            return MAIN_HELP
        if len(args) > 1:
            raise InvalidArgumentError("help", args[1])

        operation = self._operations.get(args[0])
        if operation is None:
            raise InvalidHelpOperationError(args[0])
        return OPERATION_HELP[operation.name]

    def _add(self, args: list[str]) -> Response:
        fields = self._scan_fields("add", args, positional_title=True)
        if not fields.title or not fields.title.strip():
            raise MissingRequiredArgumentError("add", "title")

        task = self.task_list.new_task(
            title=fields.title,
            description=fields.description,
            due_date=fields.due_date,
            due_time=fields.due_time,
            priority=fields.priority,
            flagged=bool(fields.flagged),
        )
        return f"'{task.title}' added."

    def _delete(self, args: list[str]) -> Response:
        index = self._target("delete", args)
        if index is None:
            self.task_list.clear()
            return "All tasks removed."
        return self.task_list.remove_task(index)

    def _complete(self, args: list[str]) -> Response:
        index = self._target("complete", args)
        if index is None:
            self.task_list.mark_all_complete()
            return "All tasks marked complete."
        return self.task_list.mark_complete(index)

    def _incomplete(self, args: list[str]) -> Response:
        index = self._target("incomplete", args)
        if index is None:
            self.task_list.mark_all_incomplete()
            return "All tasks marked incomplete."
        return self.task_list.mark_incomplete(index)

    def _list(self, args: list[str]) -> Response:
        filters = []
        for token in args:
            if token in ALL_TARGETS:
                return self._render(self.task_list.tasks, "No tasks found.")
            name = LIST_FILTERS.get(token)
            if name is None:
                raise InvalidArgumentError("list", token)
            filters.append(name)

        return self._render(self.task_list.filter_tasks(filters), "No tasks found.")

    def _search(self, args: list[str]) -> Response:
        exact = False
        words = []
        for token in args:
            if token in EXACT_FLAGS:
                exact = True
            else:
                words.append(token)

        if not words:
            raise MissingRequiredArgumentError("search", "query")

        query = " ".join(words)
        matches = self.task_list.search(query, exact=exact)
        return self._render(matches, f"No tasks match '{query}'.")

    def _edit(self, args: list[str]) -> Response:
        index = self._target("edit", args[:1], allow_all=False)
        fields = self._scan_fields("edit", args[1:], allow_unflag=True)
        if fields.is_empty():
            raise MissingRequiredArgumentError("edit", "field")
        if fields.title is not None and not fields.title.strip():
            raise InvalidArgumentError("edit", "title")

        return self.task_list.edit_task(index, **fields.as_kwargs())
