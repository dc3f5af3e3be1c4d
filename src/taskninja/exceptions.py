"""Custom exceptions for command handling and persistence."""

from dataclasses import dataclass


class CommandError(Exception):
    """Base class for errors that abort a single command."""


@dataclass
class InvalidMainOperationError(CommandError):
    """The first token does not name a known operation."""
    operation: str

    def __str__(self):
        return f"Invalid main operation. '{self.operation}' not found."


@dataclass
class InvalidHelpOperationError(CommandError):
    """Help was requested for an operation that does not exist."""
    operation: str

    def __str__(self):
        return f"Invalid help operation. '{self.operation}' not found."


@dataclass
class MissingRequiredArgumentError(CommandError):
    operation: str
    argument: str

    def __str__(self):
        return f"Missing required argument '{self.argument}' for operation '{self.operation}'."


@dataclass
class InvalidArgumentError(CommandError):
    operation: str
    argument: str

    def __str__(self):
        return f"Invalid argument '{self.argument}' for operation '{self.operation}'."


@dataclass
class TaskNotFoundError(CommandError):
    """
    No task exists at the requested position.

    The token is the user-facing (1-based) position.
    """
    token: str

    def __str__(self):
        return f"Task not found: {self.token}"


class StorageError(Exception):
    """Base class for persistence failures."""


@dataclass
class SaveError(StorageError):
    cause: str
    target: str = "tasks"

    def __str__(self):
        return f"Error saving {self.target}: {self.cause}"


@dataclass
class ReadError(StorageError):
    cause: str
    target: str = "tasks"

    def __str__(self):
        return f"Error reading {self.target}: {self.cause}"
