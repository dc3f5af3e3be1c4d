"""Task dataclass for the task list."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from rich.text import Text

from .dates import Date, DateTimeError, DueDate, DueTime, InvalidDateTime, Time

if TYPE_CHECKING:
    from ..config import ColorConfig, Config


@dataclass
class Task:
    """
    A single to-do item.

    Attributes:
        title: Short task description (required)
        description: Optional detailed description
        due_date: Date, or the reason there is none
        due_time: Time, or the reason there is none
        complete: Whether the task is done
        flagged: Whether the task is marked important
        position: 1-based rank in the owning list (0 when detached)
    """
    title: str
    description: Optional[str] = None
    due_date: DueDate = DateTimeError.UNSPECIFIED_DATE
    due_time: DueTime = DateTimeError.UNSPECIFIED_TIME
    complete: bool = False
    flagged: bool = False
    position: int = 0

    @classmethod
    def create(
        cls,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[DueDate] = None,
        due_time: Optional[DueTime] = None,
        complete: bool = False,
        flagged: bool = False,
    ) -> "Task":
        """Create a new task; absent date/time become the unspecified kinds."""
        if not title or not title.strip():
            raise ValueError("title is required")
        return cls(
            title=title,
            description=description,
            due_date=DateTimeError.UNSPECIFIED_DATE if due_date is None else due_date,
            due_time=DateTimeError.UNSPECIFIED_TIME if due_time is None else due_time,
            complete=complete,
            flagged=flagged,
        )

    def mark_complete(self) -> "Task":
        self.complete = True
        return self

    def mark_incomplete(self) -> "Task":
        self.complete = False
        return self

    def edit_title(self, title: str) -> "Task":
        self.title = title
        return self

    def edit_description(self, description: Optional[str]) -> "Task":
        self.description = description
        return self

    def edit_due_date(self, due_date: DueDate) -> "Task":
        self.due_date = due_date
        return self

    def edit_due_time(self, due_time: DueTime) -> "Task":
        self.due_time = due_time
        return self

    def set_flagged(self, flagged: bool) -> "Task":
        self.flagged = flagged
        return self

    def to_dict(self) -> dict:
        """Convert task to dictionary for serialization."""
        return {
            "title": self.title,
            "description": self.description,
            "due_date": _due_to_dict(self.due_date),
            "due_time": _due_to_dict(self.due_time),
            "complete": self.complete,
            "flagged": self.flagged,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """
        Create task from dictionary.

        Raises:
            KeyError: No title
            TypeError: Title or description is not text
        """
        title = data["title"]
        if not isinstance(title, str) or not title.strip():
            raise TypeError(f"task title must be non-empty text, got {title!r}")
        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise TypeError(f"task description must be text, got {description!r}")

        return cls(
            title=title,
            description=description,
            due_date=_due_from_dict(data.get("due_date"), Date, DateTimeError.UNSPECIFIED_DATE),
            due_time=_due_from_dict(data.get("due_time"), Time, DateTimeError.UNSPECIFIED_TIME),
            complete=bool(data.get("complete", False)),
            flagged=bool(data.get("flagged", False)),
        )

    def style(self, colors: "ColorConfig") -> str:
        """
        Pick the display style.

        Complete wins over flagged; flagged incomplete tasks combine the
        flag and incomplete styles.
        """
        if self.complete:
            return colors.complete
        if self.flagged:
            return f"{colors.flag} {colors.incomplete}"
        return colors.incomplete

    def render(self, config: "Config") -> Text:
        """Render the task as a styled multi-line block."""
        heading = f"{self.position}: {self.title}" if self.position else self.title
        lines = [
            heading,
            f"Description: {self.description or 'Not specified.'}",
            f"Due Date: {self._format_date(config.date_numerical)}",
            f"Due Time: {self._format_time(config.time_24_hour)}",
            f"Complete: {'Yes' if self.complete else 'No'}",
        ]
        return Text("\n".join(lines), style=self.style(config.colors))

    def _format_date(self, numerical: bool) -> str:
        if isinstance(self.due_date, Date):
            return self.due_date.as_numeric_string() if numerical else self.due_date.as_calendar_string()
        return _format_error(self.due_date)

    def _format_time(self, hour_24: bool) -> str:
        if isinstance(self.due_time, Time):
            return self.due_time.as_24_hour_string() if hour_24 else self.due_time.as_12_hour_string()
        return _format_error(self.due_time)

    def __repr__(self) -> str:
        return f"Task({self.position}, {self.title!r}, complete={self.complete}, flagged={self.flagged})"


def _format_error(error: DateTimeError) -> str:
    if error.is_unspecified:
        return "Not specified."
    return f"Invalid ({error.message})."


def _due_to_dict(value) -> dict:
    if isinstance(value, DateTimeError):
        return {"error": value.value}
    return value.to_dict()


def _due_from_dict(data: Optional[dict], value_type, unspecified: DateTimeError):
    if not data:
        return unspecified
    if "error" in data:
        try:
            return DateTimeError(data["error"])
        except ValueError:
            return unspecified
    try:
        return value_type.create(**data)
    except InvalidDateTime as e:
        return e.kind
    except TypeError:
        return unspecified
