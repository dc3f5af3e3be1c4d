"""Calendar date and time-of-day value types with fallible parsing."""

from dataclasses import dataclass
from datetime import date as _date
from enum import Enum
from typing import Optional, Union


class DateTimeError(Enum):
    """Reason a due date or due time is absent or unusable."""

    INVALID_YEAR = "invalid_year"
    INVALID_MONTH = "invalid_month"
    INVALID_DAY = "invalid_day"
    INVALID_HOUR = "invalid_hour"
    INVALID_MINUTE = "invalid_minute"
    UNSPECIFIED_DATE = "unspecified_date"
    UNSPECIFIED_TIME = "unspecified_time"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]

    @property
    def is_unspecified(self) -> bool:
        return self in (DateTimeError.UNSPECIFIED_DATE, DateTimeError.UNSPECIFIED_TIME)


_ERROR_MESSAGES = {
    DateTimeError.INVALID_YEAR: "year must be a non-negative integer",
    DateTimeError.INVALID_MONTH: "month not recognized",
    DateTimeError.INVALID_DAY: "day out of range for month",
    DateTimeError.INVALID_HOUR: "hour must be between 0 and 23",
    DateTimeError.INVALID_MINUTE: "minute must be between 0 and 59",
    DateTimeError.UNSPECIFIED_DATE: "date not specified",
    DateTimeError.UNSPECIFIED_TIME: "time not specified",
}


class InvalidDateTime(ValueError):
    """Raised by the value constructors; carries the error kind."""

    def __init__(self, kind: DateTimeError):
        super().__init__(kind.message)
        self.kind = kind


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# lowercase name, abbreviation or numeral -> canonical name
MONTH_LOOKUP: dict[str, str] = {}
for _num, _name in enumerate(MONTH_NAMES, start=1):
    MONTH_LOOKUP[_name.lower()] = _name
    MONTH_LOOKUP[_name[:3].lower()] = _name
    MONTH_LOOKUP[str(_num)] = _name
    MONTH_LOOKUP[f"{_num:02d}"] = _name

MONTH_NUMBERS: dict[str, int] = {name: num for num, name in enumerate(MONTH_NAMES, start=1)}

# No leap-year adjustment.
MONTH_DAY_LIMITS: dict[str, int] = {
    "January": 31,
    "February": 28,
    "March": 31,
    "April": 30,
    "May": 31,
    "June": 30,
    "July": 31,
    "August": 31,
    "September": 30,
    "October": 31,
    "November": 30,
    "December": 31,
}


def _to_int(text, kind: DateTimeError) -> int:
    try:
        value = int(text)
    except (TypeError, ValueError):
        raise InvalidDateTime(kind) from None
    if value < 0:
        raise InvalidDateTime(kind)
    return value


@dataclass(frozen=True)
class Date:
    """
    A calendar date.

    Attributes:
        year: Non-negative year
        month: Canonical month name
        day: Day within the month's fixed limit
    """
    year: int
    month: str
    day: int

    @classmethod
    def create(cls, year, month, day) -> "Date":
        """
        Validate and build a date.

        Args:
            year: Year as int or integer text
            month: Month name, abbreviation or numeral (case-insensitive)
            day: Day as int or integer text

        Raises:
            InvalidDateTime: With the kind of the first failing field
        """
        year = _to_int(year, DateTimeError.INVALID_YEAR)

        month_name = MONTH_LOOKUP.get(str(month).strip().lower())
        if month_name is None:
            raise InvalidDateTime(DateTimeError.INVALID_MONTH)

        day = _to_int(day, DateTimeError.INVALID_DAY)
        if not 1 <= day <= MONTH_DAY_LIMITS[month_name]:
            raise InvalidDateTime(DateTimeError.INVALID_DAY)

        return cls(year=year, month=month_name, day=day)

    @classmethod
    def parse(cls, text: str) -> "Date":
        """Parse ``YEAR-MONTH-DAY``; raises InvalidDateTime."""
        parts = text.split("-")
        if len(parts) != 3:
            raise InvalidDateTime(DateTimeError.UNSPECIFIED_DATE)
        return cls.create(*parts)

    @property
    def month_num(self) -> int:
        return MONTH_NUMBERS[self.month]

    def as_calendar_string(self) -> str:
        return f"{self.month} {self.day}, {self.year}"

    def as_numeric_string(self) -> str:
        return f"{self.month_num} {self.day}, {self.year}"

    def is_today(self, today: Optional[_date] = None) -> bool:
        today = today or _date.today()
        return (self.day, self.month_num, self.year) == (today.day, today.month, today.year)

    def to_dict(self) -> dict:
        return {"year": self.year, "month": self.month, "day": self.day}


@dataclass(frozen=True)
class Time:
    """A time of day, 24-hour clock."""
    hour: int
    minute: int

    @classmethod
    def create(cls, hour, minute) -> "Time":
        hour = _to_int(hour, DateTimeError.INVALID_HOUR)
        if hour > 23:
            raise InvalidDateTime(DateTimeError.INVALID_HOUR)
        minute = _to_int(minute, DateTimeError.INVALID_MINUTE)
        if minute > 59:
            raise InvalidDateTime(DateTimeError.INVALID_MINUTE)
        return cls(hour=hour, minute=minute)

    @classmethod
    def parse(cls, text: str) -> "Time":
        """Parse ``HH:MM``; raises InvalidDateTime."""
        parts = text.split(":")
        if len(parts) != 2:
            raise InvalidDateTime(DateTimeError.UNSPECIFIED_TIME)
        return cls.create(*parts)

    def as_24_hour_string(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def as_12_hour_string(self) -> str:
        # Hour 0 is not mapped to 12.
        hour = self.hour
        suffix = "AM"
        if hour >= 12:
            suffix = "PM"
        if hour > 12:
            hour -= 12
        return f"{hour}:{self.minute:02d} {suffix}"

    def to_dict(self) -> dict:
        return {"hour": self.hour, "minute": self.minute}


DueDate = Union[Date, DateTimeError]
DueTime = Union[Time, DateTimeError]


def parse_date(text: str) -> DueDate:
    """Parse a date, returning the error kind instead of raising."""
    try:
        return Date.parse(text)
    except InvalidDateTime as e:
        return e.kind


def parse_time(text: str) -> DueTime:
    """Parse a time, returning the error kind instead of raising."""
    try:
        return Time.parse(text)
    except InvalidDateTime as e:
        return e.kind
