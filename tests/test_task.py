import pytest

from taskninja.config import ColorConfig, Config
from taskninja.planning import Date, DateTimeError, Task, Time, parse_date, parse_time


def test_task_creation():
    task = Task.create(title="Test task")

    assert task.title == "Test task"
    assert task.description is None
    assert task.due_date is DateTimeError.UNSPECIFIED_DATE
    assert task.due_time is DateTimeError.UNSPECIFIED_TIME
    assert not task.complete
    assert not task.flagged


def test_task_requires_title():
    with pytest.raises(ValueError):
        Task.create(title="  ")


def test_task_complete_and_incomplete():
    task = Task.create(title="Test task")

    task.mark_complete()
    assert task.complete is True

    task.mark_incomplete()
    assert task.complete is False


def test_task_edits_replace_single_fields():
    task = Task.create(title="Old", description="Keep me", flagged=True)

    task.edit_title("New")
    task.edit_due_date(parse_date("2022-13-01"))
    task.edit_due_time(Time(8, 15))

    assert task.title == "New"
    assert task.description == "Keep me"
    assert task.due_date is DateTimeError.INVALID_MONTH
    assert task.due_time == Time(8, 15)
    assert task.flagged is True


def test_style_precedence():
    colors = ColorConfig()
    task = Task.create(title="Plain")

    assert task.style(colors) == "red"

    task.set_flagged(True)
    assert task.style(colors) == "underline red"

    task.mark_complete()
    assert task.style(colors) == "cyan"


def test_render_full_task():
    task = Task.create(
        title="Get into Cornell.",
        due_date=Date.create(2022, "Sep", 12),
        due_time=Time(12, 6),
        flagged=True,
    )
    task.position = 1

    text = task.render(Config())

    assert text.plain == (
        "1: Get into Cornell.\n"
        "Description: Not specified.\n"
        "Due Date: September 12, 2022\n"
        "Due Time: 12:06 PM\n"
        "Complete: No"
    )
    assert text.style == "underline red"


def test_render_numeric_and_24_hour():
    task = Task.create(title="Dentist", due_date=Date.create(2022, 3, 4), due_time=Time(15, 0))

    text = task.render(Config(date_numerical=True, time_24_hour=True))

    assert "Due Date: 3 4, 2022" in text.plain
    assert "Due Time: 15:00" in text.plain
    # Detached tasks show the bare title.
    assert text.plain.startswith("Dentist\n")


def test_render_keeps_error_reason():
    task = Task.create(title="Broken", due_date=parse_date("2022-02-30"))

    lines = task.render(Config()).plain.splitlines()

    assert lines[2] == f"Due Date: Invalid ({DateTimeError.INVALID_DAY.message})."
    assert lines[3] == "Due Time: Not specified."


def test_task_serialization():
    task = Task.create(
        title="Serialize me",
        description="Details",
        due_date=Date.create(2022, "Sep", 12),
        due_time=parse_time("25:00"),
        complete=True,
        flagged=True,
    )
    data = task.to_dict()

    new_task = Task.from_dict(data)

    assert new_task.title == task.title
    assert new_task.description == task.description
    assert new_task.due_date == task.due_date
    assert new_task.due_time is DateTimeError.INVALID_HOUR
    assert new_task.complete and new_task.flagged


def test_from_dict_tolerates_bad_values():
    task = Task.from_dict({
        "title": "Odd",
        "due_date": {"year": 2022, "month": "Feb", "day": 31},
        "due_time": {"error": "no_such_kind"},
    })

    assert task.due_date is DateTimeError.INVALID_DAY
    assert task.due_time is DateTimeError.UNSPECIFIED_TIME
    assert task.complete is False
