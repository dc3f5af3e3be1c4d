from datetime import date

import pytest

from taskninja.config import Config
from taskninja.exceptions import TaskNotFoundError
from taskninja.planning import Date, Task, TaskList, parse_date


def positions(task_list):
    return [task.position for task in task_list]


def titles(tasks):
    return [task.title for task in tasks]


def test_add_appends_and_numbers():
    task_list = TaskList()

    task_list.add_task(Task.create("A"))
    task_list.add_task(Task.create("B"))

    assert titles(task_list) == ["A", "B"]
    assert positions(task_list) == [1, 2]


@pytest.mark.parametrize("priority", [1, 2, 4])
def test_add_with_priority_takes_that_rank(task_list, priority):
    task = task_list.add_task(Task.create("New"), priority)

    assert task_list.tasks[priority - 1] is task
    assert task.position == priority
    assert positions(task_list) == [1, 2, 3, 4]
    others = [t.title for t in task_list if t is not task]
    assert others == ["Write report", "Buy milk", "Call mom"]


def test_add_priority_is_clamped(task_list):
    task_list.add_task(Task.create("Last"), 99)
    task_list.add_task(Task.create("First"), 0)

    assert task_list.tasks[-1].title == "Last"
    assert task_list.tasks[0].title == "First"
    assert positions(task_list) == [1, 2, 3, 4, 5]


def test_new_task_builds_and_adds():
    task_list = TaskList()

    task = task_list.new_task("Dentist", due_date=parse_date("2022-03-04"), priority=1, flagged=True)

    assert task.position == 1
    assert task.flagged
    assert task.due_date == Date(2022, "March", 4)


def test_mark_complete_and_incomplete(task_list):
    assert task_list.mark_complete(0) == "'Write report' marked complete."
    assert task_list.tasks[0].complete

    assert task_list.mark_incomplete(0) == "'Write report' marked incomplete."
    assert not task_list.tasks[0].complete


def test_out_of_range_index_raises(task_list):
    with pytest.raises(TaskNotFoundError) as exc:
        task_list.mark_complete(3)
    assert exc.value.token == "4"

    with pytest.raises(TaskNotFoundError):
        task_list.remove_task(-1)

    with pytest.raises(TaskNotFoundError):
        task_list.edit_task(10, title="Nope")


def test_remove_renumbers(task_list):
    message = task_list.remove_task(0)

    assert message == "'Write report' removed."
    assert titles(task_list) == ["Buy milk", "Call mom"]
    assert positions(task_list) == [1, 2]


def test_edit_only_supplied_fields(task_list):
    message = task_list.edit_task(1, title="Buy oat milk")

    task = task_list.tasks[1]
    assert message == "'Buy oat milk' edited."
    assert task.description == "Two litres"
    assert task.flagged is True


def test_edit_with_priority_moves_task(task_list):
    task_list.edit_task(2, priority=1, flagged=True)

    assert titles(task_list) == ["Call mom", "Write report", "Buy milk"]
    assert positions(task_list) == [1, 2, 3]
    assert task_list.tasks[0].flagged


def test_positions_stay_dense(task_list):
    task_list.add_task(Task.create("X"), 2)
    task_list.remove_task(0)
    task_list.edit_task(0, priority=4)
    task_list.new_task("Y", priority=1)
    task_list.remove_task(2)

    assert positions(task_list) == list(range(1, len(task_list) + 1))


def test_aggregate_helpers(task_list):
    assert task_list.mark_all_complete() == 3
    assert all(t.complete for t in task_list)

    assert task_list.mark_all_incomplete() == 3
    assert not any(t.complete for t in task_list)

    assert task_list.clear() == 3
    assert len(task_list) == 0


def test_filters_intersect(task_list):
    task_list.mark_complete(1)

    assert titles(task_list.filter_tasks(["complete"])) == ["Buy milk", "Call mom"]
    assert titles(task_list.filter_tasks(["complete", "flagged"])) == ["Buy milk"]
    assert titles(task_list.filter_tasks(["flagged", "complete"])) == ["Buy milk"]
    assert titles(task_list.filter_tasks(["incomplete", "unflagged"])) == ["Write report"]
    assert task_list.filter_tasks(["complete", "incomplete"]) == []
    assert len(task_list.filter_tasks([])) == 3


def test_unknown_filter_raises(task_list):
    with pytest.raises(ValueError):
        task_list.filter_tasks(["overdue"])


def test_due_today_drops_missing_and_invalid_dates():
    today = date(2022, 9, 12)
    task_list = TaskList()
    task_list.new_task("Today", due_date=parse_date("2022-Sep-12"))
    task_list.new_task("Tomorrow", due_date=parse_date("2022-Sep-13"))
    task_list.new_task("Broken", due_date=parse_date("2022-Sep-31"))
    task_list.new_task("None")

    assert titles(task_list.filter_tasks(["due_today"], today=today)) == ["Today"]


def test_search_case_insensitive_unless_exact():
    task_list = TaskList()
    task_list.new_task("Blah blah blah.")
    task_list.new_task("Other", description="says BLAH")

    assert titles(task_list.search("BLAH")) == ["Blah blah blah.", "Other"]
    assert titles(task_list.search("BLAH", exact=True)) == ["Other"]
    assert task_list.search("nothing") == []


def test_render_joins_tasks(task_list):
    text = task_list.render(Config())

    blocks = text.plain.split("\n\n")
    assert len(blocks) == 3
    assert blocks[0].startswith("1: Write report")
    assert blocks[2].startswith("3: Call mom")


def test_serialization_preserves_order(task_list):
    restored = TaskList.from_dict(task_list.to_dict())

    assert titles(restored) == titles(task_list)
    assert positions(restored) == [1, 2, 3]
    assert restored.tasks[1].flagged
