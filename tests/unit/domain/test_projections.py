from datetime import date, datetime, timedelta
from uuid import uuid4

from src.domain.entities import TodoSnapshot
from src.domain.projections import completed, due_today, pending, summarize

TODAY = date(2024, 5, 17)


def make_todo(due_date=None, done=False, title="Task"):
    return TodoSnapshot(
        id=uuid4(),
        user_id=uuid4(),
        title=title,
        due_date=due_date,
        completed=done,
        created_at=datetime(2024, 5, 1, 9, 0),
    )


def test_due_today_matches_calendar_day_only():
    todos = [
        make_todo(TODAY),
        make_todo(TODAY - timedelta(days=1)),
        make_todo(TODAY + timedelta(days=1)),
        make_todo(None),
    ]

    assert due_today(todos, TODAY) == [todos[0]]


def test_due_today_ignores_completion():
    todo = make_todo(TODAY, done=True)
    assert due_today([todo], TODAY) == [todo]


def test_completed_and_pending_partition_the_list():
    todos = [make_todo(done=True), make_todo(), make_todo(done=True)]

    assert completed(todos) == [todos[0], todos[2]]
    assert pending(todos) == [todos[1]]


def test_summarize():
    todos = [make_todo(TODAY), make_todo(TODAY, done=True), make_todo()]

    assert summarize(todos, TODAY) == {"total": 3, "today": 2, "completed": 1, "pending": 2}
