"""
Read-side views over a todo list.

Always recomputed from the list they are given; nothing stores them.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")


def _as_day(value) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def local_today() -> date:
    """Current calendar day in the viewer's local time zone"""
    return datetime.now().astimezone().date()


def due_today(todos: Iterable[T], today: Optional[date] = None) -> List[T]:
    """Todos whose due date falls on today's calendar day, completed or not"""
    today = today or local_today()
    return [t for t in todos if _as_day(t.due_date) == today]


def completed(todos: Iterable[T]) -> List[T]:
    return [t for t in todos if t.completed]


def pending(todos: Iterable[T]) -> List[T]:
    return [t for t in todos if not t.completed]


def summarize(todos: List[T], today: Optional[date] = None) -> dict:
    return {
        "total": len(todos),
        "today": len(due_today(todos, today)),
        "completed": len(completed(todos)),
        "pending": len(pending(todos)),
    }
