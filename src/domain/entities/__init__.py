"""
Domain Entities

Table models and value objects, one per file.
"""

from .enums import ChangeKind, DispositionKind, RosterAction

from .identity import Identity
from .session import Session
from .profile import Profile
from .todo import Todo
from .change_event import ChangeEvent, RemovedTodo, TodoSnapshot
from .disposition import Disposition

__all__ = [
    # Enums
    "ChangeKind",
    "DispositionKind",
    "RosterAction",
    # Entities
    "Identity",
    "Session",
    "Profile",
    "Todo",
    # Value objects
    "ChangeEvent",
    "RemovedTodo",
    "TodoSnapshot",
    "Disposition",
]
