from abc import ABC, abstractmethod

from src.app.repositories.identity_repository import IIdentityRepository
from src.app.repositories.profile_repository import IProfileRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.todo_repository import ITodoRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    identities: IIdentityRepository
    sessions: ISessionRepository
    profiles: IProfileRepository
    todos: ITodoRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
