from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Todo


class ITodoRepository(ABC):
    """Todo repository interface - application layer"""

    @abstractmethod
    async def get_for_owner(self, todo_id: UUID, owner_id: UUID) -> Optional[Todo]:
        """Get a todo only if it belongs to owner_id"""
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: UUID) -> List[Todo]:
        """All todos of an owner, newest first"""
        pass

    @abstractmethod
    async def create(self, todo: Todo) -> Todo:
        """Create a new todo"""
        pass

    @abstractmethod
    async def update(self, todo: Todo) -> Todo:
        """Update existing todo"""
        pass

    @abstractmethod
    async def delete(self, todo: Todo) -> None:
        """Delete a todo"""
        pass
