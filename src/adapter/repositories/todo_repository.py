from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.todo_repository import ITodoRepository
from src.domain.entities import Todo


class TodoRepository(ITodoRepository):
    """Todo repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_owner(self, todo_id: UUID, owner_id: UUID) -> Optional[Todo]:
        """Get a todo scoped to its owner"""
        stmt = select(Todo).where(Todo.id == todo_id, Todo.user_id == owner_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_owner(self, owner_id: UUID) -> List[Todo]:
        """All todos of an owner, newest first"""
        stmt = (
            select(Todo)
            .where(Todo.user_id == owner_id)
            .order_by(Todo.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, todo: Todo) -> Todo:
        """Create a new todo"""
        self.session.add(todo)
        await self.session.flush()
        await self.session.refresh(todo)
        return todo

    async def update(self, todo: Todo) -> Todo:
        """Update existing todo"""
        self.session.add(todo)
        await self.session.flush()
        await self.session.refresh(todo)
        return todo

    async def delete(self, todo: Todo) -> None:
        """Delete a todo"""
        await self.session.delete(todo)
        await self.session.flush()
