"""
Load Context Use Case

Loads the signed-in user's profile and todos for the members area.
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin.dtos import ProfileInfo
from src.domain.entities import TodoSnapshot


class DashboardContext(BaseModel):
    profile: ProfileInfo
    todos: List[TodoSnapshot]


class LoadContextUseCase:
    """
    Use case for loading the members-area context.

    Business Rules:
    - Profile must exist
    - Blocked profiles get no data even if a request slips past the gate
    - Todos are the caller's own, newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[DashboardContext]:
        async with self.uow:
            profile = await self.uow.profiles.get_by_id(user_id)
            if profile is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if profile.is_blocked:
                return Return.err(Error("USER_BLOCKED", "User account is blocked"))

            todos = await self.uow.todos.list_by_owner(user_id)

            return Return.ok(
                DashboardContext(
                    profile=ProfileInfo.from_profile(profile),
                    todos=[TodoSnapshot.model_validate(t) for t in todos],
                )
            )
