from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ProfileInfo, RosterResponse
from .guards import load_acting_admin


class ListProfilesUseCase:
    """All accounts, newest first. Admins only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID) -> Result[RosterResponse]:
        async with self.uow:
            actor = await load_acting_admin(self.uow, actor_id)
            if actor.is_err():
                return actor

            profiles = await self.uow.profiles.list_all()
            return Return.ok(
                RosterResponse(users=[ProfileInfo.from_profile(p) for p in profiles])
            )
