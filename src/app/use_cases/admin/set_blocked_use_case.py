"""
Use Case: Block / Unblock User

A blocked user keeps their session until the next protected navigation,
where the access gate revokes it and redirects with the block marker.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RosterAction
from src.domain.policies import check_roster_action
from .dtos import ProfileInfo, RosterActionResponse
from .guards import load_acting_admin

logger = logging.getLogger(__name__)


class SetBlockedUseCase:
    """
    Business Rules:
    - Caller must be an admin who is not blocked
    - Cannot target yourself
    - With peer protection, other admins cannot be blocked (unblocking is allowed)
    - Idempotent: blocking a blocked user succeeds
    """

    def __init__(self, uow: UnitOfWork, peer_protection: bool = True):
        self.uow = uow
        self.peer_protection = peer_protection

    async def execute(
        self, actor_id: UUID, target_id: UUID, blocked: bool
    ) -> Result[RosterActionResponse]:
        action = RosterAction.block if blocked else RosterAction.unblock

        async with self.uow:
            actor = await load_acting_admin(self.uow, actor_id)
            if actor.is_err():
                return actor

            target = await self.uow.profiles.get_by_id(target_id)
            error = check_roster_action(actor_id, target, action, self.peer_protection)
            if error:
                return Return.err(error)

            target.is_blocked = blocked
            target = await self.uow.profiles.update(target)
            await self.uow.commit()

            logger.info(f"Admin {actor_id} {action.value}ed user {target_id}")

            return Return.ok(
                RosterActionResponse(
                    success=True,
                    message=f"User {'blocked' if blocked else 'unblocked'} successfully",
                    user=ProfileInfo.from_profile(target),
                )
            )
