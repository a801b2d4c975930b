"""
Use Case: Grant / Revoke Admin Role
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


class SetAdminUseCase:
    """
    Business Rules:
    - Caller must be an admin who is not blocked
    - Cannot change your own admin status
    - With peer protection, other admins cannot be demoted
    - Blocked users cannot be promoted until unblocked
    """

    def __init__(self, uow: UnitOfWork, peer_protection: bool = True):
        self.uow = uow
        self.peer_protection = peer_protection

    async def execute(
        self, actor_id: UUID, target_id: UUID, is_admin: bool
    ) -> Result[RosterActionResponse]:
        action = RosterAction.grant_admin if is_admin else RosterAction.revoke_admin

        async with self.uow:
            actor = await load_acting_admin(self.uow, actor_id)
            if actor.is_err():
                return actor

            target = await self.uow.profiles.get_by_id(target_id)
            error = check_roster_action(actor_id, target, action, self.peer_protection)
            if error:
                return Return.err(error)

            target.is_admin = is_admin
            target = await self.uow.profiles.update(target)
            await self.uow.commit()

            logger.info(f"Admin {actor_id} performed {action.value} on user {target_id}")

            return Return.ok(
                RosterActionResponse(
                    success=True,
                    message=f"Admin role {'granted' if is_admin else 'revoked'} successfully",
                    user=ProfileInfo.from_profile(target),
                )
            )
