"""
Use Case: Delete User

Irreversible. Goes through the identity provider's privileged channel; the
profile, sessions and todos are removed by the store's cascade rules.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.identity_provider import IdentityAdmin
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RosterAction
from src.domain.errors import AdminChannelError
from src.domain.policies import check_roster_action
from .dtos import RosterActionResponse
from .guards import load_acting_admin

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Business Rules:
    - Caller must be an admin who is not blocked
    - Cannot delete yourself
    - With peer protection, other admins cannot be deleted
    - Confirmation is the caller's concern; this runs a confirmed intent
    """

    def __init__(self, uow: UnitOfWork, identity_admin: IdentityAdmin, peer_protection: bool = True):
        self.uow = uow
        self.identity_admin = identity_admin
        self.peer_protection = peer_protection

    async def execute(self, actor_id: UUID, target_id: UUID) -> Result[RosterActionResponse]:
        async with self.uow:
            actor = await load_acting_admin(self.uow, actor_id)
            if actor.is_err():
                return actor

            target = await self.uow.profiles.get_by_id(target_id)
            error = check_roster_action(
                actor_id, target, RosterAction.delete, self.peer_protection
            )
            if error:
                return Return.err(error)

            try:
                await self.identity_admin.delete_identity(target_id)
            except AdminChannelError as exc:
                logger.error(f"Error deleting user {target_id} from auth: {exc.message}")
                return Return.err(Error(exc.code, exc.message))

            await self.uow.commit()

            logger.info(f"Admin {actor_id} deleted user {target_id}")

            return Return.ok(
                RosterActionResponse(
                    success=True,
                    message="User deleted successfully from authentication system",
                )
            )
