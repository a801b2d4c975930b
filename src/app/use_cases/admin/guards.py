from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Profile
from src.domain.policies import is_effective_admin


async def load_acting_admin(uow: UnitOfWork, actor_id: UUID) -> Result[Profile]:
    """Fresh read of the caller's profile; blocked admins are refused"""
    actor = await uow.profiles.get_by_id(actor_id)
    if not is_effective_admin(actor):
        return Return.err(Error("FORBIDDEN", "Forbidden: Admin access required"))
    return Return.ok(actor)
