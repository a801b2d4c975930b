"""
Live Session Use Case

Re-validates a long-lived connection (the change stream) against the
current store state.
"""

from src.app.services.identity_provider import IdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.policies import is_denied


class LiveSessionUseCase:
    """
    Business Rules:
    - The session must still exist, be unrevoked and unexpired
    - The owner's profile must still exist and not be blocked
    """

    def __init__(self, uow: UnitOfWork, identity: IdentityProvider):
        self.uow = uow
        self.identity = identity

    async def execute(self, token: str) -> bool:
        async with self.uow:
            auth = await self.identity.get_session(token)
            if auth is None:
                return False

            profile = await self.uow.profiles.get_by_id(auth.user_id)
            return profile is not None and not is_denied(profile)
