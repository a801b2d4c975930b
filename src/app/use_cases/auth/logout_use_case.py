from libs.result import Result, Return
from src.app.services.identity_provider import IdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse


class LogoutUseCase:
    """Explicit sign-out. Idempotent: an unknown or dead token still succeeds."""

    def __init__(self, uow: UnitOfWork, identity: IdentityProvider):
        self.uow = uow
        self.identity = identity

    async def execute(self, token: str) -> Result[LogoutResponse]:
        async with self.uow:
            await self.identity.sign_out(token)
            await self.uow.commit()
            return Return.ok(
                LogoutResponse(status="signed_out", message="Signed out successfully")
            )
