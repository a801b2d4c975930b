from libs.result import Error, Result, Return

from src.app.services.identity_provider import IdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import Profile
from src.domain.errors import AuthError
from .dtos import SignupCommand, SignupResponse, UserInfo


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Register the identity (EMAIL_ALREADY_REGISTERED if taken)
    2. Create its profile with is_admin=False, is_blocked=False
    3. Commit both atomically
    """

    def __init__(self, uow: UnitOfWork, identity: IdentityProvider):
        self.uow = uow
        self.identity = identity

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        async with self.uow:
            try:
                identity_id = await self.identity.sign_up(
                    command.email, command.password, command.full_name
                )
            except AuthError as exc:
                return Return.err(Error(exc.code, exc.message))

            profile = Profile(
                id=identity_id,
                email=normalize_email(command.email),
                full_name=command.full_name,
            )
            profile = await self.uow.profiles.create(profile)

            await self.uow.commit()

            return Return.ok(
                SignupResponse(
                    user=UserInfo(
                        id=str(profile.id),
                        email=profile.email,
                        full_name=profile.full_name,
                    )
                )
            )
