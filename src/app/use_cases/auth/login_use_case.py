"""
Login Use Case

Validates credentials, opens a session and re-checks the block flag before
the session is handed out.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.identity_provider import IdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import AuthError
from src.domain.policies import is_denied
from .dtos import LoginResponse

logger = logging.getLogger(__name__)

BLOCKED_MESSAGE = "Your account has been blocked. Please contact support."


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Invalid email and wrong password give the same INVALID_CREDENTIALS error
    - Email is matched trimmed and lower-cased
    - After the session is created the profile is fetched again; a blocked
      account has the new session revoked at once and gets USER_BLOCKED,
      the same outcome as the access gate's forced sign-out
    - Profile lookup errors follow the gate fail mode ("open" lets the
      session stand, "closed" revokes it)
    """

    def __init__(self, uow: UnitOfWork, identity: IdentityProvider, fail_mode: str = "open"):
        self.uow = uow
        self.identity = identity
        self.fail_mode = fail_mode

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the session token, or Error
        """
        async with self.uow:
            try:
                auth = await self.identity.sign_in(email, password)
            except AuthError as exc:
                return Return.err(Error(exc.code, exc.message))

            await self.uow.commit()

            try:
                profile = await self.uow.profiles.get_by_id(auth.user_id)
            except Exception:
                logger.exception(f"Profile check failed for {auth.user_id} at login")
                if self.fail_mode == "closed":
                    await self.identity.sign_out(auth.token)
                    await self.uow.commit()
                    return Return.err(
                        Error("PROFILE_UNAVAILABLE", "Login failed. Please try again.")
                    )
                profile = None

            if is_denied(profile):
                await self.identity.sign_out(auth.token)
                await self.uow.commit()
                logger.info(f"Blocked user {auth.user_id} signed out at login")
                return Return.err(Error("USER_BLOCKED", BLOCKED_MESSAGE))

            return Return.ok(
                LoginResponse(
                    access_token=auth.token,
                    session_id=str(auth.session_id),
                    user_id=str(auth.user_id),
                    is_admin=bool(profile is not None and profile.is_admin),
                )
            )
