"""
Access Gate Use Case

Per-request decision: allow, redirect to login, redirect to the members
area, or sign the caller out and redirect to login with the block marker.
"""

import logging
from typing import Optional

from src.app.services.identity_provider import AuthSession, IdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Disposition
from src.domain.policies import (
    GatePaths,
    decide_anonymous,
    decide_for_profile,
    is_anonymous_entry,
    is_protected,
)

logger = logging.getLogger(__name__)

FAIL_OPEN = "open"
FAIL_CLOSED = "closed"


class AccessGateUseCase:
    """
    Evaluate one request against the route protection rules.

    Order (first match wins):
    1. No session on a protected path -> login
    2. Session on a protected path -> profile lookup
       a. blocked -> revoke session, login?blocked=true
       b. admin area without admin -> members root
       c. allow
    3. Session on login/signup/root -> members root, no lookup
    4. Anything else -> allow

    Unresolvable tokens count as no session. Profile lookup failures are
    resolved by fail_mode: "open" allows the request, "closed" sends it to
    login. Every evaluation reads the store fresh.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        identity: IdentityProvider,
        paths: GatePaths,
        fail_mode: str = FAIL_OPEN,
    ):
        if fail_mode not in (FAIL_OPEN, FAIL_CLOSED):
            raise ValueError(f"Unknown gate fail mode: {fail_mode}")
        self.uow = uow
        self.identity = identity
        self.paths = paths
        self.fail_mode = fail_mode

    async def evaluate(self, path: str, token: Optional[str]) -> Disposition:
        async with self.uow:
            auth = await self._resolve_session(token)

            if auth is None:
                return decide_anonymous(path, self.paths)

            if is_protected(path, self.paths):
                return await self._check_profile(path, auth)

            if is_anonymous_entry(path, self.paths):
                return Disposition.to_dashboard(self.paths.members)

            return Disposition.allow()

    async def _resolve_session(self, token: Optional[str]) -> Optional[AuthSession]:
        if not token:
            return None
        try:
            return await self.identity.get_session(token)
        except Exception:
            logger.exception("Session lookup failed, treating request as anonymous")
            return None

    async def _check_profile(self, path: str, auth: AuthSession) -> Disposition:
        try:
            profile = await self.uow.profiles.get_by_id(auth.user_id)
        except Exception:
            if self.fail_mode == FAIL_CLOSED:
                logger.exception(f"Profile lookup failed for {auth.user_id}, failing closed")
                return Disposition.to_login(self.paths.login)
            logger.warning(
                f"Profile lookup failed for {auth.user_id}, failing open", exc_info=True
            )
            return Disposition.allow()

        disposition = decide_for_profile(path, profile, self.paths)

        if disposition.sign_out:
            await self._force_sign_out(auth)

        return disposition

    async def _force_sign_out(self, auth: AuthSession) -> None:
        try:
            await self.identity.sign_out(auth.token)
            await self.uow.commit()
        except Exception:
            # The adapter still clears the cookie on the redirect
            logger.exception(f"Could not revoke session {auth.session_id} of blocked user")
            return
        logger.info(f"Blocked user {auth.user_id} forcibly signed out (session {auth.session_id})")
