"""
Local identity provider backed by the service's own database.

Passwords are bcrypt hashes; session tokens are HS256 JWTs pointing at a
row in the sessions table, so revoking the row kills the token.
"""

import hmac
import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

import bcrypt
from sqlalchemy.exc import SQLAlchemyError

from config import ApplicationConfig
from src.api.utils.jwt import generate_session_token, verify_jwt
from src.app.services.identity_provider import AuthSession, IdentityAdmin, IdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utcnow
from src.domain.entities import Identity, Session
from src.domain.errors import AdminChannelError, AuthError

logger = logging.getLogger(__name__)


class LocalIdentityProvider(IdentityProvider):
    """Identity provider over the identities/sessions tables"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def sign_in(self, email: str, password: str) -> AuthSession:
        identity = await self.uow.identities.get_by_email(normalize_email(email))

        # Constant-time password verification (prevent timing attacks)
        if identity is None:
            bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))
            raise AuthError("Invalid email or password", code="INVALID_CREDENTIALS")

        if not bcrypt.checkpw(password.encode(), identity.password_hash.encode()):
            raise AuthError("Invalid email or password", code="INVALID_CREDENTIALS")

        session = Session(
            user_id=identity.id,
            expires_at=utcnow() + timedelta(hours=ApplicationConfig.SESSION_TTL_HOURS),
        )
        session = await self.uow.sessions.create(session)

        identity.last_sign_in_at = utcnow()
        await self.uow.identities.update(identity)

        token = generate_session_token(identity.id, session.id, session.expires_at)
        return AuthSession(user_id=identity.id, session_id=session.id, token=token)

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> UUID:
        email = normalize_email(email)
        if await self.uow.identities.get_by_email(email):
            raise AuthError("Email already registered", code="EMAIL_ALREADY_REGISTERED")

        password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
        )
        identity = Identity(
            email=email,
            password_hash=password_hash.decode("utf-8"),
            full_name=full_name,
        )
        identity = await self.uow.identities.create(identity)
        return identity.id

    async def sign_out(self, token: str) -> bool:
        payload = verify_jwt(token) if token else None
        if payload is None:
            return False
        try:
            session_id = UUID(payload["sid"])
        except (KeyError, ValueError):
            return False
        return await self.uow.sessions.revoke_by_id(session_id)

    async def get_session(self, token: Optional[str]) -> Optional[AuthSession]:
        if not token:
            return None

        payload = verify_jwt(token)
        if payload is None:
            return None

        try:
            user_id = UUID(payload["sub"])
            session_id = UUID(payload["sid"])
        except (KeyError, ValueError):
            return None

        session = await self.uow.sessions.get_by_id(session_id)
        if session is None or session.user_id != user_id:
            return None
        if not session.is_active(utcnow()):
            return None

        return AuthSession(user_id=user_id, session_id=session_id, token=token)


class LocalIdentityAdmin(IdentityAdmin):
    """
    Privileged identity operations.

    Requires the service role key; user session tokens never grant access.
    """

    def __init__(self, uow: UnitOfWork, service_key: str):
        self.uow = uow
        self.service_key = service_key

    async def delete_identity(self, identity_id: UUID) -> None:
        if not hmac.compare_digest(
            str(self.service_key or ""), str(ApplicationConfig.SERVICE_ROLE_KEY)
        ):
            raise AdminChannelError("Invalid service role key", code="INVALID_SERVICE_KEY")

        try:
            deleted = await self.uow.identities.delete(identity_id)
        except SQLAlchemyError as exc:
            logger.error(f"Identity deletion failed for {identity_id}: {exc}")
            raise AdminChannelError("Failed to delete user") from exc

        if not deleted:
            raise AdminChannelError(
                "User not found in identity provider", code="IDENTITY_NOT_FOUND"
            )
