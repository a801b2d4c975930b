"""
Identity Provider Ports

Session and credential handling live behind these interfaces. Callers own
the transaction: implementations flush but never commit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class AuthSession:
    """A validated session: who is calling and under which session row"""

    user_id: UUID
    session_id: UUID
    token: str


class IdentityProvider(ABC):
    """Normal-privilege identity operations"""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Validate credentials and open a session. Raises AuthError."""
        pass

    @abstractmethod
    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> UUID:
        """Register an identity. Raises AuthError(EMAIL_ALREADY_REGISTERED)."""
        pass

    @abstractmethod
    async def sign_out(self, token: str) -> bool:
        """Revoke the session behind token. Returns True if one was active."""
        pass

    @abstractmethod
    async def get_session(self, token: Optional[str]) -> Optional[AuthSession]:
        """Resolve a token to a live session, or None"""
        pass


class IdentityAdmin(ABC):
    """Privileged channel, authenticated separately from user sessions"""

    @abstractmethod
    async def delete_identity(self, identity_id: UUID) -> None:
        """Permanently delete an identity. Raises AdminChannelError."""
        pass
