from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Identity


class IIdentityRepository(ABC):
    """Identity repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Identity]:
        """Get identity by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, identity_id: UUID) -> Optional[Identity]:
        """Get identity by ID"""
        pass

    @abstractmethod
    async def create(self, identity: Identity) -> Identity:
        """Create a new identity"""
        pass

    @abstractmethod
    async def update(self, identity: Identity) -> Identity:
        """Update existing identity"""
        pass

    @abstractmethod
    async def delete(self, identity_id: UUID) -> bool:
        """Delete identity; dependent rows go with it. Returns True if it existed."""
        pass
