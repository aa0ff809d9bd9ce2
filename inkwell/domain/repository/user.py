"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from inkwell.domain.model.user import User
from inkwell.domain.value import UserId


class UserRepository(ABC):
    """Read access to accounts, used to resolve ``created_by`` for display."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: List[UserId]) -> List[User]:
        """Find users by ID, skipping unknown IDs."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
