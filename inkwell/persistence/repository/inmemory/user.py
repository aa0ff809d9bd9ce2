"""In-memory user repository for testing."""

from typing import Optional

from inkwell.domain.model.user import User
from inkwell.domain.repository.user import UserRepository
from inkwell.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find users by ID."""
        unique_ids = dict.fromkeys(user_ids)
        return [self._users[uid] for uid in unique_ids if uid in self._users]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user
