"""User entity and the authenticated principal.

Accounts are managed elsewhere; Inkwell only reads them to display who
created a category and to stamp comment authors.
"""

from typing import Optional

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import Email, UserId, UserRole


class User(DomainModel):
    """User account as seen by this service."""

    id: UserId
    username: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    email: Email
    role: UserRole = UserRole.USER

    @property
    def display_name(self) -> str:
        """Username if set, otherwise "first last"."""
        if self.username:
            return self.username
        return f"{self.first_name} {self.last_name}".strip()


class Principal(User):
    """Authenticated caller of a request.

    Supplied by the external authentication layer.
    """

    @property
    def is_elevated(self) -> bool:
        return self.role.is_elevated
