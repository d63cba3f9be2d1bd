"""Caller identity.

Every core operation receives the caller's identity explicitly. A request
is either anonymous or carries an authenticated user id and role; the
identity is trusted as resolved by the interface layer.
"""

from typing import Literal, Union

from forum.domain.value.common import ValueObject
from forum.domain.value.identifiers import UserId
from forum.domain.value.types import UserRole


class Anonymous(ValueObject):
    """Caller without a valid token."""

    kind: Literal["anonymous"] = "anonymous"


class Authenticated(ValueObject):
    """Caller resolved to a user account."""

    kind: Literal["authenticated"] = "authenticated"
    user_id: UserId
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_moderator(self) -> bool:
        """Moderators and admins can lock and pin threads."""
        return self.role in (UserRole.MODERATOR, UserRole.ADMIN)

    def owns_or_admin(self, author_id: UserId) -> bool:
        """Whether this caller may edit or delete content by `author_id`."""
        return self.user_id == author_id or self.is_admin


Identity = Union[Anonymous, Authenticated]

ANONYMOUS = Anonymous()
