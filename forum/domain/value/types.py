"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from forum.domain.error import InvalidVoteError
from forum.domain.value.common import RootValueObject


class VoteType(str, Enum):
    """Direction of a vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @classmethod
    def parse(cls, value: "VoteType | str") -> "VoteType":
        """Coerce a raw value into a vote type.

        Raises:
            InvalidVoteError: If the value is not a recognized vote type
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidVoteError(value)


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    THREAD = "thread"
    REPLY = "reply"


class UserRole(str, Enum):
    """Role of a user on the forum."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class Handle(RootValueObject[str]):
    """Public username.

    3-30 characters: letters, digits and underscores.
    """

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle format."""
        if not re.match(r"^[a-zA-Z0-9_]{3,30}$", v):
            raise ValueError(
                "Handle must be 3-30 characters of letters, numbers and underscores"
            )
        return v


class TagName(RootValueObject[str]):
    """Normalized tag name.

    Names are trimmed and lowercased on construction, so 'React' and
    ' react ' produce the same tag. Must be 1-30 characters once normalized.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_tag_name(cls, v: object) -> object:
        """Trim and lowercase the raw name."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name length."""
        if len(v) < 1 or len(v) > 30:
            raise ValueError("Tag name must be between 1 and 30 characters")
        return v
