"""Access token encoding.

Tokens carry the user ID as the standard ``sub`` claim, plus the handle and
forum role. Timestamps are UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Literal
from uuid import UUID

import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from forum.config import AuthSettings

REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class TokenPayload(BaseModel):
    """Decoded access token claims."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(alias="sub")
    handle: str
    role: Literal["user", "moderator", "admin"] = "user"
    issued_at: datetime = Field(alias="iat")
    expires_at: datetime = Field(alias="exp")


class JWTError(Exception):
    """Token could not be decoded into forum claims."""


def create_token(
    user_id: str,
    handle: str,
    role: str,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Encode an access token.

    Args:
        user_id: User ID, stored as ``sub``
        handle: User handle
        role: 'user', 'moderator' or 'admin'
        settings: Authentication settings
        now: Issue time, defaults to the current UTC time

    Returns:
        Encoded token
    """
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "handle": handle,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode and validate an access token.

    Raises:
        JWTError: If the signature, expiry or claims are invalid
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway_seconds,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        raise JWTError("Token claims do not describe a forum user") from e
