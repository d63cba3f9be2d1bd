"""Access token domain service."""

import logfire

from forum.config import AuthSettings
from forum.domain.value import ANONYMOUS, Authenticated, Identity, UserId, UserRole
from forum.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues access tokens and turns them back into caller identities.

    Accounts are managed elsewhere; the forum only needs a signed user ID
    and role to decide what a caller may do.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(
        self, user_id: str, handle: str, role: UserRole = UserRole.USER
    ) -> str:
        """Issue an access token carrying the user's forum role."""
        with logfire.span(
            "jwt_service.create_token", user_id=user_id, role=role.value
        ):
            token = create_token(user_id, handle, role.value, self.auth_settings)
            logfire.info("Access token issued", user_id=user_id, role=role.value)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Decode an access token.

        Raises:
            JWTError: If the token is invalid, expired or lacks forum claims
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Access token rejected", error=str(e))
                raise
            logfire.debug(
                "Access token verified",
                user_id=str(payload.user_id),
                role=payload.role,
            )
            return payload

    def resolve_identity(self, token: str | None) -> Identity:
        """Resolve a request token to the caller's identity.

        Missing and rejected tokens resolve to ANONYMOUS, so public routes
        stay readable with a stale cookie.
        """
        if not token:
            return ANONYMOUS

        try:
            payload = self.verify_token(token)
        except JWTError:
            return ANONYMOUS
        return Authenticated(
            user_id=UserId(payload.user_id), role=UserRole(payload.role)
        )
