"""Caller identity resolution for routes."""

from fastapi import HTTPException, status

from forum.domain.service import JWTService
from forum.domain.value import Authenticated, Identity

BEARER_PREFIX = "bearer "


def resolve_identity(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
) -> Identity:
    """Resolve the caller from the auth cookie or a Bearer header.

    The cookie wins when both are present. Invalid tokens resolve to the
    anonymous identity.

    Args:
        jwt_service: JWT service
        auth_token: Token from the `auth_token` cookie
        authorization: Value of the Authorization header

    Returns:
        Caller identity
    """
    token = auth_token
    if not token and authorization and authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :].strip()
    return jwt_service.resolve_identity(token)


def require_authenticated(identity: Identity, action: str) -> Authenticated:
    """Return the authenticated caller or fail with 401.

    Raises:
        HTTPException: If the caller is anonymous
    """
    if not isinstance(identity, Authenticated):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return identity


def authenticate(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
    action: str,
) -> Authenticated:
    """Resolve the caller and require them to be authenticated."""
    identity = resolve_identity(jwt_service, auth_token, authorization)
    return require_authenticated(identity, action)
