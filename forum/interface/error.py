"""Interface layer errors.

Maps domain errors to HTTP responses. Route handlers catch `DomainError`
and hand it to `to_http_exception`; anything else is logged and reported
as a 500 by `internal_error`.
"""

import logfire
from fastapi import HTTPException, status

from forum.domain.error import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
]


def to_http_exception(error: DomainError, operation: str) -> HTTPException:
    """Translate a domain error into an HTTP exception.

    Args:
        error: Domain error raised by a use case
        operation: Operation name for the log record

    Returns:
        HTTPException with the mapped status code and the error message
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            logfire.warn(
                f"{operation} rejected",
                error=str(error),
                error_type=type(error).__name__,
                status_code=status_code,
            )
            return HTTPException(status_code=status_code, detail=str(error))

    # Unmapped domain errors (a leaked ConcurrentModificationError) are bugs
    return internal_error(error, operation)


def internal_error(error: Exception, operation: str) -> HTTPException:
    """Log an unexpected error and build a generic 500 response."""
    logfire.error(
        f"Unexpected error in {operation}",
        error=str(error),
        error_type=type(error).__name__,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {operation}",
    )
