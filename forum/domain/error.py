"""Domain layer errors.

Every expected failure of a core operation is raised as one of these
types; the interface layer alone decides how each maps to a response.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the caller may not perform an operation."""

    pass


class ThreadLockedError(ForbiddenError):
    """Raised when replying to a locked thread."""

    def __init__(self, thread_id: str):
        self.thread_id = thread_id
        super().__init__(f"Thread is locked: {thread_id}")


class InvalidInputError(DomainError):
    """Raised when a payload violates a domain rule."""

    pass


class InvalidVoteError(InvalidInputError):
    """Raised when a vote type is not recognized."""

    def __init__(self, vote_type: object):
        self.vote_type = vote_type
        super().__init__(
            f"Invalid vote type: {vote_type!r} (expected 'upvote' or 'downvote')"
        )


class InvalidCategoryError(InvalidInputError):
    """Raised when a thread references a missing or inactive category."""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Invalid category: {category_id}")


class ConflictError(DomainError):
    """Raised on duplicate names or when a write keeps losing races."""

    pass


class ConcurrentModificationError(DomainError):
    """Raised when a versioned replace finds a newer stored version."""

    def __init__(self, resource: str, identifier: str, expected_version: int):
        self.resource = resource
        self.identifier = identifier
        self.expected_version = expected_version
        super().__init__(
            f"{resource} {identifier} was modified concurrently "
            f"(expected version {expected_version})"
        )
