"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services hold the forum rules that span entities: counters kept in step
    across threads, categories and tags, and votes that move an author's
    reputation. They raise DomainError subclasses and never see HTTP.
    """
