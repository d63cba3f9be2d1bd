"""Test container builder."""

from dishka import AsyncContainer

from forum.util.di import Component, mockable_components
from forum.util.di.container import create_container


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container with everything in memory except `unmock`.

    Examples:
        # Unit and e2e tests
        container = build_test_container()

        # Integration tests, assumes postgres is running
        container = build_test_container(unmock={"persistence"})

    Raises:
        ValueError: If an unknown component is named
    """
    unmock = unmock or set()
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")
    return create_container(mocked=mockable_components() - unmock)
