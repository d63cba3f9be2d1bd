"""Dependency injection wiring."""

from typing import Collection, Type

from forum.util.di.application import ProdApplicationProvider
from forum.util.di.base import Component, ProviderBase
from forum.util.di.core import ProdConfigProvider
from forum.util.di.domain import ProdDomainProvider
from forum.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have an in-memory variant."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_mockable() and base.__mock_component__
    }


def resolve_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per entry of PROVIDERS.

    Args:
        mocked: Components to back with their in-memory variant

    Raises:
        ValueError: If an unknown component is named
    """
    unknown = set(mocked) - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return [
        base.implementation(use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "mockable_components",
    "resolve_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
