"""Unit tests for provider resolution."""

import pytest

from forum.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    mockable_components,
    resolve_providers,
)
from tests.di import MockPersistenceProvider


def test_persistence_is_the_only_swappable_component():
    assert mockable_components() == {"persistence"}


def test_concrete_provider_is_its_own_implementation():
    assert ProdConfigProvider.implementation(use_mock=True) is ProdConfigProvider


def test_persistence_variants():
    assert PersistenceProvider.implementation() is ProdPersistenceProvider
    assert PersistenceProvider.implementation(use_mock=True) is MockPersistenceProvider


def test_resolve_in_memory_persistence():
    providers = resolve_providers(mocked={"persistence"})

    kinds = {type(p) for p in providers}
    assert MockPersistenceProvider in kinds
    assert ProdPersistenceProvider not in kinds


def test_unknown_component_rejected():
    with pytest.raises(ValueError, match="Unknown components"):
        resolve_providers(mocked={"search"})
