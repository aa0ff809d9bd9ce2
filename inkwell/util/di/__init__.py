"""Dependency injection wiring.

Every provider class appears once in PROVIDERS. A class without subclasses
is used as is; a class with subclasses is a swappable component (named by
``__mock_component__``) whose production and in-memory variants are picked
by their ``__is_mock__`` flag.
"""

from typing import Type

from inkwell.util.di.application import ProdApplicationProvider
from inkwell.util.di.base import Component, ProviderBase
from inkwell.util.di.core import ProdConfigProvider
from inkwell.util.di.domain import ProdDomainProvider
from inkwell.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def is_swappable(base: Type[ProviderBase]) -> bool:
    """Whether the provider has production and test variants."""
    return bool(base.__subclasses__())


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a PROVIDERS entry to the class to instantiate.

    Raises:
        ValueError: If the requested variant of a component isn't registered
    """
    if not is_swappable(base):
        return base

    variants = {
        getattr(sub, "__is_mock__", False): sub for sub in base.__subclasses__()
    }
    if use_mock not in variants:
        variant = "mock" if use_mock else "production"
        raise ValueError(
            f"No {variant} provider registered for component "
            f"'{base.__mock_component__ or base.__name__}'"
        )
    return variants[use_mock]


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
    "is_swappable",
]
