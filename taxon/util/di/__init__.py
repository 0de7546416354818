"""Provider registry for the taxon DI container.

Every entry of ``PROVIDERS`` is either a concrete provider or a component
base whose subclasses are its production and mock implementations.
"""

from collections.abc import Collection
from typing import Type

from taxon.util.di.application import ProdApplicationProvider
from taxon.util.di.base import Component, ProviderBase
from taxon.util.di.core import ProdConfigProvider
from taxon.util.di.domain import ProdDomainProvider
from taxon.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a registry entry to the provider class to instantiate.

    Raises:
        ValueError: If a component has no implementation of the requested kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and base.__mock_component__
    }


def select_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per registry entry.

    Args:
        mocked: Components served by their mock implementation; the rest
            use production implementations

    Returns:
        Provider instances ready for ``make_async_container``
    """
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
