"""Dependency injection module.

Providers are listed once in ``PROVIDERS``. A provider with subclasses is a
swappable component (its subclasses are the production and mock
implementations); one without is used as-is everywhere.
"""

from typing import Iterable, Type

from vouch.util.di.application import ProdApplicationProvider
from vouch.util.di.base import Component, ProviderBase
from vouch.util.di.core import ProdConfigProvider
from vouch.util.di.domain import ProdDomainProvider
from vouch.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from vouch.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable components
    PersistenceProvider,
]


def is_component(base: Type[ProviderBase]) -> bool:
    return bool(base.__subclasses__())


def components() -> set[Component]:
    """Names of every swappable component."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if is_component(base) and base.__mock_component__
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider.

    Raises:
        DependencyInjectionError: If the component has no implementation of
            the requested kind (mock implementations are only registered
            once the test providers are imported)
    """
    if not is_component(base):
        return base

    for candidate in base.__subclasses__():
        if candidate.__is_mock__ == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


def select_providers(mocked: Iterable[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per entry in ``PROVIDERS``.

    Args:
        mocked: Components to replace with their mock implementation
    """
    mocked = set(mocked)
    unknown = mocked - components()
    if unknown:
        raise DependencyInjectionError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "components",
    "get_provider",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
