"""Test container builder."""

from collections.abc import Iterable

from dishka import AsyncContainer, Provider, make_async_container

from taxon.util.di import Component, mockable_components, select_providers


def build_test_container(
    unmock: set[Component] | None = None,
    extra_providers: Iterable[Provider] = (),
) -> AsyncContainer:
    """Build a container where every component is mocked unless unmocked.

    Args:
        unmock: Components that use their production implementation
        extra_providers: Additional providers, e.g. ``FastapiProvider()``
            for API tests

    Raises:
        ValueError: If ``unmock`` names an unknown component
    """
    components = mockable_components()
    unmock = unmock or set()

    unknown = unmock - components
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return make_async_container(
        *select_providers(mocked=components - unmock), *extra_providers
    )
