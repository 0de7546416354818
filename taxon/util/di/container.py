"""Production DI container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from taxon.util.di import select_providers


def create_container(*, web: bool = True) -> AsyncContainer:
    """Build the container with every production implementation.

    Args:
        web: Include the FastAPI request provider; scripts running outside
            the API pass ``False``
    """
    providers = select_providers()
    if web:
        providers.append(FastapiProvider())
    return make_async_container(*providers)
