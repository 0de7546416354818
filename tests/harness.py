"""Container fixtures shared by the unit, integration and e2e suites.

Integration tests expect a migrated PostgreSQL reachable through
``DATABASE__URL``.
"""

import pytest_asyncio

from taxon.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Create a fixture yielding a request-scoped container.

    Each test gets a fresh APP container, so the in-memory repositories and
    the live taxonomy configuration never leak between tests.

    Usage:
        unit_env = create_env_fixture()
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create(unit_env):
            service = await unit_env.get(TagService)
    """

    @pytest_asyncio.fixture
    async def _env():
        container = build_test_container(unmock=unmock)
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _env
