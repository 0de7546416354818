"""FastAPI application factory."""

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI

from taxon.interface.api.routes import health, posts, tags
from taxon.interface.error import register_error_handlers
from taxon.util.di.container import create_container
from taxon.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create the taxonomy API.

    Logfire must already be configured; ``scripts/start_app.py`` does that
    in production and ``tests/conftest.py`` in tests.

    Args:
        container: Container to resolve dependencies from, the production
            container when omitted
    """
    app = FastAPI(
        title="Taxon API",
        description=(
            "Tag taxonomy and deduplication engine: hierarchy, duplicate "
            "detection, merging and health analytics"
        ),
        version="0.1.0",
    )
    instrument_fastapi(app)

    if container is None:
        container = create_container()
    setup_dishka(container, app)

    for module in (health, tags, posts):
        app.include_router(module.router)
    register_error_handlers(app)

    return app
