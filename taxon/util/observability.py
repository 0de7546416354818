"""Logfire setup for the taxonomy API and its scripts.

Services open spans named ``<service>.<operation>`` and log one event per
state change, e.g.::

    with logfire.span("merge_service.merge_tags", target_id=str(target_id)):
        ...
    logfire.info("Tags merged", survivor_id=str(tag.id), absorbed=2)
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from taxon.config import Settings

# Path parameters copied onto request spans so traces can be filtered by tag
_TRACED_PATH_PARAMS = ("tag_id", "post_id", "user_id")


def should_send(settings: Settings) -> bool:
    """Whether spans leave the process.

    An explicit ``OBSERVABILITY__SEND_TO_LOGFIRE`` wins; otherwise spans are
    sent only when a token is configured.
    """
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings, service_name: str = "taxon-api") -> None:
    """Configure Logfire for one process.

    Args:
        settings: Application settings
        service_name: ``taxon-api``, ``taxon-migrations`` or ``taxon-maintenance``
    """
    send = should_send(settings)

    logfire.configure(
        service_name=service_name,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(verbose=settings.debug),
    )

    logfire.info(
        "Observability configured",
        service=service_name,
        environment=settings.environment,
        send_to_logfire=send,
    )


def _tag_request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    path_params = getattr(request, "path_params", None) or {}
    traced = {
        name: str(path_params[name])
        for name in _TRACED_PATH_PARAMS
        if name in path_params
    }
    return {**attributes, **traced}


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request, tagged with the tag/post/user it targets."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_tag_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
