"""Interface layer error mapping.

Domain errors carry no transport details; this module turns each kind into
an HTTP status in one place so routes stay free of try/except blocks.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from taxon.domain.error import (
    AlreadyFollowingError,
    BulkLimitExceededError,
    DomainError,
    DuplicateNameOrSlugError,
    FollowingDisabledError,
    NotFollowingError,
    NotFoundError,
    TagLockedError,
    TagProtectedError,
)

# Checked in order, first match wins
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotFollowingError, status.HTTP_404_NOT_FOUND),
    (DuplicateNameOrSlugError, status.HTTP_409_CONFLICT),
    (AlreadyFollowingError, status.HTTP_409_CONFLICT),
    (TagLockedError, status.HTTP_423_LOCKED),
    (TagProtectedError, status.HTTP_403_FORBIDDEN),
    (FollowingDisabledError, status.HTTP_403_FORBIDDEN),
    (BulkLimitExceededError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
]


def status_for(error: DomainError) -> int:
    """Map a domain error to its HTTP status code.

    Args:
        error: Raised domain error

    Returns:
        Status code; 400 for validation and other rule violations
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as a JSON ``{"detail": ...}`` response."""
    status_code = status_for(exc)
    logfire.warn(
        "Domain error",
        error_type=type(exc).__name__,
        error=str(exc),
        status_code=status_code,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, domain_error_handler)
