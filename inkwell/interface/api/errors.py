"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from inkwell.domain.error import (
    DomainError,
    DuplicateSlugError,
    ForbiddenError,
    NotFoundError,
)

# Checked in order; the first matching class wins. Anything else is a 400.
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateSlugError, status.HTTP_409_CONFLICT),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as ``{"detail": message}``."""
    code = status_for(exc)
    logfire.info(
        "Domain error returned",
        path=request.url.path,
        status_code=code,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain error handler on the app."""
    app.add_exception_handler(DomainError, handle_domain_error)
