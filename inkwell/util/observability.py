"""Logfire setup and instrumentation.

Services open one span per operation, named ``<service>.<operation>``, and
log domain events inside it:

    with logfire.span("category_service.merge", target_id=str(target_id)):
        ...
        logfire.info("Categories merged", merged=len(sources))

Requests and SQL queries get their own spans once the app and the engine
are instrumented, so service spans nest under the request that caused them.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from inkwell.config import ObservabilitySettings, Settings
from inkwell.domain.model import Principal


def _should_send(observability: ObservabilitySettings) -> bool:
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Spans always go to the console. They are also shipped to Logfire when
    ``OBSERVABILITY__SEND_TO_LOGFIRE`` is true, or when it is unset and
    ``OBSERVABILITY__LOGFIRE_TOKEN`` is.
    """
    send_to_logfire = _should_send(settings.observability)

    logfire.configure(
        service_name="inkwell",
        service_version=settings.git_sha,
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send_to_logfire,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    """Tag request spans with the route and the authenticated caller."""
    result = dict(attributes)
    result["method"] = request.method
    result["path"] = request.url.path

    principal = getattr(request.state, "principal", None)
    if isinstance(principal, Principal):
        result["principal_id"] = str(principal.id)
        result["principal_role"] = principal.role.value
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the app (headers are not captured)."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement issued through the engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented", dialect=engine.dialect.name)
