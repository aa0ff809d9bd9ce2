"""Stdlib logging setup.

Inkwell's own events go through logfire. Uvicorn, SQLAlchemy, asyncpg and
Alembic still log through the stdlib, so their levels and format are set
here.
"""

import logging
import sys

from inkwell.config import Settings

# Library loggers that are too chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg", "alembic.runtime")


def setup_logging(settings: Settings) -> None:
    """Set root level and format for library log records.

    Access logs are kept outside production only; in production request
    tracing comes from the FastAPI instrumentation instead.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if settings.environment == "production":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
