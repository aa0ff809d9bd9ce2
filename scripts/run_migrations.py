#!/usr/bin/env python3
"""Apply Alembic migrations before the API starts.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c1f6a2d9b47
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from inkwell.config import Settings
from inkwell.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the given revision, ``head`` by default."""
    settings = Settings()
    configure_logfire(settings)

    revision = argv[0] if argv else "head"
    alembic_cfg = Config("alembic.ini")

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Schema upgrade failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # A container that can't migrate must not go on to serve traffic
            raise

    logfire.info("Schema is up to date", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
