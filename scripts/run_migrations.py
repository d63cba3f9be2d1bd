#!/usr/bin/env python3
"""Apply or roll back the forum schema with Logfire error tracking.

Usage:
    run_migrations.py                  # upgrade to head
    run_migrations.py upgrade <rev>    # upgrade to a revision
    run_migrations.py downgrade <rev>  # roll back to a revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from forum.config import Settings
from forum.util.observability import configure_logfire

DIRECTIONS = ("upgrade", "downgrade")


def parse_args(argv: list[str]) -> tuple[str, str]:
    """Return (direction, revision) from the command line."""
    direction = argv[0] if argv else "upgrade"
    if direction not in DIRECTIONS:
        raise SystemExit(f"Unknown direction {direction!r}, expected one of {DIRECTIONS}")
    if direction == "downgrade" and len(argv) < 2:
        raise SystemExit("downgrade needs a target revision, e.g. 'base'")
    revision = argv[1] if len(argv) > 1 else "head"
    return direction, revision


def main(argv: list[str]) -> int:
    """Run the requested migration and log failures to Logfire."""
    direction, revision = parse_args(argv)
    settings = Settings()
    configure_logfire(settings)

    # Never log credentials
    database = make_url(settings.database.url).render_as_string(hide_password=True)

    with logfire.span(
        "run_migrations", direction=direction, revision=revision, database=database
    ):
        try:
            alembic_cfg = Config("alembic.ini")
            getattr(command, direction)(alembic_cfg, revision)
            logfire.info(
                "Database migration finished", direction=direction, revision=revision
            )
            return 0
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container fails and doesn't start with broken schema
            raise


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
