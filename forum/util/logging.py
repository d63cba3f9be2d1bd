"""Standard library logging for the forum process.

Our own code logs through logfire. Uvicorn, alembic and the database
driver use stdlib logging, so their records are forwarded to logfire as
well as printed.
"""

import logging
import sys

import logfire

from forum.config import Settings

# Libraries that log more than we want to see at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "asyncpg", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger.

    Args:
        settings: Application settings; debug mode lowers the level to DEBUG
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    logging.basicConfig(
        level=level,
        handlers=[console, logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
