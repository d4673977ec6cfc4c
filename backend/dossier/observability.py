"""Logging setup and Logfire instrumentation."""

import logging
from typing import Optional

import logfire
from sqlalchemy import Engine

from dossier import __version__
from dossier.config import Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure console logging for command-line entry points."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    # Engine echo is controlled by Settings.db_echo
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def initialize_logfire(settings: Settings, engine: Optional[Engine] = None) -> bool:
    """
    Initialize Logfire with SQLAlchemy instrumentation.

    Configures Logfire cloud tracking, instruments the given engine so every
    statement becomes a span, and bridges Python logging to Logfire.

    Args:
        settings: Application settings containing the Logfire token
        engine: Engine to instrument, if already created

    Returns:
        True when Logfire was configured, False when skipped or failed.
    """
    if not settings.logfire_token:
        logger.info("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="dossier",
            service_version=__version__,
            environment=settings.environment,
        )

        if engine is not None:
            logfire.instrument_sqlalchemy(engine=engine)

        logging.getLogger().addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire cloud tracking initialized")
        return True

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
        # Continue running - observability is optional
        return False
