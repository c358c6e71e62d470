import sys

from loguru import logger

from roomi.core.config import settings


def configure_logging() -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL.upper(),
        backtrace=settings.APP_ENV == "development",
        diagnose=settings.APP_ENV == "development",
    )
