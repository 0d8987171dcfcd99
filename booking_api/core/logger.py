import sys
from loguru import logger
import logging

from booking_api.core.config import Settings

class InterceptHandler(logging.Handler):
    """Forward stdlib records into loguru, keeping the originating logger and line."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        origin = {"name": record.name, "function": record.funcName, "line": record.lineno}
        logger.patch(lambda r: r.update(origin)).opt(exception=record.exc_info).log(level, record.getMessage())


def setup_logging(settings: Settings):
    logger.remove()

    logger.add(
        sys.stdout,
        level=settings.LOG_LEVEL,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    if settings.ERROR_LOG_FILE:
        logger.add(
            settings.ERROR_LOG_FILE,
            level="ERROR",
            rotation="10 MB",
            retention="1 month",
            compression="zip",
            delay=True,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
        )

    # Route uvicorn / sqlalchemy / twilio logging through loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("twilio.http_client").setLevel(logging.WARNING)

__all__ = ["logger", "setup_logging"]
