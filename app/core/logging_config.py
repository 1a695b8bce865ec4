# app/core/logging_config.py

import logging
import sys

from loguru import logger

from app.core.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)

# stdlib loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "reportlab", "pdfminer", "httpx")


class InterceptHandler(logging.Handler):
    """Forward stdlib log records (uvicorn, domain services) to loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging() -> None:
    """
    Loguru is the only sink. Domain services log through stdlib
    ``logging.getLogger(...)`` and reach loguru via InterceptHandler.

    Set LOG_FILE to also write a rotating plain-text log.
    """
    logger.remove()
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=settings.LOG_LEVEL.upper(),
        colorize=True,
        backtrace=False,
        diagnose=settings.DEBUG,
    )
    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            level=settings.LOG_LEVEL.upper(),
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=settings.LOG_LEVEL.upper(), force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [InterceptHandler()]
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
