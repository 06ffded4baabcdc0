"""
Logging configuration for the fleet service.

One line per record: time, level, logger, message. Services log
identities and versions, never request bodies or webhook payloads.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers kept at WARNING regardless of the configured level.
QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error", "httpx", "httpcore")


def configure_logging(level: str = "INFO", sql_echo: bool = False) -> None:
    """Configure the root logger.

    Args:
        level: The log level name (DEBUG, INFO, WARNING, ERROR).
            Unknown names fall back to INFO.
        sql_echo: Log every SQL statement issued by SQLAlchemy.
    """
    root_level = logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        root_level = logging.INFO

    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if sql_echo else logging.WARNING
    )

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s, sql_echo=%s",
        logging.getLevelName(root_level),
        sql_echo,
    )
