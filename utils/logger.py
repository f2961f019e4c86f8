# utils/logger.py
import logging
import os
import sys
from config.paths import LOG_PATH

LOGGER_NAME = "validation"

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())


def _add_handlers(log: logging.Logger) -> None:
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    # stdout -> docker logs
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

    log.addHandler(file_handler)
    log.addHandler(stream_handler)


# Prevent duplicate handlers if imported multiple times
if not logger.handlers:
    _add_handlers(logger)


def get_logger(name: str) -> logging.Logger:
    """Module logger under the service logger, sharing its handlers."""
    return logger.getChild(name)
