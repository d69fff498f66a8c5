"""
Runtime configuration read from the environment (and a local .env file).
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]

LOG_HANDLER_NAME = "rightofway-console"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_log_level(default: str = "INFO") -> int:
    """Get the configured log level.

    Names that are not logging levels (e.g. "verbose") fall back to default.
    """
    name = os.getenv("RIGHTOFWAY_LOG_LEVEL", default).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.getLevelName(default.upper())
    return level


def get_cors_origins() -> list[str]:
    """Get the origins allowed to call the HTTP API"""
    raw = os.getenv("RIGHTOFWAY_CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_vocabulary_path() -> Path | None:
    """Get an alternative vocabulary file, if one is configured"""
    raw = os.getenv("RIGHTOFWAY_VOCABULARY")
    return Path(raw) if raw else None


def setup_logging(level: int, logger_name: str | None = None) -> logging.Logger:
    """Send log records at `level` and above to stderr.

    Args:
        level: Logging level for the logger and its console handler
        logger_name: Logger to configure; None for the root logger

    Returns:
        The configured logger
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(LOG_HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    # Replace the handler from an earlier call instead of stacking another one
    target = logging.getLogger(logger_name)
    for handler in list(target.handlers):
        if handler.get_name() == LOG_HANDLER_NAME:
            target.removeHandler(handler)
    target.setLevel(level)
    target.addHandler(console_handler)
    return target
