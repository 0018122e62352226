import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LEVEL_ENV_VAR = "SLIDEDEDUP_LOG_LEVEL"


def _resolve_level(name: str) -> int:
    # Command-line runs print progress at INFO; embedded use only surfaces problems
    fallback = logging.INFO if name.endswith(".cli") else logging.WARNING
    requested = os.getenv(LEVEL_ENV_VAR)
    if not requested:
        return fallback

    level = logging.getLevelName(requested.upper())
    return level if isinstance(level, int) else fallback


def get_logger(name: str) -> logging.Logger:
    """Logger with a single stream handler, level taken from SLIDEDEDUP_LOG_LEVEL."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_resolve_level(name))
    return logger
