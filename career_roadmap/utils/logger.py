"""Logging configuration for the career roadmap pipeline."""

import logging
import sys
from typing import Optional

from career_roadmap.config import LOG_LEVEL


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        default_level = getattr(logging, LOG_LEVEL, logging.INFO)
        logger.setLevel(default_level if isinstance(default_level, int) else logging.INFO)
    if level is not None:
        logger.setLevel(level)
    return logger
