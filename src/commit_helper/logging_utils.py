"""Logging configuration for the commit helper server."""

import logging
import sys
from typing import Optional

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Send package logs to stderr once; stdout belongs to the MCP protocol."""
    logger = logging.getLogger("commit_helper")
    if logger.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel((level or "WARNING").upper())
    logger.propagate = False
