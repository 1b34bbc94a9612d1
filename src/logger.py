"""Logging configuration for the to-do REPL.

Usage:
    from logger import setup_logging
    setup_logging("DEBUG", "todo.log")

Modules themselves only call logging.getLogger(__name__).
"""
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", filename: Optional[str] = None) -> None:
    # filename=None means stderr.
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        filename=filename,
    )
