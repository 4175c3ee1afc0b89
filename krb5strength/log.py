"""Logging helpers shared by the library and the command-line tools."""

import logging
import sys
from typing import Optional


def setup_logging(verbose: bool = False, level: Optional[int] = None) -> None:
    """Configure the root logger.

    Logs go to stderr because the check program answers on stdout.

    Args:
        verbose: If True, log at DEBUG, otherwise WARNING
        level: Optional explicit log level (overrides verbose)
    """
    if level is None:
        level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
