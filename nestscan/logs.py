"""Logging setup — route nestscan logs through Rich on stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the ``nestscan`` logger (idempotent)."""
    logger = logging.getLogger("nestscan")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
