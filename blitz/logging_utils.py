"""Logging configuration shared by the command line entry points."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str = LOG_LEVEL, console: Console | None = None) -> None:
    """Route ``blitz`` log records through a Rich handler.

    Call once at program start. Unknown level names fall back to WARNING.
    """

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="%H:%M:%S"))

    root = logging.getLogger("blitz")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.propagate = False

