"""Logging helpers for pycippath."""
from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler


def configure_logging(verbose: bool = False, level: Optional[int] = None) -> None:
    """Configure rich logging; WARNING by default, DEBUG when verbose."""

    resolved_level = level or (logging.DEBUG if verbose else logging.WARNING)
    logging.basicConfig(
        level=resolved_level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=True, show_time=False)],
    )
