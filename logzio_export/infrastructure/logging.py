from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT = "logzio_export"


def _handler(console: Optional[Console] = None) -> logging.Handler:
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        level = os.getenv("LOGZIO_EXPORT_LOG_LEVEL", "WARNING").upper()
        root.addHandler(_handler())
        root.setLevel(getattr(logging, level, logging.WARNING))
    return logger


def use_console(console: Console) -> None:
    """Route package logging through ``console`` so log lines render above the live progress bar."""
    root = get_logger(_ROOT)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(_handler(console))


def set_verbose(verbose: bool) -> None:
    """Raise package logging to INFO for --verbose runs."""
    if verbose:
        get_logger(_ROOT).setLevel(logging.INFO)
