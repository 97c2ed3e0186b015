"""Logging helpers for the package."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


_DEFAULT_LOG = Path.home() / ".select_typeahead.log"


def setup(level: int = logging.INFO, log_file: str | Path | None = None) -> None:
    """Configure logging for the package.

    Parameters
    ----------
    level:
        Minimum severity level for log messages.
    log_file:
        Optional path to the log file.  If not provided,
        ``~/.select_typeahead.log`` is used.
    """

    log_file = _DEFAULT_LOG if log_file is None else Path(log_file)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    try:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    except OSError:
        # Console-only logging if the file can't be opened.
        pass

    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )

    def _excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).critical(
            "Unhandled exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _excepthook
