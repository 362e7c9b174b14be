"""Console logging for the recordgate CLI.

Records from recordgate's own loggers are printed as they are. Records from
libraries are tagged with the library's top-level package (``[sqlalchemy]``)
so they stand out in verbose runs. ``--debug`` switches to a timestamped
layout that shows the full logger name and the source location instead.

`startup_diagnostics` collects the environment facts that `log_startup`
writes at DEBUG when the CLI starts.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

from recordgate import config

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from logging import Logger

# pylint: disable=too-few-public-methods

ROOT_LOGGER = "recordgate"

CONSOLE_FORMAT = "%(source)s %(message)s"
DEBUG_FORMAT = "%(asctime)s %(name)s: %(message)s"


def is_own_logger(name: str) -> bool:
    """True for ``recordgate`` and its child loggers."""
    return name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}.")


class LibrarySourceFilter(logging.Filter):
    """Set ``record.source`` to ``"[package]"`` for library records, ``""`` for ours.

    Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if is_own_logger(record.name):
            record.source = ""
        else:
            record.source = f"[{record.name.partition('.')[0]}]"
        return True


def console_handler(
    level: int = logging.INFO, *, debug: bool = False, color: bool = True
) -> RichHandler:
    """Return a RichHandler writing to stderr.

    Args:
        level: Minimum level shown on the console. Forced to DEBUG in debug mode.
        debug: Use the timestamped layout with source paths.
        color: Let rich pick a colour system; ``False`` prints plain text.
    """
    if debug:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=Console(stderr=True, color_system="auto" if color else None),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug,
        enable_link_path=debug,
    )
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT if debug else CONSOLE_FORMAT))
    if not debug:
        handler.addFilter(LibrarySourceFilter())
    return handler


def startup_diagnostics(
    handlers: Iterable[logging.Handler], logger_levels: Mapping[str, int]
) -> dict[str, Any]:
    """Label/value pairs describing the process, in display order.

    The database URL is only reported as set or unset; it may carry a password.
    """
    db_url_state = "set" if os.environ.get(config.DB_URL_ENV_VAR) else "unset"
    overrides = {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
    return {
        "Python": sys.version.split()[0],
        "Platform": f"{platform.system()} {platform.release()}",
        "PID": os.getpid(),
        "CWD": Path.cwd(),
        "SQLAlchemy": sqlalchemy.__version__,
        config.DB_URL_ENV_VAR: db_url_state,
        "Handlers": [type(h).__name__ for h in handlers],
        "Per-logger overrides": overrides or "<none>",
    }


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    logger_levels: dict[str, int],
) -> None:
    """Log the version and console level at INFO, then the diagnostics at DEBUG."""
    logger.info("recordgate %s, console=%s", app_version, logging.getLevelName(level))
    for label, value in startup_diagnostics(handlers, logger_levels).items():
        logger.debug("%s: %s", label, value)
