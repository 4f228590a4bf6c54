"""Logging setup shared by the table_generator package.

Every module obtains its logger through :func:`get_logger`, which keeps all
loggers under the ``table_generator`` hierarchy. Handlers are only installed
by :func:`setup_logging`, so importing the library never configures logging
on behalf of the host application.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "table_generator"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: int | str = logging.WARNING, console: Console | None = None
) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name or number.
        console: Console to log to (defaults to stderr).

    Returns:
        The package root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True

    return root
