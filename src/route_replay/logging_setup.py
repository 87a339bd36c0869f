"""Logging setup for route-replay."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "ROUTE_REPLAY_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING


def resolve_level(level: int | str | None = None) -> int:
    """Resolve a level from the argument or the environment, defaulting to WARNING."""
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        return DEFAULT_LEVEL
    return resolved


def init_logging(level: int | str | None = None, console: Console | None = None) -> int:
    """Install a rich console handler on the root logger and return the active level."""
    resolved = resolve_level(level)
    root = logging.getLogger()
    root.setLevel(resolved)

    handler = next((h for h in root.handlers if isinstance(h, RichHandler)), None)
    if handler is None:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)
    handler.setLevel(resolved)

    logging.getLogger("route_replay").debug("Logging initialized at %s", logging.getLevelName(resolved))
    return resolved


def set_console_level(level: int) -> None:
    """Adjust the rich console handler's level."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(level)
