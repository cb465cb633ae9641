"""Logging setup for warikan."""

import logging

from rich.logging import RichHandler


def configure_logging(level: str = "INFO") -> None:
    """Send log records through rich, at the given level name."""
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
