"""
Logging configuration for the album archiver.
"""

import logging
from rich.console import Console
from rich.logging import RichHandler


def _rich_handler(console: Console) -> RichHandler:
    return RichHandler(
        console=console,
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
        show_level=False,
        markup=False
    )


def setup_logging(level: str = "INFO") -> None:
    """Send progress to stdout and errors to stderr."""
    
    stdout_handler = _rich_handler(Console())
    stdout_handler.addFilter(lambda record: record.levelno < logging.ERROR)
    
    stderr_handler = _rich_handler(Console(stderr=True))
    stderr_handler.setLevel(logging.ERROR)
    
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[stdout_handler, stderr_handler],
        force=True  # Override any existing configuration
    )
    
    # Silence the database driver
    logging.getLogger("psycopg").setLevel(logging.WARNING)


def get_logger(name: str):
    """Get a standard logger instance."""
    return logging.getLogger(name)
