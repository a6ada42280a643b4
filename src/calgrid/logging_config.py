"""Logging configuration for calgrid."""

import logging
import sys
from datetime import datetime
from pathlib import Path

_configured = False

ROOT_LOGGER = "calgrid"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the calgrid package.

    - Output to stderr (keeps typer.echo stdout clean for grids and JSON)
    - Format: HH:MM:SS LEVEL [module.name] message
    - Idempotent: safe to call multiple times
    """
    global _configured
    if _configured:
        return
    _configured = True

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s", datefmt="%H:%M:%S")
    )

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    root.addHandler(handler)


def setup_file_logging(log_dir: Path) -> logging.FileHandler:
    """Add a file handler that captures DEBUG-level logs.

    Creates <log_dir>/YYYYMMDD_HHMMSS.log. Returns the handler for cleanup.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = log_dir / f"{timestamp}.log"

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(handler)
    return handler


def reset_logging() -> None:
    """Reset logging state. For testing only."""
    global _configured
    _configured = False
    root = logging.getLogger(ROOT_LOGGER)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.WARNING)
