"""Shared utility functions for the Billed project."""

import logging
from datetime import UTC, datetime
from pathlib import Path

import colorlog

ROOT_LOGGER = "billed"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the ``billed`` namespace.

    The ``billed`` logger owns the colorized console handler; named children propagate to it, so a file
    handler attached with ``add_file_handler`` receives every module's records.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            f"%(log_color)s{LOG_FORMAT}",
            datefmt=LOG_DATEFMT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.propagate = False
    if name == ROOT_LOGGER:
        return root
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def add_file_handler(path: str | Path, level: int = logging.INFO) -> logging.Logger:
    """Attach a plain (not colorized) file handler to the ``billed`` logger, once."""
    logger = get_logger()
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        file_handler = logging.FileHandler(path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(file_handler)
    return logger


def ensure_dir(path: str | Path) -> None:
    """Ensure a directory exists (like mkdir -p)."""
    Path(path).mkdir(parents=True, exist_ok=True)


def utcnow_iso() -> str:
    """Get the current UTC time as an ISO8601 string."""
    return datetime.now(UTC).isoformat()
