"""
Logging utilities for the Stock UI.

Provides a small logger factory that returns configured Python loggers
with consistent formatting across the application.
"""

import logging
from pathlib import Path

from stock_ui import config


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), the module stem is used
    so log lines read ``list_controller`` instead of a full path.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = f"stock_ui.{Path(name).stem}"

    log = logging.getLogger(name)

    # Only configure if not already configured
    if not log.handlers:
        log.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        log.addHandler(handler)

    return log
