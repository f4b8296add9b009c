"""
Logging setup for smart-shell.

Everything goes to stderr: when running as an MCP stdio server, stdout
belongs to the protocol.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "smart_shell"

_configured = False


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the shared ``smart_shell`` namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: Union[str, int] = "INFO",
                      log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Attach handlers to the shared logger (once per process).

    Args:
        level: Level for the stderr handler
        log_file: Optional file that receives DEBUG and above
    """
    global _configured
    logger = logging.getLogger(ROOT_LOGGER)
    if _configured:
        return logger
    if isinstance(level, str):
        level = level.upper()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    _configured = True
    return logger
