"""
Error kinds reported by smart-shell.

Tool calls never raise to the transport; failures come back as payloads
carrying one of the :class:`ErrorCode` values below.
"""

from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorCode(Enum):
    """Error kinds surfaced in tool responses."""
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"  # no mapping for project/key
    COMMAND_FAILED = "COMMAND_FAILED"        # ran, exited non-zero
    CONFIG_INVALID = "CONFIG_INVALID"        # unusable config document


class SmartShellError(Exception):
    """Base class for smart-shell errors."""


class ConfigError(SmartShellError):
    """A persisted configuration document could not be parsed or validated."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
