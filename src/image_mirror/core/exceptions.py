"""Custom exceptions for the image mirror."""

from __future__ import annotations

from typing import Optional, Sequence


class ImageMirrorError(Exception):
    """Base exception for all image mirror errors."""


class ConfigurationError(ImageMirrorError):
    """Error raised for invalid inputs or image lists."""


class EngineCommandError(ImageMirrorError):
    """Error raised when a container engine command fails."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        exit_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.command = list(command or [])
        self.exit_code = exit_code


class ImageTransferError(ImageMirrorError):
    """Error raised when transferring a single image fails unexpectedly."""
