"""Core services and shared components for the image mirror."""

from .logging_config import get_logger, setup_logger
from .exceptions import (
    ImageMirrorError,
    ConfigurationError,
    EngineCommandError,
    ImageTransferError,
)
from .models import (
    BatchReport,
    ImageDescriptor,
    ImageOutcome,
    MirrorConfig,
    MirrorStatus,
)
from .validation import coerce_to_list, load_descriptors

__all__ = [
    "MirrorConfig",
    "ImageDescriptor",
    "ImageOutcome",
    "MirrorStatus",
    "BatchReport",
    "coerce_to_list",
    "load_descriptors",
    "setup_logger",
    "get_logger",
    "ImageMirrorError",
    "ConfigurationError",
    "EngineCommandError",
    "ImageTransferError",
]
