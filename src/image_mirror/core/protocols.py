"""Protocol definitions for dependency injection and testability."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Protocol, Sequence

from .models import BatchReport, ImageDescriptor, ImageOutcome


@dataclass(frozen=True)
class CommandResult:
    """Captured result of an external command."""

    stdout: str
    exit_code: int
    stderr: str = ""


class CommandRunnerProtocol(Protocol):
    """Protocol for running external engine commands."""

    def run(self, cmd: str, args: Sequence[str]) -> CommandResult:
        """Run ``cmd`` with ``args`` and block until it terminates."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        ...


class OutputSinkProtocol(Protocol):
    """Protocol for publishing step outputs to the invoking environment."""

    def set_output(self, name: str, value: str) -> None:
        """Publish a named output value."""
        ...

    def set_failed(self, message: str) -> None:
        """Mark the run as failed."""
        ...


class MirrorService(ABC):
    """Abstract service for mirroring a single image."""

    @abstractmethod
    def mirror_image(self, descriptor: ImageDescriptor) -> ImageOutcome:
        """Mirror a single image; never raises."""
        ...


class BatchMirror(ABC):
    """Abstract batch mirror."""

    @abstractmethod
    def mirror_batch(self, descriptors: List[ImageDescriptor]) -> BatchReport:
        """Mirror a batch of images in order."""
        ...
