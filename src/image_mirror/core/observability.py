"""Contextual logging for mirror operations."""

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .logging_config import ROOT_LOGGER_NAME, setup_logger


@dataclass(frozen=True)
class LogContext:
    """Correlation data attached to the log lines of one image."""

    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    operation: str = ""
    component: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def with_operation(self, operation: str) -> "LogContext":
        return replace(self, operation=operation, metadata=dict(self.metadata))

    def with_metadata(self, **kwargs: Any) -> "LogContext":
        return replace(self, metadata={**self.metadata, **kwargs})


def render(message: str, context: Optional[LogContext] = None, **kwargs: Any) -> str:
    """Prefix ``message`` with operation and correlation id, append key=value pairs."""
    fields = dict(kwargs)
    prefix = ""
    if context is not None:
        fields = {**context.metadata, **kwargs}
        prefix = f"[{context.correlation_id}] "
        if context.operation:
            prefix = f"[{context.operation}] {prefix}"

    suffix = ""
    if fields:
        suffix = " (" + ", ".join(f"{k}={v}" for k, v in fields.items()) + ")"
    return f"{prefix}{message}{suffix}"


class StructuredLogger:
    """LoggerProtocol implementation on top of the configured stdlib logger."""

    def __init__(self, name: str = ROOT_LOGGER_NAME, level: Optional[str] = None):
        self._logger = setup_logger(name, level)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(render(message, context, **kwargs))

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        self._logger.info(render(message, context, **kwargs))

    def warning(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        self._logger.warning(render(message, context, **kwargs))

    def error(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        self._logger.error(render(message, context, **kwargs))
