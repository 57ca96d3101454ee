# src/image_mirror/core/error_handling.py

import functools
from typing import Any, Callable, Dict, List, TypeVar

from .exceptions import ImageMirrorError, ImageTransferError
from .logging_config import component_logger

F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """
    A decorator to wrap engine steps with standardized error handling.

    Errors from the mirror's own hierarchy pass through unchanged; anything
    else is logged and re-raised as ``ImageTransferError``.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = component_logger(f"engine.{func.__name__}")
        try:
            return func(*args, **kwargs)
        except ImageMirrorError as e:
            logger.debug(f"'{func.__name__}' failed: {e}")
            raise
        except Exception as e:
            logger.error(
                f"Unhandled error in '{func.__name__}': {e}",
                exc_info=True
            )
            raise ImageTransferError(f"{func.__name__} failed: {e}") from e
    return wrapper  # type: ignore[return-value]


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """
    def __init__(self, operation_name: str = "Batch Operation"):
        self.operation_name = operation_name
        self.errors: List[Dict[str, str]] = []
        self.logger = component_logger("batch")

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                item_identifier = error_detail.get('item', 'Unknown item')
                error_message = error_detail.get('error', 'Unknown error')
                self.logger.error(
                    f"  Error {i+1}/{len(self.errors)} for item '{item_identifier}': {error_message}"
                )
        elif exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb)
            )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")

        # Never suppress exceptions raised inside the block
        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Call this method within the 'with' block to report an error for a specific item.

        Args:
            error_message (str): The error message or exception string.
            item_identifier (str): A string identifying the item that failed (e.g. an image reference).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}")
