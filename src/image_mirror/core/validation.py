"""Loading and validation of the requested image list."""

import json
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import ImageDescriptor
from .protocols import LoggerProtocol

MISSING_FIELDS_MESSAGE = (
    'Each image mapping must have "source", "destination", and "architecture" properties'
)


def coerce_to_list(value: Any) -> List[Any]:
    """Treat a single decoded value as a one-element list."""
    if isinstance(value, list):
        return value
    return [value]


def _read_channel(
    images: Optional[str],
    images_file: Optional[str],
    logger: Optional[LoggerProtocol],
) -> Any:
    if images:
        return json.loads(images)

    if logger is not None:
        logger.info(f"Reading images from file: {images_file}")
    content = Path(images_file).read_text(encoding="utf-8")
    return json.loads(content)


def parse_descriptors(raw: List[Any]) -> List[ImageDescriptor]:
    """Validate every element before any of them is used."""
    descriptors = []
    for item in raw:
        if not isinstance(item, dict):
            raise ConfigurationError(MISSING_FIELDS_MESSAGE)
        try:
            descriptors.append(ImageDescriptor.model_validate(item))
        except ValidationError as e:
            raise ConfigurationError(MISSING_FIELDS_MESSAGE) from e
    return descriptors


def load_descriptors(
    images: Optional[str] = None,
    images_file: Optional[str] = None,
    logger: Optional[LoggerProtocol] = None,
) -> List[ImageDescriptor]:
    """
    Load the image list from exactly one of the two input channels.

    Args:
        images: Inline JSON array or object.
        images_file: Path to a file holding the same JSON shape.
        logger: Receives progress messages, if given.

    Returns:
        Validated descriptors in input order.

    Raises:
        ConfigurationError: If zero or both channels are given, the content
            cannot be parsed, or an entry is missing a required field.
    """
    if not images and not images_file:
        raise ConfigurationError(
            'Either "images" or "images-file" input must be provided'
        )
    if images and images_file:
        raise ConfigurationError(
            'Only one of "images" or "images-file" inputs should be provided, not both'
        )

    try:
        raw = coerce_to_list(_read_channel(images, images_file, logger))
    except (ValueError, OSError) as e:
        channel = "images input" if images else f"images file: {images_file}"
        raise ConfigurationError(
            f"Invalid images format in {channel}. Expected JSON array or object: {e}"
        ) from e

    return parse_descriptors(raw)
