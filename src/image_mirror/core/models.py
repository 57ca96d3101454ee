"""Shared data models for the image mirror."""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MirrorConfig(BaseModel):
    """Configuration for a mirror run."""

    images: Optional[str] = None
    images_file: Optional[str] = None
    engine: str = "docker"
    debug: bool = False

    @field_validator("images", "images_file")
    @classmethod
    def _blank_is_unset(cls, value: Optional[str]) -> Optional[str]:
        # CI platforms pass unset inputs as empty strings
        if value is None or not value.strip():
            return None
        return value


class ImageDescriptor(BaseModel):
    """Represents one image to be mirrored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    source: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    architecture: str = Field(min_length=1)


class MirrorStatus(str, Enum):
    """Final status of a single mirror attempt."""

    SUCCESS = "success"
    FAILED = "failed"


class ImageOutcome(BaseModel):
    """Result of mirroring a single image."""

    model_config = ConfigDict(frozen=True)

    source: str
    destination: str
    digest: str = ""
    size: str = ""
    status: MirrorStatus
    error: Optional[str] = None

    @classmethod
    def succeeded(
        cls, descriptor: ImageDescriptor, digest: str = "", size: str = ""
    ) -> "ImageOutcome":
        return cls(
            source=descriptor.source,
            destination=descriptor.destination,
            digest=digest,
            size=size,
            status=MirrorStatus.SUCCESS,
        )

    @classmethod
    def failed(cls, descriptor: ImageDescriptor, error: str) -> "ImageOutcome":
        return cls(
            source=descriptor.source,
            destination=descriptor.destination,
            status=MirrorStatus.FAILED,
            error=error,
        )

    @property
    def success(self) -> bool:
        return self.status is MirrorStatus.SUCCESS

    def to_output(self) -> Dict[str, Any]:
        """Serializable form; ``error`` only appears on failed outcomes."""
        return self.model_dump(mode="json", exclude_none=True)


class BatchReport(BaseModel):
    """Ordered outcomes of a mirror batch."""

    model_config = ConfigDict(frozen=True)

    outcomes: Tuple[ImageOutcome, ...] = ()

    def with_outcome(self, outcome: ImageOutcome) -> "BatchReport":
        """Return a new report with ``outcome`` appended."""
        return BatchReport(outcomes=self.outcomes + (outcome,))

    @property
    def total_count(self) -> int:
        return len(self.outcomes)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed_count(self) -> int:
        return self.total_count - self.success_count

    @property
    def all_succeeded(self) -> bool:
        return self.success_count == self.total_count
