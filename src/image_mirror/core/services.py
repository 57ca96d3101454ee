"""Service implementations for the image mirror pipeline."""

import json
import time
from typing import Callable, List

from .engine import ContainerEngine
from .error_handling import BatchOperationContextManager
from .models import BatchReport, ImageDescriptor, ImageOutcome, MirrorConfig
from .observability import LogContext
from .protocols import (
    BatchMirror,
    LoggerProtocol,
    MirrorService,
    OutputSinkProtocol,
)
from .validation import load_descriptors


def _error_message(error: Exception) -> str:
    return str(error) or error.__class__.__name__


class ImageMirrorService(MirrorService):
    """Pulls, retags, pushes and inspects a single image."""

    def __init__(self, engine: ContainerEngine, logger: LoggerProtocol):
        self._engine = engine
        self._logger = logger

    def mirror_image(self, descriptor: ImageDescriptor) -> ImageOutcome:
        """Mirror one image; every failure is returned as a failed outcome."""
        source = descriptor.source
        destination = descriptor.destination
        log_context = LogContext(
            correlation_id=f"img_{source}_{int(time.time() * 1000)}",
            operation="mirror_image",
            component="image_mirror_service",
        ).with_metadata(
            source=source,
            destination=destination,
            architecture=descriptor.architecture,
        )

        try:
            self._logger.info(
                f"Pulling source image: {source} ({descriptor.architecture})"
            )
            self._engine.pull(source, descriptor.architecture)

            self._logger.info(f"Tagging image as: {destination}")
            self._engine.tag(source, destination)

            self._logger.info(f"Pushing to destination registry: {destination}")
            self._engine.push(destination)
        except Exception as e:
            error_context = log_context.with_metadata(error=_error_message(e))
            self._logger.error(
                f"Failed to mirror {source} -> {destination}: {_error_message(e)}",
                error_context,
            )
            return ImageOutcome.failed(descriptor, _error_message(e))

        inspect_context = log_context.with_operation("inspect_image")
        digest = self._inspect(destination, "digest", self._engine.digest, inspect_context)
        size = self._inspect(destination, "size", self._engine.size, inspect_context)

        self._logger.info(f"Successfully mirrored: {source} -> {destination}")
        return ImageOutcome.succeeded(descriptor, digest=digest, size=size)

    def _inspect(
        self,
        image: str,
        field_name: str,
        query: Callable[[str], str],
        context: LogContext,
    ) -> str:
        # Enrichment only: a failed inspect never fails the image
        try:
            value = query(image)
        except Exception as e:
            self._logger.warning(
                f"Could not retrieve image {field_name}: {_error_message(e)}", context
            )
            return ""
        self._logger.debug(f"Image {field_name}: {value}", context)
        return value


class SerialBatchMirror(BatchMirror):
    """Mirrors images strictly one after another, in input order."""

    def __init__(self, mirror_service: MirrorService, logger: LoggerProtocol):
        self._mirror_service = mirror_service
        self._logger = logger

    def mirror_batch(self, descriptors: List[ImageDescriptor]) -> BatchReport:
        """Fold every descriptor into a report, one outcome each."""
        report = BatchReport()
        total = len(descriptors)

        with BatchOperationContextManager("Image mirror batch") as batch:
            for position, descriptor in enumerate(descriptors, start=1):
                self._logger.info(
                    f"--- Processing image {position}/{total}: "
                    f"{descriptor.source} -> {descriptor.destination} "
                    f"({descriptor.architecture}) ---"
                )
                outcome = self._mirror_one(descriptor)
                if not outcome.success:
                    batch.add_error(
                        outcome.error or "",
                        f"{descriptor.source} -> {descriptor.destination}",
                    )
                report = report.with_outcome(outcome)

        return report

    def _mirror_one(self, descriptor: ImageDescriptor) -> ImageOutcome:
        try:
            return self._mirror_service.mirror_image(descriptor)
        except Exception as e:  # noqa: BLE001
            self._logger.error(
                f"Unexpected error mirroring {descriptor.source}: {_error_message(e)}"
            )
            return ImageOutcome.failed(descriptor, _error_message(e))


class ResultReporter:
    """Publishes batch outputs and the overall pass/fail signal."""

    def __init__(self, sink: OutputSinkProtocol, logger: LoggerProtocol):
        self._sink = sink
        self._logger = logger

    def report(self, report: BatchReport) -> bool:
        """Write outputs, then return whether every image was mirrored."""
        results = [outcome.to_output() for outcome in report.outcomes]
        self._sink.set_output("results", json.dumps(results))
        self._sink.set_output("success-count", str(report.success_count))
        self._sink.set_output("total-count", str(report.total_count))

        if report.all_succeeded:
            self._logger.info(
                f"All {report.total_count} image(s) mirrored successfully!"
            )
            return True

        self._logger.error(
            f"{report.success_count}/{report.total_count} image(s) mirrored successfully"
        )
        self._sink.set_failed(
            f"Failed to sync {report.failed_count} out of {report.total_count} image(s)"
        )
        return False


class MirrorOrchestrator:
    """Main orchestrator for a mirror run."""

    def __init__(
        self,
        batch_mirror: BatchMirror,
        reporter: ResultReporter,
        logger: LoggerProtocol,
    ):
        self._batch_mirror = batch_mirror
        self._reporter = reporter
        self._logger = logger

    def run(self, config: MirrorConfig) -> BatchReport:
        """
        Validate the requested images, mirror them and publish the report.

        Raises:
            ConfigurationError: Before any image is touched, if the inputs
                are invalid.
        """
        descriptors = load_descriptors(
            config.images, config.images_file, logger=self._logger
        )

        self._logger.info(f"Starting mirror process for {len(descriptors)} image(s)")
        report = self._batch_mirror.mirror_batch(descriptors)
        self._reporter.report(report)
        return report
