"""Factory classes for creating configured service instances."""

from typing import Optional

from .engine import ContainerEngine, SubprocessCommandRunner
from .observability import StructuredLogger
from .outputs import GitHubOutputSink
from .protocols import CommandRunnerProtocol, LoggerProtocol, OutputSinkProtocol
from .services import (
    ImageMirrorService,
    MirrorOrchestrator,
    ResultReporter,
    SerialBatchMirror,
)


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(
        name: str = "image-mirror", level: Optional[str] = None
    ) -> LoggerProtocol:
        """Create a context-aware logger on top of the shared configuration."""
        return StructuredLogger(name, level)


class MirrorPipelineFactory:
    """Factory for creating the complete mirror pipeline."""

    @staticmethod
    def create_pipeline(
        runner: Optional[CommandRunnerProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        sink: Optional[OutputSinkProtocol] = None,
        engine: str = "docker",
    ) -> MirrorOrchestrator:
        """Create a fully configured mirror pipeline."""
        if runner is None:
            runner = SubprocessCommandRunner()

        if logger is None:
            logger = LoggerFactory.create_logger()

        if sink is None:
            sink = GitHubOutputSink()

        container_engine = ContainerEngine(runner, executable=engine)
        mirror_service = ImageMirrorService(container_engine, logger)
        batch_mirror = SerialBatchMirror(mirror_service, logger)
        reporter = ResultReporter(sink, logger)

        return MirrorOrchestrator(
            batch_mirror=batch_mirror,
            reporter=reporter,
            logger=logger,
        )
