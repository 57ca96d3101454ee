#!/usr/bin/env python3
"""
Container Image Mirror CLI

Pulls images → Retags → Pushes to destination registry → Reports digests
Inputs may come from flags or from the CI step's INPUT_* environment.
"""

import os
import sys
import argparse
from typing import List, Optional

from .core import ConfigurationError, MirrorConfig, get_logger
from .core.factories import LoggerFactory, MirrorPipelineFactory
from .core.outputs import GitHubOutputSink
from .core.protocols import CommandRunnerProtocol, OutputSinkProtocol


def _env_input(name: str) -> str:
    """Read a step input the way CI runners export it (INPUT_<NAME>)."""
    key = f"INPUT_{name.upper()}"
    return os.getenv(key) or os.getenv(key.replace("-", "_")) or ""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for the image mirror.

    Flags take precedence; each one falls back to the matching step input
    from the environment.

    Returns:
        An `argparse.Namespace` object containing the parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Mirror container images between registries"
    )

    parser.add_argument(
        "--images",
        default=_env_input("images"),
        help="JSON array (or single object) of {source, destination, architecture}",
    )
    parser.add_argument(
        "--images-file",
        default=_env_input("images-file"),
        help="Path to a file containing the images JSON",
    )
    parser.add_argument(
        "--engine",
        default=_env_input("engine") or "docker",
        help="Container engine executable (default: docker)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def main(
    argv: Optional[List[str]] = None,
    runner: Optional[CommandRunnerProtocol] = None,
    sink: Optional[OutputSinkProtocol] = None,
) -> None:
    """
    Main entry point for the image mirror.

    Parses arguments, builds the pipeline and mirrors every requested image.
    Exits with status 1 when the inputs are invalid or any image failed.
    """
    logger = get_logger()
    if sink is None:
        sink = GitHubOutputSink()

    try:
        args = parse_args(argv)
        config = MirrorConfig(
            images=args.images,
            images_file=args.images_file,
            engine=args.engine,
            debug=args.debug,
        )

        pipeline = MirrorPipelineFactory.create_pipeline(
            runner=runner,
            logger=LoggerFactory.create_logger(level="DEBUG" if config.debug else None),
            sink=sink,
            engine=config.engine,
        )
        report = pipeline.run(config)

    except KeyboardInterrupt:
        logger.warning("Mirroring interrupted by user.")
        sys.exit(130)
    except ConfigurationError as e:
        logger.error(f"Action failed with error: {e}")
        sink.set_failed(f"Action failed with error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Mirroring failed: {e}", exc_info=True)
        sink.set_failed(f"Action failed with error: {e}")
        sys.exit(1)

    if not report.all_succeeded:
        sys.exit(1)


if __name__ == "__main__":
    main()
