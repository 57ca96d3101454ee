"""Main module for the image mirror CLI."""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .mirror_images import main as mirror_images_main


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the unified command-line interface of the image mirror.

    Handles the "mirror" and "version" commands. "mirror" forwards its
    options to `mirror_images.main`, which owns the full option set and the
    environment fallbacks.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="image-mirror",
        description="Image Mirror - copy container images between registries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Mirror a single image
  image-mirror mirror --images '{"source": "alpine:3.19", "destination": "registry.local/alpine:3.19", "architecture": "linux/amd64"}'

  # Mirror a list of images kept in a file
  image-mirror mirror --images-file images.json

  # Show version
  image-mirror version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    mirror_parser: argparse.ArgumentParser = subparsers.add_parser(
        "mirror", help="Mirror images from source to destination registries"
    )
    mirror_parser.add_argument("--images", default=None, help="Inline images JSON")
    mirror_parser.add_argument(
        "--images-file", default=None, help="Path to a file containing the images JSON"
    )
    mirror_parser.add_argument(
        "--engine", default=None, help="Container engine executable (default: docker)"
    )
    mirror_parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers.add_parser("version", help="Show version information")

    args: argparse.Namespace = parser.parse_args(argv)

    if args.command == "mirror":
        # Only forward what was given so the environment fallbacks still apply
        mirror_argv: List[str] = []
        if args.images is not None:
            mirror_argv.extend(["--images", args.images])
        if args.images_file is not None:
            mirror_argv.extend(["--images-file", args.images_file])
        if args.engine is not None:
            mirror_argv.extend(["--engine", args.engine])
        if args.debug:
            mirror_argv.append("--debug")

        mirror_images_main(mirror_argv)

    elif args.command == "version":
        print("Image Mirror CLI")
        print(f"Version {__version__}")
        print("Container image mirroring between registries")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
