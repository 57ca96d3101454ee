"""Testing utilities and fakes for the image mirror."""

from .fakes import (
    FakeCommandRunner,
    FakeLogger,
    FakeOutputSink,
    RemoteImage,
    repository_of,
    setup_test_registry,
)

__all__ = [
    "FakeCommandRunner",
    "FakeLogger",
    "FakeOutputSink",
    "RemoteImage",
    "repository_of",
    "setup_test_registry",
]
