"""Step outputs for the invoking CI environment."""

import os
import sys
import uuid
from typing import Dict, Optional, TextIO


def escape_data(value: str) -> str:
    """Escape a workflow-command message so it stays on one line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow-command property value."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class GitHubOutputSink:
    """
    Publishes outputs using the GitHub Actions step protocol.

    When ``GITHUB_OUTPUT`` points to a file, outputs are appended to it as
    delimited blocks so multi-line values survive. Otherwise the legacy
    ``::set-output`` workflow command is printed.
    """

    def __init__(
        self, output_path: Optional[str] = None, stream: Optional[TextIO] = None
    ):
        if output_path is None:
            output_path = os.getenv("GITHUB_OUTPUT") or None
        self._output_path = output_path
        self._stream = stream
        self.outputs: Dict[str, str] = {}
        self.failure_message: Optional[str] = None

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    @property
    def failed(self) -> bool:
        return self.failure_message is not None

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        if self._output_path:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            with open(self._output_path, "a", encoding="utf-8") as handle:
                handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            print(
                f"::set-output name={escape_property(name)}::{escape_data(value)}",
                file=self.stream,
            )

    def set_failed(self, message: str) -> None:
        self.failure_message = message
        print(f"::error::{escape_data(message)}", file=self.stream)
