"""Container engine adapter over an injected command runner."""

import subprocess
from typing import List, Sequence

from .error_handling import with_error_handling
from .exceptions import EngineCommandError
from .protocols import CommandResult, CommandRunnerProtocol

DIGEST_FORMAT = "{{index .RepoDigests 0}}"
SIZE_FORMAT = "{{.Size}}"


class SubprocessCommandRunner:
    """Runs commands as blocking child processes."""

    def run(self, cmd: str, args: Sequence[str]) -> CommandResult:
        try:
            completed = subprocess.run(
                [cmd, *args],
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise EngineCommandError(
                f"Unable to run '{cmd}': {e}", command=[cmd, *args]
            ) from e

        return CommandResult(
            stdout=completed.stdout or "",
            exit_code=completed.returncode,
            stderr=completed.stderr or "",
        )


class ContainerEngine:
    """Thin wrapper issuing pull/tag/push/inspect to a container engine CLI."""

    def __init__(self, runner: CommandRunnerProtocol, executable: str = "docker"):
        self._runner = runner
        self._executable = executable

    @property
    def executable(self) -> str:
        return self._executable

    def _exec(self, args: List[str]) -> CommandResult:
        result = self._runner.run(self._executable, args)
        if result.exit_code != 0:
            command = " ".join([self._executable, *args])
            message = f"Command '{command}' failed with exit code {result.exit_code}"
            detail = _last_line(result.stderr)
            if detail:
                message = f"{message}: {detail}"
            raise EngineCommandError(
                message, command=[self._executable, *args], exit_code=result.exit_code
            )
        return result

    @with_error_handling
    def pull(self, image: str, platform: str) -> None:
        """Pull ``image`` restricted to ``platform``."""
        self._exec(["pull", "--platform", platform, image])

    @with_error_handling
    def tag(self, source: str, destination: str) -> None:
        self._exec(["tag", source, destination])

    @with_error_handling
    def push(self, image: str) -> None:
        self._exec(["push", image])

    @with_error_handling
    def inspect(self, image: str, format_template: str) -> str:
        """Return the trimmed output of ``inspect --format=<template>``."""
        result = self._exec(["inspect", f"--format={format_template}", image])
        return result.stdout.strip()

    def digest(self, image: str) -> str:
        return self.inspect(image, DIGEST_FORMAT)

    def size(self, image: str) -> str:
        return self.inspect(image, SIZE_FORMAT)


def _last_line(text: str) -> str:
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    return lines[-1] if lines else ""
