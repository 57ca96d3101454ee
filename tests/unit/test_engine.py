"""Unit tests for the container engine adapter."""

import subprocess

import pytest
from unittest.mock import patch

from image_mirror.core.engine import (
    DIGEST_FORMAT,
    SIZE_FORMAT,
    ContainerEngine,
    SubprocessCommandRunner,
)
from image_mirror.core.exceptions import EngineCommandError, ImageTransferError
from image_mirror.core.protocols import CommandResult
from image_mirror.testing.fakes import FakeCommandRunner, setup_test_registry


class TestSubprocessCommandRunner:
    """Tests for SubprocessCommandRunner."""

    @patch("image_mirror.core.engine.subprocess.run")
    def test_run_captures_output(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["docker", "inspect"], returncode=0, stdout="out\n", stderr=""
        )

        result = SubprocessCommandRunner().run("docker", ["inspect", "img"])

        assert result == CommandResult(stdout="out\n", exit_code=0, stderr="")
        mock_run.assert_called_once_with(
            ["docker", "inspect", "img"],
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )

    @patch("image_mirror.core.engine.subprocess.run")
    def test_run_reports_non_zero_exit(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["docker", "pull"], returncode=1, stdout=None, stderr="denied\n"
        )

        result = SubprocessCommandRunner().run("docker", ["pull", "img"])

        assert result.exit_code == 1
        assert result.stdout == ""
        assert result.stderr == "denied\n"

    @patch("image_mirror.core.engine.subprocess.run")
    def test_run_replaces_undecodable_output(self, mock_run):
        """Test engine output that is not valid UTF-8 does not fail the command."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=["docker", "pull"], returncode=0, stdout="layer \ufffd done\n", stderr=""
        )

        result = SubprocessCommandRunner().run("docker", ["pull", "img"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["errors"] == "replace"

    @patch("image_mirror.core.engine.subprocess.run")
    def test_run_missing_executable(self, mock_run):
        """Test a missing engine binary becomes an EngineCommandError."""
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory")

        with pytest.raises(EngineCommandError, match="Unable to run 'docker'"):
            SubprocessCommandRunner().run("docker", ["pull", "img"])


class TestContainerEngine:
    """Tests for ContainerEngine."""

    def test_pull_passes_platform(self):
        runner = setup_test_registry()
        engine = ContainerEngine(runner)

        engine.pull("alpine:3.19", "linux/arm64")

        assert runner.calls == [
            ["docker", "pull", "--platform", "linux/arm64", "alpine:3.19"]
        ]

    def test_non_zero_exit_raises(self):
        """Test the error carries the command, exit code and stderr detail."""
        runner = FakeCommandRunner()
        runner.fail_command("push", stderr="first line\nunauthorized: authentication required\n", exit_code=2)
        engine = ContainerEngine(runner)

        with pytest.raises(EngineCommandError) as excinfo:
            engine.push("registry.local/app:1")

        error = excinfo.value
        assert str(error) == (
            "Command 'docker push registry.local/app:1' failed with exit code 2: "
            "unauthorized: authentication required"
        )
        assert error.exit_code == 2
        assert error.command == ["docker", "push", "registry.local/app:1"]

    def test_non_zero_exit_without_stderr(self):
        runner = FakeCommandRunner()
        runner.fail_command("tag", stderr="")
        engine = ContainerEngine(runner)

        with pytest.raises(EngineCommandError) as excinfo:
            engine.tag("a:1", "b:1")

        assert str(excinfo.value) == "Command 'docker tag a:1 b:1' failed with exit code 1"

    def test_unexpected_runner_error_is_wrapped(self):
        """Test errors outside the mirror hierarchy become ImageTransferError."""
        runner = FakeCommandRunner()
        runner.set_failure_mode(True, "socket closed")
        engine = ContainerEngine(runner)

        with pytest.raises(ImageTransferError, match="pull failed: socket closed"):
            engine.pull("a:1", "linux/amd64")

    def test_inspect_trims_output(self):
        runner = setup_test_registry()
        engine = ContainerEngine(runner)
        engine.pull("alpine:3.19", "linux/amd64")
        engine.tag("alpine:3.19", "registry.local/alpine:3.19")
        engine.push("registry.local/alpine:3.19")

        digest = engine.digest("registry.local/alpine:3.19")
        size = engine.size("registry.local/alpine:3.19")

        assert digest == f"registry.local/alpine@{runner.registry['alpine:3.19'].digest}"
        assert size == "7380000"
        assert runner.calls[-2][2] == f"--format={DIGEST_FORMAT}"
        assert runner.calls[-1][2] == f"--format={SIZE_FORMAT}"

    def test_inspect_unknown_image_raises(self):
        engine = ContainerEngine(FakeCommandRunner())

        with pytest.raises(EngineCommandError, match="No such object"):
            engine.size("nothing:1")
