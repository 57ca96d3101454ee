"""Unit tests for step outputs."""

import io
import os

from unittest.mock import patch

from image_mirror.core.outputs import GitHubOutputSink, escape_data, escape_property


class TestGitHubOutputSink:
    """Tests for GitHubOutputSink."""

    def test_set_output_appends_to_output_file(self, tmp_path):
        """Test outputs are written as delimited blocks."""
        output_file = tmp_path / "github_output"
        sink = GitHubOutputSink(output_path=str(output_file))

        sink.set_output("success-count", "2")
        sink.set_output("results", '[{"source": "a:1"}]')

        lines = output_file.read_text().splitlines()
        assert lines[0].startswith("success-count<<ghadelimiter_")
        assert lines[1] == "2"
        assert lines[2] == lines[0].split("<<", 1)[1]
        assert lines[3].startswith("results<<")
        assert lines[4] == '[{"source": "a:1"}]'
        assert sink.outputs == {"success-count": "2", "results": '[{"source": "a:1"}]'}

    def test_output_file_from_environment(self, tmp_path):
        output_file = tmp_path / "github_output"
        with patch.dict(os.environ, {"GITHUB_OUTPUT": str(output_file)}):
            sink = GitHubOutputSink()

        sink.set_output("total-count", "3")

        assert "total-count<<" in output_file.read_text()

    def test_set_output_without_file_prints_command(self):
        stream = io.StringIO()
        with patch.dict(os.environ, {"GITHUB_OUTPUT": ""}):
            sink = GitHubOutputSink(stream=stream)

        sink.set_output("total-count", "3")

        assert stream.getvalue() == "::set-output name=total-count::3\n"

    def test_set_failed(self):
        """Test failing the step prints an error command."""
        stream = io.StringIO()
        sink = GitHubOutputSink(output_path="", stream=stream)

        sink.set_failed("Failed to sync 1 out of 2 image(s)")

        assert sink.failed
        assert sink.failure_message == "Failed to sync 1 out of 2 image(s)"
        assert "::error::Failed to sync 1 out of 2 image(s)" in stream.getvalue()

    def test_set_failed_escapes_multiline_message(self):
        """Test a multi-line failure stays a single annotation."""
        stream = io.StringIO()
        sink = GitHubOutputSink(output_path="", stream=stream)

        sink.set_failed("line one\r\nline two 100%")

        assert stream.getvalue() == "::error::line one%0D%0Aline two 100%25\n"
        assert sink.failure_message == "line one\r\nline two 100%"

    def test_set_output_command_escapes_value(self):
        stream = io.StringIO()
        sink = GitHubOutputSink(output_path="", stream=stream)

        sink.set_output("results", "[\n  {}\n]")

        assert stream.getvalue() == "::set-output name=results::[%0A  {}%0A]\n"
        assert sink.outputs["results"] == "[\n  {}\n]"


class TestEscaping:
    def test_escape_data(self):
        assert escape_data("50%\nok\r") == "50%25%0Aok%0D"

    def test_escape_property(self):
        assert escape_property("a:b,c%") == "a%3Ab%2Cc%25"
