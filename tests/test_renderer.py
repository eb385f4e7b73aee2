"""
Tests for locating and running Graphviz dot.
"""

import subprocess

import pytest

from taskgraph.dot import RenderError, find_executable, render_image
from taskgraph.dot import renderer


class TestFindExecutable:
    """Test locating the dot executable."""

    def test_empty_path_searches_path(self, monkeypatch):
        """Test dot is looked up on PATH by default."""
        monkeypatch.setattr(renderer.shutil, "which", lambda name: f"/usr/bin/{name}")

        assert find_executable("") == "/usr/bin/dot"

    def test_not_on_path(self, monkeypatch):
        """Test a missing dot is reported."""
        monkeypatch.setattr(renderer.shutil, "which", lambda name: None)

        with pytest.raises(RenderError, match="not found on PATH"):
            find_executable()

    def test_file_returned_as_is(self, tmp_path):
        """Test a path to a file is used directly."""
        dot = tmp_path / "my-dot"
        dot.write_text("")

        assert find_executable(str(dot)) == str(dot)

    def test_directory_containing_dot(self, tmp_path):
        """Test dot is found inside a directory."""
        (tmp_path / "dot").write_text("")

        assert find_executable(str(tmp_path)) == str(tmp_path / "dot")

    def test_directory_containing_dot_exe(self, tmp_path):
        """Test dot.exe is found inside a directory."""
        (tmp_path / "dot.exe").write_text("")

        assert find_executable(str(tmp_path)) == str(tmp_path / "dot.exe")

    def test_directory_without_dot(self, tmp_path):
        """Test a directory with no dot is reported."""
        with pytest.raises(RenderError, match="not found in directory"):
            find_executable(str(tmp_path))

    def test_missing_path(self, tmp_path):
        """Test a configured path that does not exist."""
        with pytest.raises(RenderError, match="dotPath not found"):
            find_executable(str(tmp_path / "nope"))


class TestRenderImage:
    """Test running dot."""

    def test_runs_dot_with_type_and_output(self, monkeypatch):
        """Test the command line passed to dot."""
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr(renderer.subprocess, "run", fake_run)

        render_image("/usr/bin/dot", "graph.dot", "graph.png", "png", timeout=30)

        cmd, kwargs = calls[0]
        assert cmd == ["/usr/bin/dot", "-Tpng", "graph.dot", "-o", "graph.png"]
        assert kwargs["timeout"] == 30

    def test_failure_includes_output(self, monkeypatch):
        """Test a non-zero exit is reported with dot's output."""
        monkeypatch.setattr(
            renderer.subprocess, "run",
            lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 1, stdout="", stderr="syntax error in line 3")
        )

        with pytest.raises(RenderError, match="syntax error in line 3"):
            render_image("dot", "graph.dot", "graph.png", "png")

    def test_timeout(self, monkeypatch):
        """Test a timeout is reported."""
        def fake_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

        monkeypatch.setattr(renderer.subprocess, "run", fake_run)

        with pytest.raises(RenderError, match="timed out"):
            render_image("dot", "graph.dot", "graph.png", "png", timeout=1)

    def test_missing_executable(self, tmp_path):
        """Test an executable that cannot be started."""
        with pytest.raises(RenderError, match="failed to run dot command"):
            render_image(str(tmp_path / "no-such-dot"), "graph.dot", "graph.png", "png")
