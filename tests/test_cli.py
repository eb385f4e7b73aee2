"""
Tests for the task-graph command line.
"""

import json

import pytest
from click.testing import CliRunner

from taskgraph import __version__
from taskgraph.cli.main import apply_overrides, cli, describe_error, image_path
from taskgraph.config import Config
from taskgraph.dot import RenderError
from taskgraph.dot import renderer

TASKFILE = """\
version: '3'
tasks:
  build:
    desc: Build the project
    deps: [generate]
    cmds:
      - task: docs:build
  generate: echo generate
  docs:build: echo docs
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def taskfile(tmp_path):
    path = tmp_path / "Taskfile.yml"
    path.write_text(TASKFILE, encoding="utf-8")
    return path


class TestCli:
    """Test end to end runs."""

    def test_writes_dot_file(self, runner, taskfile, tmp_path):
        """Test the DOT file is written with nodes and styled edges."""
        output = tmp_path / "graph.dot"

        result = runner.invoke(cli, [str(taskfile), "--output", str(output)])

        assert result.exit_code == 0, result.output
        dot = output.read_text(encoding="utf-8")
        assert dot.startswith("digraph {\n")
        assert 'label="{build | Build the project}"' in dot
        assert '  "build" -> "generate" [\n    color="black"' in dot
        assert '  "build" -> "docs:build" [\n    color="blue"' in dot
        assert "subgraph" not in dot

    def test_directory_argument(self, runner, taskfile, tmp_path):
        """Test a directory holding a Taskfile is accepted."""
        output = tmp_path / "graph.dot"

        result = runner.invoke(cli, [str(tmp_path), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_group_by_namespace_flag(self, runner, taskfile, tmp_path):
        """Test the flag turns on namespace clusters."""
        output = tmp_path / "graph.dot"

        result = runner.invoke(cli, [str(taskfile), "-o", str(output), "--group-by-namespace"])

        assert result.exit_code == 0, result.output
        assert "subgraph cluster_docs {" in output.read_text(encoding="utf-8")

    def test_config_file_and_highlight(self, runner, taskfile, tmp_path):
        """Test config values apply and highlights use the configured color."""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"graphviz": {"highlightColor": "pink", "font": "Arial"}}))
        output = tmp_path / "graph.dot"

        result = runner.invoke(cli, [
            str(taskfile), "-o", str(output), "-c", str(config), "--highlight", "gen*",
        ])

        assert result.exit_code == 0, result.output
        dot = output.read_text(encoding="utf-8")
        assert 'fontname="Arial"' in dot
        assert 'fillcolor="pink"' in dot

    def test_export_config(self, runner, taskfile, tmp_path):
        """Test the effective configuration is exported."""
        output = tmp_path / "graph.dot"
        exported = tmp_path / "effective.json"

        result = runner.invoke(cli, [
            str(taskfile), "-o", str(output), "--group-by-namespace",
            "--highlight", "build", "--export-config", str(exported),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(exported.read_text(encoding="utf-8"))
        assert data["groupByNamespace"] is True
        assert data["graphviz"]["styleRules"] == [
            {"match": "build", "fillColor": "yellow", "style": "filled"}
        ]

    def test_render_image(self, runner, taskfile, tmp_path, monkeypatch):
        """Test the image is rendered next to the DOT file."""
        calls = []
        monkeypatch.setattr(renderer, "find_executable", lambda dot_path: "/usr/bin/dot")
        monkeypatch.setattr(renderer, "render_image", lambda *args: calls.append(args))
        output = tmp_path / "graph.dot"

        result = runner.invoke(cli, [str(taskfile), "-o", str(output), "--render-image", "svg"])

        assert result.exit_code == 0, result.output
        assert calls == [("/usr/bin/dot", str(output), str(tmp_path / "graph.svg"), "svg")]

    def test_render_failure_exits_with_error(self, runner, taskfile, tmp_path, monkeypatch):
        """Test render errors are reported and exit 1."""
        def fail(dot_path):
            raise RenderError("dot executable not found on PATH")

        monkeypatch.setattr(renderer, "find_executable", fail)

        result = runner.invoke(cli, [str(taskfile), "-o", str(tmp_path / "g.dot"), "--render-image", "png"])

        assert result.exit_code == 1
        assert "dot executable not found on PATH" in result.output

    def test_missing_taskfile(self, runner, tmp_path):
        """Test a missing Taskfile exits 1 without writing output."""
        output = tmp_path / "graph.dot"

        result = runner.invoke(cli, [str(tmp_path / "nope.yml"), "-o", str(output)])

        assert result.exit_code == 1
        assert "Taskfile not found" in result.output
        assert not output.exists()

    def test_invalid_config(self, runner, taskfile, tmp_path):
        """Test an invalid config file exits 1."""
        config = tmp_path / "config.yaml"
        config.write_text("groupByNamespace: maybe\n")

        result = runner.invoke(cli, [str(taskfile), "-o", str(tmp_path / "g.dot"), "-c", str(config)])

        assert result.exit_code == 1
        assert "invalid config file" in result.output

    def test_output_required(self, runner, taskfile):
        """Test --output must be given."""
        result = runner.invoke(cli, [str(taskfile)])

        assert result.exit_code == 2

    def test_version(self, runner):
        """Test --version prints the package version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestHelpers:
    """Test CLI helper functions."""

    def test_apply_overrides(self):
        """Test flags and highlights are applied on top of config."""
        config = apply_overrides(Config(), group_by_namespace=True, highlight=["a*", "b"])

        assert config.group_by_namespace is True
        assert [r.match for r in config.graphviz.style_rules] == ["a*", "b"]

    def test_apply_overrides_leaves_config_alone(self):
        """Test no flags means no changes."""
        config = Config(group_by_namespace=True)

        apply_overrides(config)

        assert config == Config(group_by_namespace=True)

    @pytest.mark.parametrize("output, file_type, expected", [
        ("graph.dot", "png", "graph.png"),
        ("out/graph.gv", "svg", "out/graph.svg"),
        ("graph", "pdf", "graph.pdf"),
    ])
    def test_image_path(self, output, file_type, expected):
        """Test the output extension is replaced by the image type."""
        assert image_path(output, file_type) == expected

    def test_describe_error_includes_causes(self):
        """Test chained errors are described outermost first."""
        try:
            try:
                raise OSError("disk full")
            except OSError as e:
                raise RenderError("failed to render") from e
        except RenderError as e:
            assert describe_error(e) == "failed to render: disk full"
