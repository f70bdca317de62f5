"""Tests for the click command surface."""

import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from dep_sanitizer.cli import cli

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def workspace(tmp_path):
    root = tmp_path / "repo"
    shutil.copytree(FIXTURES / "workspace", root)
    return root


@pytest.fixture
def run(workspace):
    runner = CliRunner()

    def invoke(*args, report=FIXTURES / "deps.json"):
        return runner.invoke(cli, ["--root", str(workspace), "--report-file", str(report), *args])

    return invoke


def test_unused_show(run):
    result = run("unused", "show")
    assert result.exit_code == 0, result.output
    assert "src/scala/core:core" in result.output
    assert "  src/scala/legacy:legacy" in result.output
    assert "3rdparty/jvm:cats" not in result.output
    assert "modules affected: 2, total dependencies unused: 3" in result.output


def test_undeclared_show_with_prefix(run):
    result = run("--prefix", "src/scala/models", "undeclared", "show")
    assert result.exit_code == 0, result.output
    assert "src/scala/core:core" not in result.output
    assert "modules affected: 1, total dependencies undeclared: 1" in result.output


def test_unused_fix(run, workspace):
    result = run("unused", "fix")
    assert result.exit_code == 0, result.output
    assert "src/scala/core:core removed: 1" in result.output
    assert "src/scala/models:proto removed: 1" in result.output
    assert "total dependencies removed: 2" in result.output
    assert "legacy" not in (workspace / "src/scala/core/BUILD").read_text()


def test_undeclared_fix(run, workspace):
    result = run("undeclared", "fix")
    assert result.exit_code == 0, result.output
    assert "src/scala/core:core added: 1" in result.output
    assert "'src/scala/io'," in (workspace / "src/scala/core/BUILD").read_text()


def test_skip_marker_option(run, workspace):
    build = workspace / "src/scala/core/BUILD"
    build.write_text(build.read_text().replace(
        "'src/scala/legacy:legacy',", "'src/scala/legacy:legacy',  # keep",
    ))
    result = run("--skip-marker", "# keep", "unused", "fix")
    assert result.exit_code == 0, result.output
    # The default marker no longer protects models:json
    assert "src/scala/core:core removed: 1" in result.output
    assert "'src/scala/legacy:legacy',  # keep" in build.read_text()
    assert "src/scala/models:json" not in build.read_text()


def test_sort(run, workspace):
    result = run("sort")
    assert result.exit_code == 0, result.output
    assert f"sorted {workspace / 'src/scala/core/BUILD'}" in result.output
    assert "files sorted: 3, files changed: 2" in result.output


def test_missing_report_is_fatal(run, tmp_path):
    result = run("unused", "show", report=tmp_path / "nope.json")
    assert result.exit_code == 1
    assert "Couldn't open the report file" in result.output


def test_missing_build_file_is_fatal(run, workspace):
    (workspace / "src/scala/core/BUILD").unlink()
    result = run("unused", "fix")
    assert result.exit_code == 1
    assert "Couldn't access BUILD file" in result.output


def test_keep_going_reports_failures(run, workspace):
    (workspace / "src/scala/core/BUILD").unlink()
    result = run("--keep-going", "unused", "fix")
    assert result.exit_code == 1
    assert "src/scala/core:core failed" in result.output
    assert "src/scala/models:proto removed: 1" in result.output
    assert "1 module(s) could not be fixed" in result.output


def test_report_file_from_environment(workspace):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--root", str(workspace), "unused", "show"],
        auto_envvar_prefix="DEP_SANITIZER",
        env={"DEP_SANITIZER_REPORT_FILE": str(FIXTURES / "deps.json")},
    )
    assert result.exit_code == 0, result.output
    assert "total dependencies unused: 3" in result.output
