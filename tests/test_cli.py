"""Tests for the command line interface"""

import json

import pytest
from click.testing import CliRunner

from calculator import calculate_fields
from main import cli
from project import Project, save_project


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project_file(tmp_path, dipole_specs):
    project = Project.from_field_specs("dipole", 500.0, 500.0, dipole_specs)
    return save_project(project, tmp_path / "dipole.json")


def test_trace_writes_output_file(runner, project_file, tmp_path):
    output = tmp_path / "out" / "lines.json"
    result = runner.invoke(cli, ["trace", str(project_file), "-o", str(output)])
    assert result.exit_code == 0, result.output

    traced = json.loads(output.read_text(encoding="utf-8"))
    fields_in = json.loads(project_file.read_text(encoding="utf-8"))["fields"]
    assert traced == calculate_fields(500.0, 500.0, fields_in)
    assert [len(field["lines"]) for field in traced] == [6, 6]


def test_trace_to_stdout(runner, project_file):
    result = runner.invoke(cli, ["trace", str(project_file)])
    assert result.exit_code == 0
    assert '"lines"' in result.output


def test_trace_missing_project(runner, tmp_path):
    result = runner.invoke(cli, ["trace", str(tmp_path / "nope.json")])
    assert result.exit_code != 0
    assert "file not found" in result.output


def test_trace_non_utf8_project(runner, tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    result = runner.invoke(cli, ["trace", str(path)])
    assert result.exit_code != 0
    assert "invalid project" in result.output
    assert isinstance(result.exception, SystemExit)


def test_debug_flag_and_log_file(runner, project_file, tmp_path):
    log_file = tmp_path / "logs" / "electrostat.log"
    result = runner.invoke(
        cli, ["--debug", "--log-file", str(log_file), "trace", str(project_file), "-o", str(tmp_path / "o.json")]
    )
    assert result.exit_code == 0
    assert "Charge 1 (Positive)" in log_file.read_text(encoding="utf-8")
