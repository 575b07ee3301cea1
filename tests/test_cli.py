"""Command-line interface tests."""

import json

import pytest
from click.testing import CliRunner

from passguard.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def candidates_file(tmp_path):
    path = tmp_path / "candidates.txt"
    path.write_text("Fixia2024Secure!\n\nPassword123!\n", encoding="utf-8")
    return path


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_score(runner):
    result = runner.invoke(cli, ["-q", "score", "Fixia2024Secure!"], obj={})
    assert result.exit_code == 0
    assert result.output.strip() == "70 Fuerte"


def test_check_compliant(runner):
    result = runner.invoke(cli, ["-q", "check", "Fixia2024Secure!"], obj={})
    assert result.exit_code == 0


def test_check_non_compliant_exits_one(runner):
    result = runner.invoke(cli, ["-q", "check", "Password123!"], obj={})
    assert result.exit_code == 1


def test_check_console_output(runner):
    result = runner.invoke(cli, ["check", "Password123!"], obj={})
    assert result.exit_code == 1
    assert "PassGuard" in result.output
    assert "Requisitos no cumplidos" in result.output
    assert "common_password" in result.output
    assert "Password123!" not in result.output


def test_check_json_to_stdout(runner):
    result = runner.invoke(cli, ["-o", "json", "check", "Password123!"], obj={})
    assert result.exit_code == 1
    data = json.loads(result.output)
    assert data["report_metadata"]["tool"] == "passguard"
    assert data["metadata"]["checked"] == 1
    assert data["metadata"]["compliant"] == 0
    assert "common_password" in [f["rule_id"] for f in data["findings"]]
    assert "Password123!" not in result.output


def test_batch_json_to_file(runner, candidates_file, tmp_path):
    out = tmp_path / "reports" / "batch.json"
    result = runner.invoke(
        cli,
        ["-o", "json", "-f", str(out), "batch", str(candidates_file)],
        obj={},
    )
    assert result.exit_code == 1

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["metadata"]["checked"] == 2
    assert data["metadata"]["compliant"] == 1
    assert data["summary"]["description"] == "1/2 contraseñas cumplen la política"
    assert "Password123!" not in out.read_text(encoding="utf-8")


def test_batch_all_compliant(runner, tmp_path):
    path = tmp_path / "good.txt"
    path.write_text("Fixia2024Secure!\nMyApp#2024Strong\n", encoding="utf-8")
    result = runner.invoke(cli, ["-q", "batch", str(path)], obj={})
    assert result.exit_code == 0


def test_config_option(runner, write_config):
    path = write_config("[policy]\nmin_length = 20\n")
    result = runner.invoke(
        cli, ["-q", "-c", str(path), "check", "Fixia2024Secure!"], obj={}
    )
    assert result.exit_code == 1


def test_missing_config_is_a_usage_error(runner, tmp_path):
    result = runner.invoke(
        cli, ["-c", str(tmp_path / "nope.toml"), "score", "x"], obj={}
    )
    assert result.exit_code == 2


def test_invalid_config_is_a_usage_error(runner, write_config):
    path = write_config("[policy]\nmin_length = 200\n")
    result = runner.invoke(cli, ["-c", str(path), "score", "x"], obj={})
    assert result.exit_code == 2
    assert "Configuración inválida" in result.output


def test_wrongly_typed_config_is_a_usage_error(runner, write_config):
    path = write_config('[policy]\nmin_length = "12"\n')
    result = runner.invoke(cli, ["-c", str(path), "score", "x"], obj={})
    assert result.exit_code == 2
    assert "min_length" in result.output


def test_project_config_applies_without_option(runner, project_config_path):
    project_config_path.parent.mkdir(parents=True)
    project_config_path.write_text("[policy]\nmin_length = 20\n", encoding="utf-8")
    result = runner.invoke(cli, ["-q", "check", "Fixia2024Secure!"], obj={})
    assert result.exit_code == 1
