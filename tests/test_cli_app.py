"""
Tests for the phpdock command line interface.
"""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from phpdock.cli.app import app


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _config(workdir: Path, name: str, content: str) -> str:
    path = workdir / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_no_args_shows_help(runner):
    result = runner.invoke(app, [])

    assert "generate" in result.output
    assert "output" in result.output


def test_output_compose(runner, workdir):
    result = runner.invoke(
        app,
        ["output", "compose", "-d", "global_options.project_name=Shire", "-d", "mailhog=true"],
    )

    assert result.exit_code == 0, result.output
    assert "Generated on phpdocker.io" in result.stdout
    assert "    shire-mailhog:" in result.stdout
    assert "    shire-webserver:" in result.stdout


def test_output_compose_json(runner, workdir):
    result = runner.invoke(app, ["output", "compose", "--format", "json"])

    assert result.exit_code == 0, result.output
    payload = result.stdout[result.stdout.index("{") :]
    data = json.loads(payload)
    assert list(data["services"]) == ["ssmysite-webserver", "ssmysite-php-fpm"]
    assert data["version"] == "3.1"


def test_output_nginx(runner, workdir):
    result = runner.invoke(app, ["output", "nginx"])

    assert result.exit_code == 0, result.output
    assert "root /var/www/html/public;" in result.stdout


def test_generate_writes_files(runner, workdir):
    (workdir / "project.yaml").write_text(
        "mysql:\n"
        "  root_password: root\n"
        "  database_name: app\n"
        "  username: user\n"
        "  password: secret\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["generate", "--output-dir", "out"])

    assert result.exit_code == 0, result.output
    compose = yaml.safe_load((workdir / "out/docker-compose.yml").read_text("utf-8"))
    assert compose["services"]["ssmysite-mysql"]["ports"] == ["8082:3306"]
    assert (workdir / "out/.docker/nginx/nginx.conf").exists()


def test_generate_uses_app_config(runner, workdir):
    config = _config(
        workdir,
        "app-config.yaml",
        "output_dir: generated\n"
        "php_ini_location: php/custom.ini\n"
        "data:\n"
        "  global_options:\n"
        "    project_name: Mordor\n",
    )

    result = runner.invoke(app, ["-c", config, "generate"])

    assert result.exit_code == 0, result.output
    contents = (workdir / "generated/docker-compose.yml").read_text("utf-8")
    assert "    mordor-php-fpm:" in contents
    assert "./.docker/php/custom.ini:/etc/php/8.3/fpm/conf.d/99-overrides.ini" in contents


def test_generate_dry_run(runner, workdir):
    result = runner.invoke(app, ["generate", "--output-dir", "out", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert not (workdir / "out").exists()


def test_generate_refuses_to_overwrite(runner, workdir):
    (workdir / "docker-compose.yml").write_text("original", encoding="utf-8")

    result = runner.invoke(app, ["generate", "--output-dir", "."])

    assert result.exit_code == 1
    assert (workdir / "docker-compose.yml").read_text("utf-8") == "original"

    result = runner.invoke(app, ["generate", "--output-dir", ".", "--overwrite"])

    assert result.exit_code == 0, result.output
    assert "Generated on phpdocker.io" in (workdir / "docker-compose.yml").read_text(
        "utf-8"
    )


def test_invalid_options_exit_with_error(runner, workdir):
    result = runner.invoke(app, ["output", "-d", "global_options.base_port=80"])

    assert result.exit_code == 1
    assert "Invalid project options" in result.output


def test_unquoted_version_override_is_rejected(runner, workdir):
    result = runner.invoke(app, ["output", "compose", "-d", "elasticsearch.version=7.10"])

    assert result.exit_code == 1
    assert "Invalid project options" in result.output
    assert "elasticsearch.version" in result.output
    assert "elasticsearch:7.1" not in result.output


def test_quoted_version_override(runner, workdir):
    result = runner.invoke(
        app, ["output", "compose", "-d", "elasticsearch.version='7.10'"]
    )

    assert result.exit_code == 0, result.output
    assert "image: elasticsearch:7.10\n" in result.stdout
