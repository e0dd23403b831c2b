import json
from enum import Enum
from pathlib import Path
from typing import Any, cast

import typer
from omegaconf import OmegaConf
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from phpdock.app_config import load_app_config
from phpdock.app_state import AppState
from phpdock.libs.classes.generator import (
    DockerComposeGenerator,
    NginxConfGenerator,
    generate_files,
)
from phpdock.libs.functions.docker_compose import build_compose
from phpdock.libs.functions.load_options import load_options
from phpdock.libs.functions.write_files import write_files
from phpdock.libs.schemas.options import ProjectOptions

app = typer.Typer(
    no_args_is_help=True,
)
console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    config_paths: list[Path] = typer.Option(
        [
            Path("./phpdock.yaml"),
            Path("./phpdock.yml"),
        ],
        "--config",
        "-c",
        help="Path to the application configuration file.",
    ),
):
    ctx.obj = AppState(
        app_config=load_app_config(tuple(config_paths)),
    )


def _load_project_options(app_state: AppState, data: list[str]) -> ProjectOptions:
    try:
        return load_options(
            data=[
                app_state.app_config.data,
                cast(dict[str, Any], OmegaConf.to_container(OmegaConf.from_dotlist(data))),
            ],
            options_files=app_state.app_config.options_files,
        )
    except ValidationError as e:
        console.print(
            f"[red][bold]Invalid project options:[/bold]\n{escape(str(e))}[/red]"
        )
        raise typer.Exit(code=1) from e


@app.command()
def generate(
    ctx: typer.Context,
    *,
    data: list[str] = typer.Option(
        [],
        "-d",
        "--data",
        help="Project option overrides in key=value format, e.g. mailhog=true."
        " Quote versions to keep them as text: mysql.version='8.0'.",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory to write the generated files into.",
    ),
    overwrite: bool = typer.Option(
        False,  # noqa: FBT003
        "--overwrite",
        help="Replace files that already exist in the output directory.",
    ),
    dry_run: bool = typer.Option(
        False,  # noqa: FBT003
        "--dry-run",
        help="If set, only list the files that would be generated.",
    ),
):
    app_state: AppState = ctx.obj
    options = _load_project_options(app_state, data)

    files = generate_files(
        options,
        [
            DockerComposeGenerator(
                php_ini_location=app_state.app_config.php_ini_location
            ),
            NginxConfGenerator(),
        ],
    )
    target_dir = output_dir or app_state.app_config.output_dir

    if dry_run:
        for file in files:
            target = escape(str(target_dir / file.filename))
            console.print(f"[yellow]Would write[/yellow] {target}")
        console.print("[yellow]Dry run enabled, no files written.[/yellow]")
        return

    try:
        written = write_files(files, target_dir, overwrite=overwrite)
    except FileExistsError as e:
        console.print(
            f"[red]{escape(str(e))}[/red] (use [bold]--overwrite[/bold] to replace it)"
        )
        raise typer.Exit(code=1) from e

    for path in written:
        console.print(
            f"[green][bold]Wrote[/bold] '[italic]{escape(str(path))}[/italic]'[/green]"
        )


class OutputFile(Enum):
    COMPOSE = "compose"
    NGINX = "nginx"


class OutputFormat(Enum):
    YAML = "yaml"
    JSON = "json"


@app.command()
def output(
    ctx: typer.Context,
    output_file: OutputFile = typer.Argument(
        OutputFile.COMPOSE,
        help="Which generated file to print.",
    ),
    *,
    data: list[str] = typer.Option(
        [],
        "-d",
        "--data",
        help="Project option overrides in key=value format, e.g. mailhog=true."
        " Quote versions to keep them as text: mysql.version='8.0'.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.YAML,
        "--format",
        "-f",
        help="Output format of the compose file.",
    ),
):
    app_state: AppState = ctx.obj
    options = _load_project_options(app_state, data)
    php_ini_location = app_state.app_config.php_ini_location

    result: str
    match output_file, output_format:
        case OutputFile.NGINX, _:
            console.print("[bold green]Generated Nginx configuration:[/]")
            result = NginxConfGenerator().generate(options).contents
        case OutputFile.COMPOSE, OutputFormat.JSON:
            console.print("[bold green]Generated Docker Compose JSON:[/]")
            result = json.dumps(
                build_compose(options, php_ini_location=php_ini_location).model_dump(
                    mode="json", exclude_none=True
                ),
                indent=2,
            )
        case OutputFile.COMPOSE, OutputFormat.YAML:
            console.print("[bold green]Generated Docker Compose YAML:[/]")
            result = (
                DockerComposeGenerator(php_ini_location=php_ini_location)
                .generate(options)
                .contents
            )

    typer.echo(result, nl=False)
