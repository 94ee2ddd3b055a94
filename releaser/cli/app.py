from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from releaser import __version__
from releaser.bom.parser import BomParser
from releaser.cli.context import build_context
from releaser.core.config import update_config
from releaser.core.errors import ErrorCode
from releaser.core.result import Err
from releaser.versions import InvalidVersionFormatError, Version

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_console = Console(highlight=False)


def _exit(message: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=int(code))


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Release train tooling: inspect versions and BOMs."""
    if version:
        typer.echo(__version__)
        raise typer.Exit()


@app.command("version")
def version_cmd(
    value: str = typer.Argument(..., help="Version string, e.g. 1.0.1-RC1 or Finchley-SR2."),
    project: str = typer.Option("project", "--project", "-p", help="Project name."),
    tag_prefix: str = typer.Option("v", "--tag-prefix", help="Prefix of release tags."),
) -> None:
    """Show how a version is classified and what comes after it."""
    v = Version(project, value)
    try:
        rows = [
            ("stage", str(v.stage)),
            ("category", v.category.name),
            ("major", v.major()),
            ("bumped", v.bumped_version()),
            ("next snapshot", v.post_release_snapshot_version()),
            ("release tag", v.release_tag_name(tag_prefix) or "-"),
        ]
    except InvalidVersionFormatError as e:
        _exit(str(e), code=ErrorCode.USER_ERROR)

    table = Table(title=str(v), show_header=False)
    table.add_column(style="dim")
    table.add_column()
    for key, val in rows:
        table.add_row(key, val)
    _console.print(table)


@app.command("compare")
def compare_cmd(
    first: str = typer.Argument(..., help="First version."),
    second: str = typer.Argument(..., help="Second version."),
) -> None:
    """Compare two versions by order, maturity and release train."""
    a, b = Version("a", first), Version("b", second)
    try:
        c = a.compare_to(b)
        more_mature = a.is_more_mature(b)
    except InvalidVersionFormatError as e:
        _exit(str(e), code=ErrorCode.USER_ERROR)

    sign = "<" if c < 0 else ">" if c > 0 else "=="
    _console.print(f"{first} {sign} {second}")
    _console.print(f"{first} is more mature than {second}: {more_mature}")
    _console.print(f"same release train: {a.is_same_release_train_name(b)}")


@app.command("bom")
def bom_cmd(
    root: Path = typer.Argument(Path("."), help="Root of the release train project."),
    config: Path | None = typer.Option(None, "--config", "-c", help="releaser.toml to use."),
) -> None:
    """List the project versions declared in the release train BOM."""
    ctx = build_context(config)
    updated = update_config(ctx.config, root)
    if isinstance(updated, Err):
        _exit(updated.error.message, code=ErrorCode.CONFIG_ERROR)

    versions = BomParser(updated.value, root, console=ctx.console).versions_from_bom()
    if versions.is_empty:
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    train = versions.train_version
    table = Table(title=f"release train {train.version}" if train else "release train")
    table.add_column("project")
    table.add_column("version")
    table.add_column("stage", style="dim")
    for v in versions.effective_projects():
        stage = str(v.stage) if v.valid else "invalid"
        table.add_row(v.project_name, v.version, stage)
    _console.print(table)


def main() -> None:
    app()
