from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from releaser.core.config import ReleaserConfig, load_config
from releaser.core.errors import ErrorCode
from releaser.core.result import Err
from releaser.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaserConfig
    console: ConsoleProtocol


def build_context(config_path: Path | None) -> CLIContext:
    """Load the configuration named on the command line, or use defaults."""
    console = RichConsole()
    if config_path is None:
        return CLIContext(config=ReleaserConfig(), console=console)

    result = load_config(config_path)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
    return CLIContext(config=result.value, console=console)
