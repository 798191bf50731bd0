from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from mvnrel.cli.common import exit_release
from mvnrel.core.config import ReleaseConfig, load_config
from mvnrel.core.errors import ErrorCode
from mvnrel.core.result import Err
from mvnrel.output.console import ConsoleProtocol, RichConsole
from mvnrel.services.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class CLIContext:
    project_dir: Path
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(project_dir: Path | None = None) -> CLIContext:
    try:
        root = (project_dir or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --project-dir: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    if not root.is_dir():
        typer.echo(f"error: project directory not found: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    config_result = load_config(root)
    if isinstance(config_result, Err):
        error = config_result.error
        exit_release(
            ReleaseError(
                kind="invalid_config",
                message=error.message,
                hint=f"fix or remove {error.path}" if error.path else None,
            )
        )

    return CLIContext(
        project_dir=root,
        config=config_result.value.with_env(os.environ),
        console=RichConsole(),
    )
