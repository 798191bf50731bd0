from __future__ import annotations

from typing import NoReturn

import typer

from mvnrel.core.errors import ErrorCode
from mvnrel.services.release.errors import ReleaseError


def exit_release(error: ReleaseError) -> NoReturn:
    typer.echo(f"error: {error.message}", err=True)
    if error.hint:
        typer.echo(f"hint: {error.hint}", err=True)
    raise typer.Exit(code=int(ErrorCode.FAILURE))
