from __future__ import annotations

from pathlib import Path

import typer

from mvnrel import __version__
from mvnrel.cli.common import exit_release
from mvnrel.cli.context import build_context
from mvnrel.core.result import Err
from mvnrel.services.release.model import ReleaseOptions
from mvnrel.services.release.service import ReleaseService
from mvnrel.services.release.versions import AUTO

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def prompt_version(label: str, default: str) -> str:
    return typer.prompt(label, default=default)


def wait_for_operator() -> None:
    typer.prompt("Ready ....", default="", show_default=False)


def build_options(
    *,
    auto: bool,
    release_version: str | None,
    next_version: str | None,
    current_version: str | None,
    ignore_untracked: bool,
    dry_run: bool,
) -> ReleaseOptions:
    """Explicit -r/-n values win over -a."""
    if auto:
        release_version = release_version or AUTO
        next_version = next_version or AUTO
    return ReleaseOptions(
        release_version=release_version,
        next_version=next_version,
        current_version=current_version,
        ignore_untracked=ignore_untracked,
        dry_run=dry_run,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def release(
    auto: bool = typer.Option(False, "-a", "--auto", help="Shorthand for -r auto -n auto."),
    release_version: str | None = typer.Option(
        None,
        "-r",
        "--release",
        metavar="VERSION",
        help="Release version ('auto' to use the pom version without -SNAPSHOT).",
    ),
    next_version: str | None = typer.Option(
        None,
        "-n",
        "--next",
        metavar="VERSION",
        help="Next development version ('auto' to increment the release version).",
    ),
    current_version: str | None = typer.Option(
        None,
        "-c",
        "--current",
        metavar="VERSION",
        help="Assume this as the pom version instead of reading it with xmllint.",
    ),
    ignore_untracked: bool = typer.Option(
        False, "-i", "--ignore-untracked", help="Ignore untracked git files."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the git and Maven commands without running them."
    ),
    project_dir: Path | None = typer.Option(
        None, "--project-dir", help="Maven project checkout (default: current directory)."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Release a Maven project with git-flow branches.

    Sets the release version, commits and pushes a release branch, merges it
    into the trunk, tags it, then starts the next -SNAPSHOT version on develop.
    The MVN environment variable selects an alternate Maven command.
    """
    ctx = build_context(project_dir)
    options = build_options(
        auto=auto,
        release_version=release_version,
        next_version=next_version,
        current_version=current_version,
        ignore_untracked=ignore_untracked,
        dry_run=dry_run,
    )

    service = ReleaseService(
        project_dir=ctx.project_dir,
        config=ctx.config,
        console=ctx.console,
        prompt=prompt_version,
        acknowledge=wait_for_operator,
    )
    result = service.run(options)
    if isinstance(result, Err):
        exit_release(result.error)


def main() -> None:
    app()
