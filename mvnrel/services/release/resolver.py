from __future__ import annotations

from mvnrel.core.config import ReleaseConfig
from mvnrel.core.result import Err, Ok, Result
from mvnrel.output.console import ConsoleProtocol
from mvnrel.services.release.errors import ReleaseError
from mvnrel.services.release.model import ReleaseOptions, VersionPlan
from mvnrel.services.release.versions import (
    Prompt,
    increment_version,
    normalize_next,
    release_default,
    resolve_value,
)


def resolve_versions(
    *,
    current: str,
    options: ReleaseOptions,
    config: ReleaseConfig,
    prompt: Prompt,
    console: ConsoleProtocol,
) -> Result[VersionPlan, ReleaseError]:
    """Work out the release and next development versions.

    Fails before anything is mutated if the release would not change the
    pom version, or if the next version would not move past the release.
    """
    suffix = config.snapshot_suffix
    console.print(f"Current {config.pom} version: {current}")
    console.newline()

    release = resolve_value(
        options.release_version,
        release_default(current, suffix),
        prompt=prompt,
        label="Version to release",
    )
    if release == current:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=(
                    "Release version requested is exactly the same as the current "
                    f"{config.pom} version ({current})! "
                    f"Is the version in {config.pom} definitely a {suffix} version?"
                ),
            )
        )

    next_raw = resolve_value(
        options.next_version,
        increment_version(release),
        prompt=prompt,
        label="Next snapshot version",
    )
    next_version = normalize_next(next_raw, suffix)
    if next_version == f"{release}{suffix}":
        return Err(
            ReleaseError(
                kind="invalid_version",
                message="Release version and next version are the same version!",
            )
        )

    console.newline()
    console.print(f"Using {release} for release")
    console.print(f"Using {next_version} for next development version")

    return Ok(
        VersionPlan(
            current=current,
            release=release,
            next=next_version,
            tag=config.tag_for(release),
            release_branch=config.release_branch_for(release),
        )
    )
