from __future__ import annotations

from mvnrel.core.config import ReleaseConfig
from mvnrel.core.result import Err, Ok, Result
from mvnrel.git.repository import Repository
from mvnrel.output.console import ConsoleProtocol
from mvnrel.services.maven import Maven
from mvnrel.services.release.errors import ReleaseError
from mvnrel.services.release.model import VersionPlan
from mvnrel.services.release.steps import ROLLBACK_REF, FailurePolicy, Step, run_steps


def ensure_tag_absent(repo: Repository, plan: VersionPlan) -> Result[None, ReleaseError]:
    """Fail if the release tag already exists. Read-only."""
    exists = repo.tag_exists(plan.tag)
    if isinstance(exists, Err):
        return Err(
            ReleaseError(
                kind="command_failed",
                message="failed to list git tags",
                hint=exists.error.message,
            )
        )
    if exists.value:
        return Err(
            ReleaseError(
                kind="tag_exists",
                message=f"A tag already exists {plan.tag} for the release version {plan.release}",
            )
        )
    return Ok(None)


def release_steps(
    *,
    repo: Repository,
    maven: Maven,
    plan: VersionPlan,
    config: ReleaseConfig,
) -> list[Step]:
    """Cut the release branch, publish it to the trunk and tag it.

    The push of the release branch is the point of no return. From there up
    to the trunk push a failure resets the release commit instead of just
    stopping. Tagging failures need manual follow-up.
    """
    branch = plan.release_branch
    develop = config.develop_branch
    trunk = config.trunk_branch
    remote = config.remote
    release = plan.release
    commit_message = f"Release version {release}"

    return [
        Step(
            command=f"git checkout -b {branch}",
            action=lambda: repo.create_branch(branch),
            failure=f"Failed to create release branch {branch}",
            banner="Push release branch",
        ),
        Step(
            command=f"git merge {develop}",
            action=lambda: repo.merge(develop),
            failure=f"Failed to merge {develop} into {branch}",
        ),
        Step(
            command=" ".join(maven.set_version_args(release)),
            action=lambda: maven.set_version(release),
            failure=f"Failed to set release version on {config.pom} files",
        ),
        Step(
            command=f'git commit -a -m "{commit_message}"',
            action=lambda: repo.commit_all(commit_message),
            failure=f"Failed to commit updated {config.pom} versions for release!",
        ),
        Step(
            command=f"git push {remote} {branch}",
            action=lambda: repo.push(remote, branch),
            failure="Build/Deploy failure. Release failed.",
            policy=FailurePolicy.UNDO_COMMIT,
        ),
        Step(
            command=f"git checkout {trunk}",
            action=lambda: repo.checkout(trunk),
            failure=f"Failed to check out {trunk}. Release failed.",
            policy=FailurePolicy.UNDO_COMMIT,
            banner=f"Push {trunk} branch",
        ),
        Step(
            command=f"git merge {branch}",
            action=lambda: repo.merge(branch),
            failure=f"Failed to merge {branch} into {trunk}. Release failed.",
            policy=FailurePolicy.UNDO_COMMIT,
        ),
        Step(
            command=f"git push {remote} {trunk}",
            action=lambda: repo.push(remote, trunk),
            failure="Build/Deploy failure. Release failed.",
            policy=FailurePolicy.UNDO_COMMIT,
        ),
        Step(
            command=f"git tag {plan.tag}",
            action=lambda: repo.tag(plan.tag),
            failure=f"Failed to create tag {plan.tag}! Release has been deployed, however",
            policy=FailurePolicy.MANUAL,
        ),
        Step(
            command=f"git push {remote} --tags",
            action=lambda: repo.push_tags(remote),
            failure="Failed to push tags. Please do this manually",
            policy=FailurePolicy.MANUAL,
        ),
    ]


def next_version_steps(
    *,
    repo: Repository,
    maven: Maven,
    plan: VersionPlan,
    config: ReleaseConfig,
) -> list[Step]:
    """Bring the trunk back into develop and start the next snapshot.

    The release is already out at this point, so every failure is left to
    the operator.
    """
    develop = config.develop_branch
    trunk = config.trunk_branch
    remote = config.remote
    next_version = plan.next
    commit_message = f"Start next development version {next_version}"

    return [
        Step(
            command=f"git checkout {develop}",
            action=lambda: repo.checkout(develop),
            failure=f"Failed to check out {develop}, please do this manually",
            policy=FailurePolicy.MANUAL,
            banner=f"Set new version to {develop}",
        ),
        Step(
            command=f"git merge {trunk}",
            action=lambda: repo.merge(trunk),
            failure=f"Failed to merge {trunk} into {develop}, please do this manually",
            policy=FailurePolicy.MANUAL,
        ),
        Step(
            command=" ".join(maven.set_version_args(next_version)),
            action=lambda: maven.set_version(next_version),
            failure=(
                f"Failed to set next dev version on {config.pom} files, please do this manually"
            ),
            policy=FailurePolicy.MANUAL,
        ),
        Step(
            command=f'git commit -a -m "{commit_message}"',
            action=lambda: repo.commit_all(commit_message),
            failure=(
                f"Failed to commit updated {config.pom} versions for next dev version! "
                "Please do this manually"
            ),
            policy=FailurePolicy.MANUAL,
        ),
        Step(
            command=f"git push {remote} {develop}",
            action=lambda: repo.push(remote, develop),
            failure="Failed to push commits. Please do this manually",
            policy=FailurePolicy.MANUAL,
        ),
    ]


def publish_release(
    *,
    repo: Repository,
    maven: Maven,
    plan: VersionPlan,
    config: ReleaseConfig,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[None, ReleaseError]:
    ok = ensure_tag_absent(repo, plan)
    if isinstance(ok, Err):
        return ok

    return run_steps(
        release_steps(repo=repo, maven=maven, plan=plan, config=config),
        rollback=lambda: repo.reset_hard(ROLLBACK_REF),
        console=console,
        dry_run=dry_run,
    )


def bump_next_version(
    *,
    repo: Repository,
    maven: Maven,
    plan: VersionPlan,
    config: ReleaseConfig,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[None, ReleaseError]:
    return run_steps(
        next_version_steps(repo=repo, maven=maven, plan=plan, config=config),
        rollback=lambda: repo.reset_hard(ROLLBACK_REF),
        console=console,
        dry_run=dry_run,
    )
