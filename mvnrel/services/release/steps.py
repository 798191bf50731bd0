"""Ordered command steps with per-step failure policies.

A release is a fixed list of commands. Each ``Step`` says what to do when
its command fails:

- ``ABORT``: nothing has left the machine yet, just stop
- ``UNDO_COMMIT``: reset the release commit (``git reset --hard HEAD^1``)
  exactly once, then stop
- ``MANUAL``: shared history already changed, stop and tell the operator
  to finish by hand

``run_steps`` stops at the first failing step.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from mvnrel.core.result import Err, Ok, Result
from mvnrel.git.repository import GitError
from mvnrel.output.console import ConsoleProtocol, Style
from mvnrel.platform.process import ProcessError
from mvnrel.services.release.errors import ReleaseError

ROLLBACK_REF = "HEAD^1"

StepError = GitError | ProcessError
StepAction = Callable[[], Result[object, StepError]]
Rollback = Callable[[], Result[str, GitError]]


class FailurePolicy(Enum):
    ABORT = auto()
    UNDO_COMMIT = auto()
    MANUAL = auto()


@dataclass(frozen=True, slots=True)
class Step:
    """One external command of the release.

    Attributes:
        command: Command line as shown to the operator
        action: Runs the command
        failure: Message reported if the command fails
        policy: What a failure means for the release
        banner: Stage header printed before this step, if any
    """

    command: str
    action: StepAction
    failure: str
    policy: FailurePolicy = FailurePolicy.ABORT
    banner: str | None = None


def run_steps(
    steps: Sequence[Step],
    *,
    rollback: Rollback,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[None, ReleaseError]:
    """Run steps in order, dispatching the failure policy of the first failure.

    In dry-run mode commands are printed but not executed.
    """
    for step in steps:
        if step.banner:
            console.header(step.banner)
        console.print(f"> {step.command}", Style.DIM)
        if dry_run:
            continue

        result = step.action()
        if isinstance(result, Err):
            return Err(_handle_failure(step, result.error, rollback=rollback, console=console))

        _echo_output(result.value, console)

    return Ok(None)


def _handle_failure(
    step: Step,
    error: StepError,
    *,
    rollback: Rollback,
    console: ConsoleProtocol,
) -> ReleaseError:
    detail = _detail(error)

    match step.policy:
        case FailurePolicy.ABORT:
            return ReleaseError(kind="command_failed", message=step.failure, hint=detail)
        case FailurePolicy.MANUAL:
            return ReleaseError(kind="manual_followup", message=step.failure, hint=detail)
        case FailurePolicy.UNDO_COMMIT:
            return _undo_release_commit(step, detail, rollback=rollback, console=console)


def _undo_release_commit(
    step: Step,
    detail: str,
    *,
    rollback: Rollback,
    console: ConsoleProtocol,
) -> ReleaseError:
    if detail:
        console.print(detail, Style.DIM)
    console.print(
        "Resetting release commit to return you to the same working state "
        "as before attempting a deploy"
    )
    console.print(f"> git reset --hard {ROLLBACK_REF}", Style.DIM)

    reset = rollback()
    if isinstance(reset, Err):
        console.error("Git reset command failed!")
        return ReleaseError(
            kind="manual_followup",
            message=step.failure,
            hint=f"the release commit could not be reset: {reset.error.message}",
        )

    return ReleaseError(
        kind="rolled_back",
        message=step.failure,
        hint="the release commit was reset; fix the problem and run the release again",
    )


def _detail(error: StepError) -> str:
    match error:
        case GitError(message=message):
            return message
        case ProcessError():
            return error.detail


def _echo_output(value: object, console: ConsoleProtocol) -> None:
    if not isinstance(value, str):
        return
    for line in value.splitlines():
        if line.strip():
            console.print(line, Style.DIM)
