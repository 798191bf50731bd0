from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from mvnrel.core.config import ReleaseConfig
from mvnrel.core.result import Err, Ok, Result
from mvnrel.git.repository import Repository
from mvnrel.output.console import ConsoleProtocol, Style
from mvnrel.services.checkers import ToolsChecker
from mvnrel.services.maven import Maven, read_pom_version
from mvnrel.services.release.errors import ReleaseError
from mvnrel.services.release.guard import ensure_clean_tree
from mvnrel.services.release.model import ReleaseOptions, VersionPlan
from mvnrel.services.release.publisher import bump_next_version, publish_release
from mvnrel.services.release.resolver import resolve_versions
from mvnrel.services.release.versions import Prompt

ReadVersion = Callable[[Path, str], Result[str, ReleaseError]]
Acknowledge = Callable[[], object]


class ReleaseService:
    """Runs a complete release of one Maven project.

    Stages run in order and the first failure ends the release:
    tool checks, working-tree guard, version resolution, release publishing
    and the next development version.
    """

    def __init__(
        self,
        *,
        project_dir: Path,
        config: ReleaseConfig,
        console: ConsoleProtocol,
        prompt: Prompt,
        acknowledge: Acknowledge | None = None,
        repo: Repository | None = None,
        maven: Maven | None = None,
        checker: ToolsChecker | None = None,
        read_version: ReadVersion = read_pom_version,
    ) -> None:
        self.project_dir = project_dir
        self.config = config
        self.console = console
        self.prompt = prompt
        self.acknowledge = acknowledge
        self.repo = repo or Repository(project_dir)
        self.maven = maven or Maven(command=config.maven, project_dir=project_dir)
        self.checker = checker or ToolsChecker(
            maven=config.maven, maven_from_env=config.maven_from_env
        )
        self.read_version = read_version

    def run(self, options: ReleaseOptions) -> Result[VersionPlan, ReleaseError]:
        ok = self.check_dependencies(need_xmllint=options.current_version is None)
        if isinstance(ok, Err):
            return ok

        ok = ensure_clean_tree(
            self.repo, ignore_untracked=options.ignore_untracked, console=self.console
        )
        if isinstance(ok, Err):
            return ok

        current = self.current_version(options)
        if isinstance(current, Err):
            return current

        plan = resolve_versions(
            current=current.value,
            options=options,
            config=self.config,
            prompt=self.prompt,
            console=self.console,
        )
        if isinstance(plan, Err):
            return plan

        if options.dry_run:
            self.console.warning("dry run: commands are printed, not executed")

        published = publish_release(
            repo=self.repo,
            maven=self.maven,
            plan=plan.value,
            config=self.config,
            console=self.console,
            dry_run=options.dry_run,
        )
        if isinstance(published, Err):
            return published

        bumped = bump_next_version(
            repo=self.repo,
            maven=self.maven,
            plan=plan.value,
            config=self.config,
            console=self.console,
            dry_run=options.dry_run,
        )
        if isinstance(bumped, Err):
            return bumped

        self.console.newline()
        if options.dry_run:
            self.console.info(f"dry run complete for {plan.value.tag}")
            return plan

        self.console.success(
            f"Released {plan.value.tag}, {self.config.develop_branch} is now {plan.value.next}"
        )
        if self.acknowledge is not None:
            self.acknowledge()
        return plan

    def check_dependencies(self, *, need_xmllint: bool) -> Result[None, ReleaseError]:
        """Fail on the first missing tool."""
        for check in self.checker.check_all(need_xmllint=need_xmllint):
            if check.is_error:
                return Err(
                    ReleaseError(kind="missing_dependency", message=check.message, hint=check.hint)
                )

        self.console.print(f"Using maven command: {' '.join(self.config.maven)}", Style.DIM)
        return Ok(None)

    def current_version(self, options: ReleaseOptions) -> Result[str, ReleaseError]:
        """The ``-c`` override, or the version read from the pom."""
        if options.current_version:
            return Ok(options.current_version)
        return self.read_version(self.project_dir, self.config.pom)
