"""Registering configured submodules in the host repository."""

import enum
import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import click

from . import git
from .config import CONFIG_FILE, ModuleDeclaration, parse_declarations, read_config
from .errors import GitmodulesNotWritable
from .git import GITMODULES, Runner, run_git
from .paths import ensure_file, is_writable, resolve_in_repo, resolve_path
from .remote import RemoteContext, resolve_remote

logger = logging.getLogger(__name__)


class ModuleOutcome(enum.Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ModuleResult:
    """
    What happened to one declaration.

    `error` is set only for FAILED results: the git command that broke
    the registration after access was confirmed.

    """

    declaration: ModuleDeclaration
    url: str
    outcome: ModuleOutcome
    error: subprocess.CalledProcessError | None = None


@dataclass
class SetupReport:
    """Results of one run, in configuration order."""

    results: list[ModuleResult] = field(default_factory=list)
    already_initialized: bool = False

    def _with(self, outcome: ModuleOutcome) -> list[ModuleResult]:
        return [r for r in self.results if r.outcome is outcome]

    @property
    def completed(self) -> list[ModuleResult]:
        return self._with(ModuleOutcome.COMPLETED)

    @property
    def skipped(self) -> list[ModuleResult]:
        return self._with(ModuleOutcome.SKIPPED)

    @property
    def failed(self) -> list[ModuleResult]:
        return self._with(ModuleOutcome.FAILED)

    @property
    def any_added(self) -> bool:
        return bool(self.completed)


def register_submodule(
    declaration: ModuleDeclaration,
    url: str,
    repo: Path,
    runner: Runner = run_git,
) -> None:
    """
    Add one submodule, pin its branch and leave it unstaged.

    Creates `.gitmodules` on first use.

    Raises:
        GitmodulesNotWritable: If `.gitmodules` cannot be written.
        subprocess.CalledProcessError: If a git step fails.

    """
    gitmodules = repo / GITMODULES
    try:
        if ensure_file(gitmodules):
            logger.debug("Created %s", gitmodules)
    except OSError as e:
        raise GitmodulesNotWritable(f"Cannot write to {GITMODULES}") from e

    if not is_writable(gitmodules):
        raise GitmodulesNotWritable(f"Cannot write to {GITMODULES}")

    path = declaration.submodule_path
    branch = declaration.branch

    git.unset_submodule_branch(path, repo=repo, runner=runner)
    git.submodule_add(url, path, repo=repo, runner=runner)
    git.set_submodule_branch(path, branch, repo=repo, runner=runner)
    git.pull_submodule(path, branch, repo=repo, runner=runner)
    git.unstage(path, repo=repo, runner=runner)


def setup_declaration(
    declaration: ModuleDeclaration,
    remote: RemoteContext,
    repo: Path,
    runner: Runner = run_git,
) -> ModuleResult:
    """
    Probe and, if accessible, register one declared submodule.

    Git failures stay within this module: they are returned as a FAILED
    result. GitmodulesNotWritable is raised.

    """
    name = declaration.module_name
    url = remote.project_url(name)

    click.echo(
        f"├── Setting up '{name}' module at '{declaration.submodule_path}' "
        f"on branch/tag '{declaration.branch}'..."
    )

    if not git.can_access_remote(url, repo=repo, runner=runner):
        logger.info("No access to %s, skipping '%s'", url, name)
        click.echo(f"│   └── ❌ You don't have access to '{name}' module.", err=True)
        return ModuleResult(declaration, url, ModuleOutcome.SKIPPED)

    click.echo(f"│   └── ✅ You have access to '{name}'")

    try:
        register_submodule(declaration, url, repo, runner=runner)
    except subprocess.CalledProcessError as e:
        logger.info("Setting up '%s' failed: %s", name, e)
        click.echo(f"│   └── ❌ Failed to set up '{name}' module.", err=True)
        return ModuleResult(declaration, url, ModuleOutcome.FAILED, error=e)

    return ModuleResult(declaration, url, ModuleOutcome.COMPLETED)


def setup_submodules(
    repo: str | Path | None = None,
    config: str | Path = CONFIG_FILE,
    runner: Runner = run_git,
) -> SetupReport:
    """
    Set up every submodule listed in the configuration file.

    Does nothing if `.gitmodules` already exists. Otherwise each declared
    module is probed, and the accessible ones are added, pinned to their
    branch or tag, pulled, and unstaged. `.gitmodules` itself is unstaged
    at the end if any module was added, so nothing is left staged.

    Args:
        repo: Host repository. Defaults to current directory.
        config: Configuration file, relative to the host repository unless
                absolute (default: .git-setup-submodules).
        runner: Callable used to run git.

    Returns:
        A report with one result per declaration.

    Raises:
        ConfigNotFound: If the configuration file does not exist.
        NoRemoteConfigured: If the origin URL cannot be read.
        GitmodulesNotWritable: If `.gitmodules` cannot be written.

    Example:
        report = setup_submodules()
        for result in report.skipped:
            print(f"No access: {result.url}")
    """
    repo_path = resolve_path(repo)
    gitmodules = repo_path / GITMODULES

    if gitmodules.exists():
        click.echo(f"{GITMODULES} already initialized")
        return SetupReport(already_initialized=True)

    declarations = parse_declarations(read_config(resolve_in_repo(config, repo_path)))
    remote = resolve_remote(repo=repo_path, runner=runner)

    report = SetupReport()

    click.echo("Starting...")
    click.echo("│")
    for declaration in declarations:
        report.results.append(setup_declaration(declaration, remote, repo_path, runner=runner))
        click.echo("│")

    if report.any_added and gitmodules.exists():
        git.unstage(GITMODULES, repo=repo_path, runner=runner)

    click.echo("🏁 Submodules setup completed successfully.")
    return report
