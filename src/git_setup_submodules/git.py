"""Git operations used while setting up submodules.

Every operation takes a `runner` with the signature of `run_git`, so callers
(and tests) can substitute their own process execution.
"""

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .errors import NoRemoteConfigured

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]

GITMODULES = ".gitmodules"


def run_git(
    *args: str,
    repo: Path | None = None,
    check: bool = True,
    capture: bool = False,
    **kwargs: Any,
) -> subprocess.CompletedProcess:
    """
    Run a git command and return the result.

    Args:
        *args: Git command arguments (e.g., "submodule", "add")
        repo: Optional repository path. If None, runs in current directory.
        check: Whether to raise CalledProcessError on non-zero exit (default: True)
        capture: Whether to capture stdout/stderr (default: False)
        **kwargs: Additional arguments to pass to subprocess.run()

    Returns:
        CompletedProcess result

    Example:
        run_git("config", "--get", "remote.origin.url", capture=True)
        run_git("ls-remote", url, repo=Path("/path/to/repo"))
    """
    cmd = ["git"]

    if repo is not None:
        cmd.extend(["-C", str(repo)])

    cmd.extend(args)
    logger.debug("Running %s", " ".join(cmd))

    if capture:
        return subprocess.run(
            cmd, capture_output=True, text=True, check=check, **kwargs
        )

    return subprocess.run(cmd, check=check, **kwargs)


def get_origin_url(repo: Path | None = None, runner: Runner = run_git) -> str:
    """
    Get the URL of the `origin` remote.

    Args:
        repo: Optional repository path. If None, uses current directory.
        runner: Callable used to run git.

    Returns:
        The configured `remote.origin.url`.

    Raises:
        NoRemoteConfigured: If git fails (not a repository, no origin) or
            the URL is empty.
    """
    try:
        result = runner("config", "--get", "remote.origin.url", repo=repo, capture=True)
    except (subprocess.CalledProcessError, OSError) as e:
        raise NoRemoteConfigured(
            "Failed to get remote origin URL. Is this a git repository?"
        ) from e

    if not (url := result.stdout.strip()):
        raise NoRemoteConfigured(
            "Failed to get remote origin URL. Is this a git repository?"
        )
    return url


def can_access_remote(url: str, repo: Path | None = None, runner: Runner = run_git) -> bool:
    """
    Check whether a remote can be read, using `git ls-remote`.

    Output is discarded. Any failure (authentication, missing repository,
    network) counts as no access.

    Example:
        if can_access_remote("git@github.com:user/utils.git"):
            print("readable")
    """
    result = runner(
        "ls-remote",
        url,
        repo=repo,
        check=False,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    return result.returncode == 0


def unset_submodule_branch(
    submodule_path: str,
    repo: Path | None = None,
    runner: Runner = run_git,
) -> None:
    """
    Remove all `submodule.<path>.branch` entries from `.gitmodules`.

    A missing entry is not an error.
    """
    result = runner(
        "config", "-f", GITMODULES, "--unset-all", f"submodule.{submodule_path}.branch",
        repo=repo,
        check=False,
        capture=True,
    )
    if result.returncode != 0:
        logger.debug("No previous branch entry for %s", submodule_path)


def submodule_add(
    url: str,
    submodule_path: str,
    repo: Path | None = None,
    runner: Runner = run_git,
) -> None:
    """Register `url` as a submodule at `submodule_path`, replacing stale entries."""
    runner("submodule", "add", "--force", url, submodule_path, repo=repo)


def set_submodule_branch(
    submodule_path: str,
    branch: str,
    repo: Path | None = None,
    runner: Runner = run_git,
) -> None:
    """Record the branch or tag a submodule tracks in `.gitmodules`."""
    runner(
        "config", "-f", GITMODULES, "--add", f"submodule.{submodule_path}.branch", branch,
        repo=repo,
    )


def pull_submodule(
    submodule_path: str,
    branch: str,
    repo: Path | None = None,
    runner: Runner = run_git,
) -> None:
    """
    Bring a submodule's working tree to the latest commit of `branch`.

    Pulls from the submodule's own `origin`.

    Example:
        pull_submodule("libs/utils", "develop", repo=Path("/path/to/host"))
    """
    submodule_dir = Path(submodule_path) if repo is None else Path(repo) / submodule_path
    runner("pull", "origin", branch, repo=submodule_dir)


def unstage(path: str, repo: Path | None = None, runner: Runner = run_git) -> None:
    """Remove `path` from the index, leaving the working tree untouched."""
    runner("restore", "--staged", path, repo=repo)
