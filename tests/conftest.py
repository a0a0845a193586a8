"""Shared pytest fixtures for git-setup-submodules tests."""

import subprocess
from pathlib import Path

import pytest


def _git(*args, cwd):
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture(autouse=True)
def git_env(monkeypatch):
    """
    Make git usable in a bare test environment.

    Sets a commit identity and allows submodules to be cloned from
    local paths.
    """
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_COUNT", "1")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", "protocol.file.allow")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "always")


@pytest.fixture
def remotes_dir(tmp_path):
    """Directory holding the bare repositories that act as remotes."""
    remotes = tmp_path / "remotes"
    remotes.mkdir()
    return remotes


@pytest.fixture
def git_repo(tmp_path, remotes_dir):
    """
    Create a temporary host repository for testing.

    Its origin points at `remotes/host.git`, so module URLs resolve to
    siblings in `remotes/`.

    Returns:
        Path: Path to the temporary git repository
    """
    repo = tmp_path / "test-repo"
    repo.mkdir()

    _git("init", "-b", "main", cwd=repo)
    _git("config", "user.email", "test@example.com", cwd=repo)
    _git("config", "user.name", "Test User", cwd=repo)

    (repo / "README.md").write_text("# Test Repo\n")
    _git("add", "README.md", cwd=repo)
    _git("commit", "-m", "Initial commit", cwd=repo)

    _git("remote", "add", "origin", str(remotes_dir / "host.git"), cwd=repo)

    return repo


@pytest.fixture
def make_module_remote(tmp_path, remotes_dir):
    """
    Factory creating a bare module repository in `remotes/`.

    Every branch gets one commit on top of `main` adding `<branch>.txt`.

    Returns:
        Callable taking a module name and branch names, returning the bare
        repository path.
    """
    def make(name: str, *branches: str) -> Path:
        work = tmp_path / "work" / name
        work.mkdir(parents=True)
        _git("init", "-b", "main", cwd=work)
        (work / "main.txt").write_text("main\n")
        _git("add", "main.txt", cwd=work)
        _git("commit", "-m", f"Initial {name}", cwd=work)

        for branch in branches:
            _git("checkout", "-b", branch, "main", cwd=work)
            (work / f"{branch}.txt").write_text(f"{branch}\n")
            _git("add", f"{branch}.txt", cwd=work)
            _git("commit", "-m", f"Work on {branch}", cwd=work)
            _git("checkout", "main", cwd=work)

        bare = remotes_dir / f"{name}.git"
        _git("init", "--bare", "-b", "main", str(bare), cwd=tmp_path)
        _git("push", "--all", str(bare), cwd=work)
        return bare

    return make


class FakeRunner:
    """
    Stand-in for `run_git` that records calls instead of running git.

    Args:
        origin_url: Value returned for `remote.origin.url`, None for no origin.
        fail: Predicate on the git argument tuple; matching calls exit 1.
    """

    def __init__(self, origin_url="git@github.com:user/repo.git", fail=None):
        self.origin_url = origin_url
        self.fail = fail or (lambda args: False)
        self.calls = []

    def __call__(self, *args, repo=None, check=True, capture=False, **kwargs):
        self.calls.append((args, repo))

        stdout = ""
        returncode = 1 if self.fail(args) else 0
        if args[:3] == ("config", "--get", "remote.origin.url"):
            if self.origin_url is None:
                returncode = 1
            else:
                stdout = f"{self.origin_url}\n"

        result = subprocess.CompletedProcess(["git", *args], returncode, stdout=stdout, stderr="")
        if check and returncode:
            raise subprocess.CalledProcessError(returncode, result.args)
        return result

    @property
    def commands(self):
        """Argument tuples of every call, in order."""
        return [args for args, _ in self.calls]

    def commands_named(self, *prefix):
        return [args for args in self.commands if args[: len(prefix)] == prefix]


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def host_dir(tmp_path):
    """A plain directory standing in for the host repository."""
    host = tmp_path / "host"
    host.mkdir()
    return host
