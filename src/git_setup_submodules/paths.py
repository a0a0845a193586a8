"""Path and file helpers for the host repository."""

import os
from pathlib import Path


def resolve_path(path: str | Path | None = None) -> Path:
    """
    Resolve a path to an absolute Path object.

    Args:
        path: Path to resolve. If None or empty string, returns current directory.

    Returns:
        Absolute Path object

    Example:
        resolve_path("~/projects/host")  # Returns /home/user/projects/host
        resolve_path(None)                # Returns current directory
    """
    if not path:
        return Path.cwd()

    return Path(path).expanduser().resolve()


def resolve_in_repo(path: str | Path, repo: Path) -> Path:
    """
    Resolve `path` relative to the host repository.

    Absolute paths (after `~` expansion) are returned unchanged.

    Example:
        resolve_in_repo(".git-setup-submodules", Path("/src/host"))
        # Returns /src/host/.git-setup-submodules
    """
    path = Path(path).expanduser()
    return path if path.is_absolute() else repo / path


def ensure_file(path: Path) -> bool:
    """
    Create an empty file at `path` if nothing exists there.

    Returns:
        True if the file was created, False if it already existed.
    """
    if path.exists():
        return False
    path.write_text("")
    return True


def is_writable(path: Path) -> bool:
    """Check whether the current user may write to `path`."""
    return os.access(path, os.W_OK)
