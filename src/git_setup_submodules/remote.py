"""Deriving submodule URLs from the host repository's origin."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .git import Runner, get_origin_url, run_git

logger = logging.getLogger(__name__)


def strip_last_component(url: str) -> str:
    """
    Remove everything after the last `/` of a remote URL.

    The separator itself is kept. Works the same for URL-style and
    SCP-style remotes:
    - HTTPS: https://github.com/user/repo.git -> https://github.com/user/
    - SSH: git@github.com:user/repo.git -> git@github.com:user/
    - Local: /srv/git/repo.git -> /srv/git/

    """
    return url[: url.rfind("/") + 1]


@dataclass(frozen=True)
class RemoteContext:
    """The host's origin URL and the prefix shared by its sibling repositories."""

    origin_url: str

    @property
    def base_url(self) -> str:
        return strip_last_component(self.origin_url)

    def project_url(self, module_name: str) -> str:
        """
        Build the clone URL of a sibling repository.

        Example:
            RemoteContext("git@github.com:user/repo.git").project_url("utils")
            # Returns: "git@github.com:user/utils.git"

        """
        return f"{self.base_url}{module_name}.git"


def resolve_remote(repo: Path | None = None, runner: Runner = run_git) -> RemoteContext:
    """
    Read the origin URL of the host repository.

    Raises:
        NoRemoteConfigured: If the origin URL cannot be read.

    """
    context = RemoteContext(get_origin_url(repo=repo, runner=runner))
    logger.debug("Origin %s, module base %s", context.origin_url, context.base_url)
    return context
