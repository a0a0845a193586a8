"""
Reading and parsing the submodule configuration file.

Each non-comment line declares one submodule:

    <module-path>[:<local-folder>] [#<branch-or-tag>] [// comment]

`module-path` is slash separated. Its last segment is the module name, which
also names the sibling repository on the remote; the rest is the directory
inside the host repository that receives the submodule.

"""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .errors import ConfigNotFound

logger = logging.getLogger(__name__)

CONFIG_FILE = ".git-setup-submodules"
DEFAULT_BRANCH = "main"


@dataclass(frozen=True)
class ModuleDeclaration:
    """
    One submodule requested by the configuration file.

    `local_folder_name` and `branch_or_tag` are None when the line did not
    set them; use `folder_name` and `branch` for the effective values.

    """

    module_path: str
    local_folder_name: str | None = None
    branch_or_tag: str | None = None
    line_number: int | None = None

    @property
    def module_name(self) -> str:
        """Last segment of the module path."""
        return self.module_path.split("/")[-1]

    @property
    def destination_path(self) -> str:
        """Directory inside the host repository, `""` for the root."""
        return "/".join(self.module_path.split("/")[:-1])

    @property
    def folder_name(self) -> str:
        return self.local_folder_name or self.module_name

    @property
    def branch(self) -> str:
        return self.branch_or_tag or DEFAULT_BRANCH

    @property
    def submodule_path(self) -> str:
        """Where the submodule lives, relative to the host repository root."""
        return PurePosixPath(self.destination_path, self.folder_name).as_posix()


def read_config(path: str | Path) -> str:
    """
    Read the raw configuration text.

    Bytes that are not valid UTF-8 are replaced with U+FFFD.

    Raises:
        ConfigNotFound: If the file does not exist.

    """
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFound(f"Configuration file '{path.name}' not found.")
    return path.read_text(encoding="utf-8", errors="replace")


def _strip_comments(line: str) -> str:
    """Trim a line and drop comments, returning `""` for comment-only lines."""
    line = line.strip()
    if not line or line.startswith(("#", "//")):
        return ""
    return line.split("//", 1)[0].strip()


def parse_line(line: str, line_number: int | None = None) -> ModuleDeclaration | None:
    """
    Parse one configuration line.

    Returns None for blank lines, comment lines and lines that do not name
    a module.

    The line is split at the first `#` and the first `:` only, so later
    ones stay in the value: `libs/utils#feature#1` tracks `feature#1`,
    not `feature`.

    >>> parse_line("libs/logger:loggerLib#v1.2.3 // pinned")
    ModuleDeclaration(module_path='libs/logger', local_folder_name='loggerLib', branch_or_tag='v1.2.3', line_number=None)
    >>> parse_line("# apps/console") is None
    True

    """
    if not (line := _strip_comments(line)):
        return None

    module_str, _, branch_or_tag = line.partition("#")
    module_path, _, local_folder_name = module_str.strip().partition(":")
    module_path = module_path.strip()

    if not module_path or module_path.endswith("/"):
        logger.warning("Ignoring line %s: no module name in %r", line_number or "?", line)
        return None

    return ModuleDeclaration(
        module_path=module_path,
        local_folder_name=local_folder_name.strip() or None,
        branch_or_tag=branch_or_tag.strip() or None,
        line_number=line_number,
    )


def parse_declarations(text: str) -> list[ModuleDeclaration]:
    """
    Parse configuration text into declarations, in file order.

    Example:
        parse_declarations("apps/console\\nlibs/utils#develop\\n")
        # Two declarations: console on main, utils on develop

    """
    return [
        declaration
        for line_number, line in enumerate(text.splitlines(), start=1)
        if (declaration := parse_line(line, line_number))
    ]
