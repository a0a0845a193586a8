"""Bootstrap the git submodules of a multi-repository project.

Submodules are declared in a `.git-setup-submodules` file at the root of the
host repository. Their URLs are derived from the host's origin remote.
"""

__version__ = "1.0.0"

# Re-export all public names from submodules
from .config import (
    CONFIG_FILE,
    ModuleDeclaration,
    parse_declarations,
    parse_line,
    read_config,
)
from .errors import (
    ConfigNotFound,
    GitmodulesNotWritable,
    NoRemoteConfigured,
    SetupError,
)
from .git import run_git
from .remote import RemoteContext, resolve_remote
from .submodules import (
    ModuleOutcome,
    ModuleResult,
    SetupReport,
    setup_declaration,
    setup_submodules,
)

__all__ = (
    "CONFIG_FILE",
    "ConfigNotFound",
    "GitmodulesNotWritable",
    "ModuleDeclaration",
    "ModuleOutcome",
    "ModuleResult",
    "NoRemoteConfigured",
    "RemoteContext",
    "SetupError",
    "SetupReport",
    "parse_declarations",
    "parse_line",
    "read_config",
    "resolve_remote",
    "run_git",
    "setup_declaration",
    "setup_submodules",
)
