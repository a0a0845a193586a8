"""Errors that abort a setup run."""


class SetupError(RuntimeError):
    """Base class for conditions that stop the whole run."""


class ConfigNotFound(SetupError):
    """The submodule configuration file does not exist."""


class NoRemoteConfigured(SetupError):
    """The host repository's origin URL could not be read."""


class GitmodulesNotWritable(SetupError):
    """`.gitmodules` exists but cannot be written."""
