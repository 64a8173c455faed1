"""Exceptions raised by til.

Nothing here is recovered locally: every error travels up to the command
line, which prints it as a single line and exits non-zero.
"""


class TilError(Exception):
    """Base class for all til errors."""


class DecodeError(TilError):
    """A page file has a malformed front-matter header."""


class AmbiguousTargetError(TilError):
    """Several target directories are configured and none was selected."""

    def __init__(self, message: str = "multiple target directories defined, no -t value provided"):
        super().__init__(message)


class UndefinedTargetError(TilError):
    """The selected target directory is missing or empty in the config."""

    def __init__(self, message: str = "target directory is undefined or misconfigured in config"):
        super().__init__(message)


class ReadError(TilError):
    """A page file could not be read."""


class WriteError(TilError):
    """A file could not be written during a build."""


class ConfigError(TilError):
    """The configuration file could not be created or read."""


class VcsError(TilError):
    """Saving or pushing the target repository failed."""


class EditorError(TilError):
    """The editor could not be launched or exited with an error."""


class BlankTitleError(TilError):
    """A new page was requested without a title."""

    def __init__(self, message: str = "title must not be blank"):
        super().__init__(message)
