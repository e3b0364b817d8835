"""Exception classes for igor - a dotfiles tracking helper."""

from typing import List, TypedDict


# Type definitions for structured data
class TrackedFileDict(TypedDict):
    """Type definition for a tracked file record."""

    path: str
    name: str
    folder: bool


class ConfigDict(TypedDict):
    """Type definition for the igorrc.yml contents."""

    tracked_files: List[TrackedFileDict]


class IgorError(Exception):
    """Base exception for all igor-related errors."""

    pass


class IgorConfigError(IgorError):
    """Errors related to the igor config file."""

    pass


class ConfigReadError(IgorConfigError):
    """Raised when the config file is missing or cannot be read."""

    pass


class ConfigParseError(IgorConfigError):
    """Raised when the config file is not valid."""

    pass


class ConfigWriteError(IgorConfigError):
    """Raised when the config file cannot be written."""

    pass


class IgorFileOperationError(IgorError):
    """Errors related to file operations."""

    pass


class IgorDirectoryError(IgorFileOperationError):
    """Raised when a required directory cannot be created."""

    pass


class IgorSymlinkError(IgorFileOperationError):
    """Errors related to symlink operations."""

    pass


class IgorHomeDirError(IgorError):
    """Raised when the home directory cannot be determined."""

    pass


class IgorValidationError(IgorError):
    """Errors related to input validation."""

    pass
