"""Exception hierarchy for fs-utils."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Categories of failure surfaced to callers."""

    not_found = "not_found"
    already_exists = "already_exists"
    not_empty = "not_empty"
    io_failure = "io_failure"
    invalid = "invalid"


class FSUtilsError(Exception):
    """Base exception for all fs-utils errors.

    Attributes:
        kind: Category of the failure
        path: Offending path, when the failure concerns one
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ValidationError(FSUtilsError):
    """Raised when validation fails."""

    kind = ErrorKind.invalid


class PathNotFoundError(FSUtilsError):
    """Raised when a path is not found."""

    kind = ErrorKind.not_found


class AlreadyExistsError(FSUtilsError):
    """Raised when a path exists but the operation requires it absent."""

    kind = ErrorKind.already_exists


class NotEmptyError(FSUtilsError):
    """Raised when removing a directory that still has entries."""

    kind = ErrorKind.not_empty


class StorageIOError(FSUtilsError):
    """Raised when the underlying storage call fails for any other reason."""

    kind = ErrorKind.io_failure
