"""Core utilities and shared components for fs-utils."""

from .config import settings
from .exceptions import (
    AlreadyExistsError,
    ErrorKind,
    FSUtilsError,
    NotEmptyError,
    PathNotFoundError,
    StorageIOError,
    ValidationError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "AlreadyExistsError",
    "ErrorKind",
    "FSUtilsError",
    "NotEmptyError",
    "PathNotFoundError",
    "StorageIOError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
