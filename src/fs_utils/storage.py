"""Storage layer consumed by the walker and the handle operations.

Every call into the operating system goes through a ``StorageBackend``, and
every ``OSError`` leaving it is translated into the fs-utils exception
hierarchy so callers see one error vocabulary regardless of platform.
"""

import errno
import os
import shutil
from contextlib import contextmanager
from typing import IO, Any, Iterator, Protocol

from fs_utils.core import get_logger, settings
from fs_utils.core.exceptions import (
    AlreadyExistsError,
    NotEmptyError,
    PathNotFoundError,
    StorageIOError,
)

logger = get_logger(__name__)

_NOT_EMPTY_ERRNOS = {errno.ENOTEMPTY, errno.EEXIST}


@contextmanager
def storage_errors(operation: str, path: str) -> Iterator[None]:
    """Translate ``OSError`` raised inside the block into fs-utils errors.

    Args:
        operation: Short verb phrase used in the error message
        path: Path the operation concerns

    Raises:
        PathNotFoundError: For ``FileNotFoundError``
        AlreadyExistsError: For ``FileExistsError``
        NotEmptyError: When removing a directory that has entries
        StorageIOError: For any other ``OSError``, or text that cannot be
            decoded with the configured encoding
    """
    try:
        yield
    except FileNotFoundError as e:
        error_msg = f"Failed to {operation} '{path}': path does not exist"
        logger.error(error_msg, operation=operation, path=path, error=str(e))
        raise PathNotFoundError(error_msg, path=path) from e
    except FileExistsError as e:
        error_msg = f"Failed to {operation} '{path}': path already exists"
        logger.error(error_msg, operation=operation, path=path, error=str(e))
        raise AlreadyExistsError(error_msg, path=path) from e
    except OSError as e:
        if operation == "remove" and e.errno in _NOT_EMPTY_ERRNOS:
            error_msg = f"Failed to {operation} '{path}': directory not empty"
            logger.error(error_msg, operation=operation, path=path, error=str(e))
            raise NotEmptyError(error_msg, path=path) from e
        error_msg = f"Failed to {operation} '{path}': {e.strerror or e}"
        logger.error(error_msg, operation=operation, path=path, error=str(e))
        raise StorageIOError(error_msg, path=path) from e
    except UnicodeError as e:
        error_msg = f"Failed to {operation} '{path}': cannot decode as text ({e})"
        logger.error(error_msg, operation=operation, path=path, error=str(e))
        raise StorageIOError(error_msg, path=path) from e


class StorageBackend(Protocol):
    """Protocol for the filesystem primitives fs-utils builds on."""

    def exists(self, path: str, follow_symlinks: bool = True) -> bool:
        """Return True if something is present at ``path``."""
        ...

    def stat(self, path: str, follow_symlinks: bool = True) -> os.stat_result:
        """Return metadata for ``path``."""
        ...

    def list_directory(self, path: str) -> list[str]:
        """Return entry names in the backend's native order."""
        ...

    def create_directory(self, path: str, recursive: bool = False) -> None:
        """Create a directory, optionally with missing parents."""
        ...

    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""
        ...

    def remove_recursive(self, path: str) -> None:
        """Remove a file or a directory tree."""
        ...

    def rename(self, src: str, dst: str) -> None:
        """Rename ``src`` to ``dst``."""
        ...

    def open_for_read(self, path: str, binary: bool = False) -> IO[Any]:
        """Open an existing file for reading."""
        ...

    def open_for_write(
        self, path: str, append: bool = False, binary: bool = False
    ) -> IO[Any]:
        """Open a file for writing: exclusive create, or append."""
        ...


class LocalStorage(StorageBackend):
    """Storage backend over the local filesystem."""

    def exists(self, path: str, follow_symlinks: bool = True) -> bool:
        if follow_symlinks:
            return os.path.exists(path)
        return os.path.lexists(path)

    def stat(self, path: str, follow_symlinks: bool = True) -> os.stat_result:
        with storage_errors("stat", path):
            return os.stat(path, follow_symlinks=follow_symlinks)

    def list_directory(self, path: str) -> list[str]:
        with storage_errors("list", path):
            return os.listdir(path)

    def create_directory(self, path: str, recursive: bool = False) -> None:
        with storage_errors("create directory", path):
            if recursive:
                os.makedirs(path, exist_ok=True)
            else:
                os.mkdir(path)

    def remove(self, path: str) -> None:
        with storage_errors("remove", path):
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.remove(path)

    def remove_recursive(self, path: str) -> None:
        with storage_errors("remove", path):
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)

    def rename(self, src: str, dst: str) -> None:
        with storage_errors("rename", src):
            os.rename(src, dst)

    def open_for_read(self, path: str, binary: bool = False) -> IO[Any]:
        with storage_errors("open", path):
            if binary:
                return open(path, "rb")
            return open(path, encoding=settings.file_encoding)

    def open_for_write(
        self, path: str, append: bool = False, binary: bool = False
    ) -> IO[Any]:
        mode = "a" if append else "x"
        with storage_errors("open", path):
            if binary:
                return open(path, mode + "b")
            return open(path, mode, encoding=settings.file_encoding)


local_storage = LocalStorage()
