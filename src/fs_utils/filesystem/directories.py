"""Directory operations and the ``Dir`` handle lifecycle.

Read operations delegate to the tree walker. Operations that take a ``Dir``
handle bind it on success and release it after a successful remove; a
failed operation leaves the handle as it was.
"""

import stat

import typer

from fs_utils.core import get_logger
from fs_utils.core.exceptions import (
    AlreadyExistsError,
    FSUtilsError,
    NotEmptyError,
    PathNotFoundError,
    ValidationError,
)
from fs_utils.filesystem.detached import read_dir_detached
from fs_utils.filesystem.entities import Dir, Sink
from fs_utils.filesystem.walker import enumerate_dir, enumerate_into, stream_dir
from fs_utils.schemas import TaggedEntry
from fs_utils.storage import local_storage

logger = get_logger(__name__)

__all__ = [
    "is_dir_exists",
    "get_dir",
    "get_dir_handle",
    "read_dir",
    "read_dir_handle",
    "print_dir",
    "read_dir_into",
    "read_dir_detached",
    "create_dir",
    "create_dir_all",
    "create_dir_handle",
    "remove_dir",
    "remove_dir_handle",
    "remove_dir_handle_with_children",
    "remove_empty_dir",
    "move_dir",
    "list_files_in_dir",
]


def _validate_path(path: str) -> None:
    """Reject empty paths before touching storage.

    Raises:
        ValidationError: If path is empty
    """
    if not path:
        logger.error("Path validation failed", path=path)
        raise ValidationError("Path must not be empty", path=path)


def _require_dir(path: str) -> None:
    if not is_dir_exists(path):
        error_msg = f"Directory '{path}' does not exist"
        logger.error(error_msg, path=path)
        raise PathNotFoundError(error_msg, path=path)


def _require_absent(path: str) -> None:
    if not local_storage.exists(path, follow_symlinks=False):
        return

    error_msg = f"Path '{path}' already exists"
    logger.error(error_msg, path=path)
    raise AlreadyExistsError(error_msg, path=path)


def is_dir_exists(path: str) -> bool:
    """Return True if ``path`` is an existing directory."""
    if not path or not local_storage.exists(path):
        return False
    try:
        return stat.S_ISDIR(local_storage.stat(path).st_mode)
    except FSUtilsError:
        return False


def get_dir(path: str) -> str:
    """Return ``path`` after checking that it is an existing directory.

    Raises:
        PathNotFoundError: If the directory does not exist
    """
    _validate_path(path)
    _require_dir(path)
    return path


def get_dir_handle(handle: Dir) -> Dir:
    """Return a fresh bound handle enumerated from ``handle.path``.

    ``handle`` itself is not modified.

    Raises:
        PathNotFoundError: If the directory does not exist
    """
    _validate_path(handle.path)
    _require_dir(handle.path)
    return read_dir_handle(handle.path)


def read_dir(path: str) -> list[TaggedEntry]:
    """List ``path`` and everything under it as tagged entries.

    Args:
        path: Root of the walk; reported as the first entry

    Returns:
        Entries in walk order

    Raises:
        PathNotFoundError: If path does not exist
        StorageIOError: If any node cannot be stat'd or listed
    """
    _validate_path(path)
    logger.info("Reading directory", path=path)
    entries = enumerate_dir(path)
    logger.info("Directory read", path=path, entry_count=len(entries))
    return entries


def read_dir_handle(path: str) -> Dir:
    """Read ``path`` into a new bound ``Dir``."""
    return Dir(path=path).bind(read_dir(path))


def print_dir(path: str, sink: Sink = typer.echo) -> int:
    """Send one ``"<tag>: <path>"`` line per entry to ``sink``.

    Returns:
        Number of lines sent
    """
    _validate_path(path)
    logger.info("Printing directory", path=path)
    return stream_dir(path, sink)


def read_dir_into(handle: Dir) -> Dir:
    """Append the entries under ``handle.path`` to ``handle.children``.

    Existing children are kept, so calling this twice on the same handle
    lists every entry twice.
    """
    _validate_path(handle.path)
    logger.info("Reading directory into handle", path=handle.path)
    return enumerate_into(handle)


def create_dir(path: str) -> None:
    """Create a single directory; its parent must exist.

    Raises:
        AlreadyExistsError: If path already exists
        PathNotFoundError: If the parent directory does not exist
    """
    _validate_path(path)
    logger.info("Creating directory", path=path)
    local_storage.create_directory(path)


def create_dir_all(path: str) -> None:
    """Create a directory along with any missing parents.

    Succeeds without change if the directory already exists.

    Raises:
        AlreadyExistsError: If a non-directory occupies path or a parent
    """
    _validate_path(path)
    logger.info("Creating directory tree", path=path)
    local_storage.create_directory(path, recursive=True)


def create_dir_handle(path: str) -> Dir:
    """Create a single directory and return a bound handle for it."""
    create_dir(path)
    return Dir(path=path).bind()


def remove_dir(path: str) -> None:
    """Remove a directory and everything under it.

    Raises:
        PathNotFoundError: If the directory does not exist
    """
    _validate_path(path)
    _require_dir(path)
    logger.info("Removing directory", path=path)
    local_storage.remove_recursive(path)


def remove_dir_handle(handle: Dir) -> None:
    """Remove the directory behind ``handle`` and release the handle."""
    remove_dir(handle.path)
    handle.release()


def remove_dir_handle_with_children(handle: Dir) -> list[TaggedEntry]:
    """Remove the directory behind ``handle`` and return what it contained.

    The listing is taken just before removal rather than from the handle's
    snapshot, which may be stale.
    """
    _validate_path(handle.path)
    _require_dir(handle.path)
    children = enumerate_dir(handle.path)
    remove_dir(handle.path)
    handle.release()
    return children


def remove_empty_dir(path: str) -> None:
    """Remove a directory only if it has no entries.

    Raises:
        PathNotFoundError: If the directory does not exist
        NotEmptyError: If the directory has any entry
    """
    _validate_path(path)
    _require_dir(path)

    entries = local_storage.list_directory(path)
    if entries:
        error_msg = f"Directory '{path}' is not empty"
        logger.error(error_msg, path=path, entry_count=len(entries))
        raise NotEmptyError(error_msg, path=path)

    logger.info("Removing empty directory", path=path)
    local_storage.remove(path)


def move_dir(src: str, dst: str) -> None:
    """Rename directory ``src`` to ``dst`` without overwriting.

    Raises:
        PathNotFoundError: If src is not an existing directory
        AlreadyExistsError: If dst already exists
    """
    _validate_path(src)
    _validate_path(dst)
    _require_dir(src)
    _require_absent(dst)
    logger.info("Moving directory", src=src, dst=dst)
    local_storage.rename(src, dst)


def list_files_in_dir(path: str) -> list[str]:
    """Return the paths of all files under ``path``, in walk order."""
    _validate_path(path)
    _require_dir(path)
    files = [entry.path for entry in enumerate_dir(path) if entry.is_file]
    logger.info("Files listed", path=path, file_count=len(files))
    return files
