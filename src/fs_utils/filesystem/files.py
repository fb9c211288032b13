"""File operations and the ``File`` handle lifecycle."""

import shutil
import stat
from typing import Iterable

import typer

from fs_utils.core import get_logger, settings
from fs_utils.core.exceptions import (
    AlreadyExistsError,
    FSUtilsError,
    PathNotFoundError,
    ValidationError,
)
from fs_utils.filesystem.entities import File, Sink
from fs_utils.storage import local_storage, storage_errors

logger = get_logger(__name__)

__all__ = [
    "is_file_exists",
    "get_file",
    "read_file",
    "read_file_handle",
    "read_file_into",
    "print_file",
    "create_file",
    "create_file_with_content",
    "append_to_file",
    "remove_file",
    "remove_file_handle",
    "remove_file_handle_with_content",
    "rename_file",
    "copy_file",
]


def _validate_path(path: str) -> None:
    if not path:
        logger.error("Path validation failed", path=path)
        raise ValidationError("Path must not be empty", path=path)


def _validate_lines(lines: Iterable[str]) -> list[str]:
    lines = list(lines)
    for line in lines:
        if "\n" in line or "\r" in line:
            logger.error("Line validation failed", line=line)
            raise ValidationError(f"Line contains a line terminator: {line!r}")
    return lines


def _require_file(path: str) -> None:
    if not is_file_exists(path):
        error_msg = f"File '{path}' does not exist"
        logger.error(error_msg, path=path)
        raise PathNotFoundError(error_msg, path=path)


def _require_absent(path: str) -> None:
    if local_storage.exists(path, follow_symlinks=False):
        error_msg = f"Path '{path}' already exists"
        logger.error(error_msg, path=path)
        raise AlreadyExistsError(error_msg, path=path)


def _write_lines(path: str, lines: list[str], append: bool) -> None:
    with local_storage.open_for_write(path, append=append) as handle:
        with storage_errors("write", path):
            for line in lines:
                handle.write(line + "\n")


def is_file_exists(path: str) -> bool:
    """Return True if ``path`` is an existing regular file."""
    if not path or not local_storage.exists(path):
        return False
    try:
        return stat.S_ISREG(local_storage.stat(path).st_mode)
    except FSUtilsError:
        return False


def get_file(path: str) -> str:
    """Return ``path`` after checking that it is an existing file.

    Raises:
        PathNotFoundError: If the file does not exist
    """
    _validate_path(path)
    _require_file(path)
    return path


def read_file(path: str) -> list[str]:
    """Read a file line by line, dropping line terminators.

    Raises:
        PathNotFoundError: If the file does not exist
        StorageIOError: If the file cannot be read
    """
    _validate_path(path)
    _require_file(path)
    logger.info("Reading file", path=path)

    with local_storage.open_for_read(path) as handle:
        with storage_errors("read", path):
            lines = [line.rstrip("\n") for line in handle]

    logger.info("File read", path=path, line_count=len(lines))
    return lines


def read_file_handle(path: str) -> File:
    """Read ``path`` into a new bound ``File``."""
    return File(path=path).bind(read_file(path))


def read_file_into(handle: File) -> File:
    """Append the lines of ``handle.path`` to ``handle.content``."""
    return handle.bind(read_file(handle.path))


def print_file(path: str, sink: Sink = typer.echo) -> None:
    """Send ``"<index>. <line>"`` to ``sink`` for every line, from 1.

    The caller is expected to have checked that the file exists. Any read
    failure is treated as fatal and terminates the program.

    Raises:
        SystemExit: If the file cannot be read
    """
    try:
        lines = read_file(path)
    except FSUtilsError as e:
        logger.critical("Cannot output file", path=path, error=str(e))
        raise SystemExit(f"fatal: cannot read '{path}': {e}") from e

    for index, line in enumerate(lines, start=1):
        sink(f"{index}. {line}")


def create_file(path: str) -> File:
    """Create an empty file and return a bound handle.

    The handle's content is a single empty line.

    Raises:
        AlreadyExistsError: If path already exists
    """
    _validate_path(path)
    logger.info("Creating file", path=path)
    _write_lines(path, [], append=False)
    return File(path=path).bind([""])


def create_file_with_content(path: str, lines: Iterable[str]) -> File:
    """Create a file holding ``lines``, each newline-terminated.

    Raises:
        AlreadyExistsError: If path already exists
        ValidationError: If a line contains a line terminator
    """
    _validate_path(path)
    lines = _validate_lines(lines)
    logger.info("Creating file", path=path, line_count=len(lines))
    _write_lines(path, lines, append=False)
    return File(path=path).bind(lines)


def append_to_file(path: str, lines: Iterable[str]) -> None:
    """Append ``lines`` to an existing file, each newline-terminated.

    Raises:
        PathNotFoundError: If the file does not exist
    """
    _validate_path(path)
    lines = _validate_lines(lines)
    _require_file(path)
    logger.info("Appending to file", path=path, line_count=len(lines))
    _write_lines(path, lines, append=True)


def remove_file(path: str) -> None:
    """Remove a file.

    Raises:
        PathNotFoundError: If the file does not exist
    """
    _validate_path(path)
    _require_file(path)
    logger.info("Removing file", path=path)
    local_storage.remove(path)


def remove_file_handle(handle: File) -> None:
    """Remove the file behind ``handle`` and release the handle."""
    remove_file(handle.path)
    handle.release()


def remove_file_handle_with_content(handle: File) -> list[str]:
    """Remove the file behind ``handle`` and return its last content."""
    content = read_file(handle.path)
    remove_file(handle.path)
    handle.release()
    return content


def rename_file(src: str, dst: str) -> None:
    """Rename file ``src`` to ``dst`` without overwriting.

    Raises:
        PathNotFoundError: If src is not an existing file
        AlreadyExistsError: If dst already exists
    """
    _validate_path(src)
    _validate_path(dst)
    _require_file(src)
    _require_absent(dst)
    logger.info("Renaming file", src=src, dst=dst)
    local_storage.rename(src, dst)


def copy_file(src: str, dst: str) -> None:
    """Copy the bytes of ``src`` into a newly created ``dst``.

    A copy that fails part way removes the ``dst`` it created.

    Raises:
        PathNotFoundError: If src is not an existing file
        AlreadyExistsError: If dst already exists
        StorageIOError: If the copy fails after dst was created
    """
    _validate_path(src)
    _validate_path(dst)
    _require_file(src)
    logger.info("Copying file", src=src, dst=dst)

    with local_storage.open_for_read(src, binary=True) as source:
        target = local_storage.open_for_write(dst, binary=True)
        try:
            with target, storage_errors("copy", src):
                shutil.copyfileobj(source, target, settings.copy_chunk_size)
        except FSUtilsError:
            logger.warning("Removing partial copy", src=src, dst=dst)
            local_storage.remove(dst)
            raise
