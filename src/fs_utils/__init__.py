"""Filesystem utilities with snapshot handles for directories and files.

This package wraps the everyday operations on directories and files
(create, read, enumerate, move, copy, rename, remove) and pairs them with
two in-memory handle types, ``Dir`` and ``File``, that hold a snapshot of
what was last read from or written to disk.

Key Features:
    - Depth-first directory walk producing tagged entries
    - Collect, stream, append-into-handle and fire-and-forget walk variants
    - Explicit handle lifecycle (unbound, bound, released)
    - One error vocabulary: not found, already exists, not empty, I/O failure
    - CLI interface

Recommended Usage:
    >>> from fs_utils import read_dir_handle, create_file_with_content
    >>> f = create_file_with_content("/tmp/t/a.txt", ["first", "second"])
    >>> d = read_dir_handle("/tmp/t")
    >>> d.tagged_children()
    ['dir: /tmp/t', 'file: /tmp/t/a.txt']
"""

__version__ = "0.1.0"

from .core.exceptions import (
    AlreadyExistsError,
    ErrorKind,
    FSUtilsError,
    NotEmptyError,
    PathNotFoundError,
    StorageIOError,
    ValidationError,
)
from .filesystem import (
    Dir,
    File,
    HandleState,
    append_to_file,
    copy_file,
    create_dir,
    create_dir_all,
    create_dir_handle,
    create_file,
    create_file_with_content,
    enumerate_dir,
    get_dir,
    get_dir_handle,
    get_file,
    is_dir_exists,
    is_file_exists,
    list_files_in_dir,
    move_dir,
    print_dir,
    print_file,
    read_dir,
    read_dir_detached,
    read_dir_handle,
    read_dir_into,
    read_file,
    read_file_handle,
    read_file_into,
    remove_dir,
    remove_dir_handle,
    remove_dir_handle_with_children,
    remove_empty_dir,
    remove_file,
    remove_file_handle,
    remove_file_handle_with_content,
    rename_file,
    wait_for_walk,
)
from .schemas import EntryKind, TaggedEntry

__all__ = [
    # Records and handles
    "Dir",
    "File",
    "HandleState",
    "EntryKind",
    "TaggedEntry",
    # Errors
    "AlreadyExistsError",
    "ErrorKind",
    "FSUtilsError",
    "NotEmptyError",
    "PathNotFoundError",
    "StorageIOError",
    "ValidationError",
    # Directories
    "create_dir",
    "create_dir_all",
    "create_dir_handle",
    "enumerate_dir",
    "get_dir",
    "get_dir_handle",
    "is_dir_exists",
    "list_files_in_dir",
    "move_dir",
    "print_dir",
    "read_dir",
    "read_dir_detached",
    "read_dir_handle",
    "read_dir_into",
    "remove_dir",
    "remove_dir_handle",
    "remove_dir_handle_with_children",
    "remove_empty_dir",
    "wait_for_walk",
    # Files
    "append_to_file",
    "copy_file",
    "create_file",
    "create_file_with_content",
    "get_file",
    "is_file_exists",
    "print_file",
    "read_file",
    "read_file_handle",
    "read_file_into",
    "remove_file",
    "remove_file_handle",
    "remove_file_handle_with_content",
    "rename_file",
]
