"""Directory and file operations with snapshot handles."""

from .detached import read_dir_detached, wait_for_walk
from .directories import (
    create_dir,
    create_dir_all,
    create_dir_handle,
    get_dir,
    get_dir_handle,
    is_dir_exists,
    list_files_in_dir,
    move_dir,
    print_dir,
    read_dir,
    read_dir_handle,
    read_dir_into,
    remove_dir,
    remove_dir_handle,
    remove_dir_handle_with_children,
    remove_empty_dir,
)
from .entities import Dir, File, HandleState
from .files import (
    append_to_file,
    copy_file,
    create_file,
    create_file_with_content,
    get_file,
    is_file_exists,
    print_file,
    read_file,
    read_file_handle,
    read_file_into,
    remove_file,
    remove_file_handle,
    remove_file_handle_with_content,
    rename_file,
)
from .walker import enumerate_dir, enumerate_into, stream_dir, walk

__all__ = [
    "Dir",
    "File",
    "HandleState",
    "walk",
    "enumerate_dir",
    "enumerate_into",
    "stream_dir",
    "read_dir_detached",
    "wait_for_walk",
    "create_dir",
    "create_dir_all",
    "create_dir_handle",
    "get_dir",
    "get_dir_handle",
    "is_dir_exists",
    "list_files_in_dir",
    "move_dir",
    "print_dir",
    "read_dir",
    "read_dir_handle",
    "read_dir_into",
    "remove_dir",
    "remove_dir_handle",
    "remove_dir_handle_with_children",
    "remove_empty_dir",
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
