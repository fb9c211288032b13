"""Command-line interface for fs-utils.

This module exposes the library's directory and file operations as
subcommands.

Commands:
    - ls: Walk a directory and print tagged entries
    - files: List the files under a directory
    - cat: Print a file with numbered lines
    - mkdir: Create a directory
    - touch: Create a file, optionally with content
    - append: Append lines to a file
    - rm: Remove a file or directory
    - mv: Move a file or directory
    - cp: Copy a file

Failures are reported as ``Error: <message>`` on stderr with exit code 1.
"""

from typing import Annotated, NoReturn, Optional

import typer

from . import __version__
from .core.exceptions import FSUtilsError
from .filesystem import (
    append_to_file,
    copy_file,
    create_dir,
    create_dir_all,
    create_file,
    create_file_with_content,
    is_dir_exists,
    list_files_in_dir,
    move_dir,
    print_dir,
    print_file,
    read_dir_detached,
    remove_dir,
    remove_empty_dir,
    remove_file,
    rename_file,
)

app = typer.Typer(
    name="fs-utils",
    help="Create, read, enumerate, move, copy and remove files and directories.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"fs-utils {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    FS-Utils: filesystem operations with snapshot handles.
    """
    pass


def _fail(error: FSUtilsError) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


LinesOption = Annotated[
    Optional[list[str]],
    typer.Option("--line", "-l", help="Line to write; repeat for several lines"),
]


@app.command("ls")
def ls_cmd(
    path: Annotated[str, typer.Argument(help="Directory to walk")],
    detach: Annotated[
        bool,
        typer.Option("--detach", help="Start the walk in the background"),
    ] = False,
) -> None:
    """
    Walk a directory and print one tagged entry per line.

    Examples:
        fs-utils ls /data/path
        fs-utils ls /data/path --detach
    """
    try:
        if detach:
            read_dir_detached(path)
        else:
            print_dir(path)
    except FSUtilsError as e:
        _fail(e)


@app.command("files")
def files_cmd(
    path: Annotated[str, typer.Argument(help="Directory to search")],
) -> None:
    """List every file under a directory."""
    try:
        files = list_files_in_dir(path)
    except FSUtilsError as e:
        _fail(e)

    if files:
        typer.echo(f"Found {len(files)} files:")
        for item in files:
            typer.echo(f"  {item}")
    else:
        typer.echo("No files found.")


@app.command("cat")
def cat_cmd(
    path: Annotated[str, typer.Argument(help="File to print")],
) -> None:
    """Print a file with 1-based line numbers."""
    print_file(path)


@app.command("mkdir")
def mkdir_cmd(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    parents: Annotated[
        bool,
        typer.Option("--parents", "-p", help="Create missing parent directories"),
    ] = False,
) -> None:
    """Create a directory."""
    try:
        if parents:
            create_dir_all(path)
        else:
            create_dir(path)
    except FSUtilsError as e:
        _fail(e)


@app.command("touch")
def touch_cmd(
    path: Annotated[str, typer.Argument(help="File to create")],
    lines: LinesOption = None,
) -> None:
    """Create a new file; fails if it already exists."""
    try:
        if lines:
            create_file_with_content(path, lines)
        else:
            create_file(path)
    except FSUtilsError as e:
        _fail(e)


@app.command("append")
def append_cmd(
    path: Annotated[str, typer.Argument(help="File to append to")],
    lines: LinesOption = None,
) -> None:
    """Append lines to an existing file."""
    try:
        append_to_file(path, lines or [])
    except FSUtilsError as e:
        _fail(e)


@app.command("rm")
def rm_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to remove")],
    empty_only: Annotated[
        bool,
        typer.Option("--empty-only", help="Refuse to remove a non-empty directory"),
    ] = False,
) -> None:
    """Remove a file, or a directory and everything under it."""
    try:
        if not is_dir_exists(path):
            remove_file(path)
        elif empty_only:
            remove_empty_dir(path)
        else:
            remove_dir(path)
    except FSUtilsError as e:
        _fail(e)


@app.command("mv")
def mv_cmd(
    src: Annotated[str, typer.Argument(help="Path to move")],
    dst: Annotated[str, typer.Argument(help="New path; must not exist")],
) -> None:
    """Move a file or directory without overwriting."""
    try:
        if is_dir_exists(src):
            move_dir(src, dst)
        else:
            rename_file(src, dst)
    except FSUtilsError as e:
        _fail(e)


@app.command("cp")
def cp_cmd(
    src: Annotated[str, typer.Argument(help="File to copy")],
    dst: Annotated[str, typer.Argument(help="New file; must not exist")],
) -> None:
    """Copy a file without overwriting."""
    try:
        copy_file(src, dst)
    except FSUtilsError as e:
        _fail(e)


if __name__ == "__main__":
    app()
