"""Depth-first tree walk producing tagged entries.

The walk visits the root first, then each child in the storage backend's
native listing order, descending into a subdirectory before moving on to
its next sibling. Nodes are classified with a non-following stat, so
symbolic links are reported as files and never traversed.

The first stat or listing failure aborts the walk. The collecting variants
publish nothing on failure; the streaming variant cannot recall entries it
has already sent.
"""

import os
import stat
from typing import Callable, Optional

import typer

from fs_utils.core import get_logger, get_tracer
from fs_utils.filesystem.entities import Dir, Sink
from fs_utils.schemas import EntryKind, TaggedEntry
from fs_utils.storage import StorageBackend, local_storage

logger = get_logger(__name__)
tracer = get_tracer(__name__)


def classify(mode: int) -> EntryKind:
    """Map a stat mode to the entry kind reported by the walk."""
    if stat.S_ISDIR(mode):
        return EntryKind.directory
    return EntryKind.file


def _visit(
    root: str, storage: StorageBackend, emit: Callable[[TaggedEntry], None]
) -> int:
    # Children are pushed in reverse so they pop in native listing order.
    pending = [root]
    count = 0
    while pending:
        path = pending.pop()
        kind = classify(storage.stat(path, follow_symlinks=False).st_mode)
        emit(TaggedEntry(kind=kind, path=path))
        count += 1
        if kind is EntryKind.directory:
            names = storage.list_directory(path)
            pending.extend(os.path.join(path, name) for name in reversed(names))
    return count


def walk(
    root: str,
    emit: Callable[[TaggedEntry], None],
    storage: Optional[StorageBackend] = None,
) -> int:
    """Walk ``root`` and pass every tagged entry to ``emit``.

    Args:
        root: Path to start from; visited first
        emit: Called once per visited node, in visitation order
        storage: Backend to walk; the local filesystem by default

    Returns:
        Number of entries emitted

    Raises:
        PathNotFoundError: If ``root`` does not exist
        StorageIOError: If any node cannot be stat'd or listed
    """
    storage = storage or local_storage

    with tracer.start_as_current_span("fs_utils.walk") as span:
        span.set_attribute("fs_utils.root", root)
        count = _visit(root, storage, emit)
        span.set_attribute("fs_utils.entry_count", count)

    logger.debug("Walk completed", root=root, entry_count=count)
    return count


def enumerate_dir(
    root: str, storage: Optional[StorageBackend] = None
) -> list[TaggedEntry]:
    """Return the tagged entries under ``root``, root included."""
    entries: list[TaggedEntry] = []
    walk(root, entries.append, storage)
    return entries


def stream_dir(
    root: str, sink: Sink = typer.echo, storage: Optional[StorageBackend] = None
) -> int:
    """Send ``"<tag>: <path>"`` to ``sink`` for each entry as it is visited."""
    return walk(root, lambda entry: sink(entry.tagged()), storage)


def enumerate_into(handle: Dir, storage: Optional[StorageBackend] = None) -> Dir:
    """Append the entries under ``handle.path`` to ``handle.children``.

    Prior children are kept. The handle is left untouched if the walk fails.
    """
    entries = enumerate_dir(handle.path, storage)
    return handle.bind(entries)
