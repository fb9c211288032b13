"""Fire-and-forget directory walks identified by a correlation id.

``read_dir_detached`` hands back an id as soon as the walk is submitted.
The id never carries a result: progress, completion and failure are all
reported through the sink, prefixed with the id.
"""

import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional

import typer

from fs_utils.core import get_logger, settings
from fs_utils.core.exceptions import FSUtilsError
from fs_utils.filesystem.entities import Sink
from fs_utils.filesystem.walker import walk
from fs_utils.storage import StorageBackend

logger = get_logger(__name__)

_executor = ThreadPoolExecutor(
    max_workers=settings.detached_walk_workers,
    thread_name_prefix="fs-utils-walk",
)
_pending: dict[str, Future] = {}
_pending_lock = threading.Lock()


def _run_walk(
    walk_id: str, root: str, sink: Sink, storage: Optional[StorageBackend]
) -> None:
    prefix = f"[{walk_id}] "
    try:
        count = walk(root, lambda entry: sink(prefix + entry.tagged()), storage)
    except FSUtilsError as e:
        logger.error("Detached walk failed", walk_id=walk_id, root=root, error=str(e))
        sink(f"{prefix}failed: {e}")
        return

    logger.info("Detached walk finished", walk_id=walk_id, root=root, entry_count=count)
    sink(f"{prefix}done: {count} entries")


def _forget(walk_id: str, future: Future) -> None:
    with _pending_lock:
        _pending.pop(walk_id, None)
    error = future.exception()
    if error is not None:
        logger.error("Detached walk crashed", walk_id=walk_id, error=str(error))


def read_dir_detached(
    root: str, sink: Sink = typer.echo, storage: Optional[StorageBackend] = None
) -> str:
    """Start a walk of ``root`` and return its correlation id immediately.

    Args:
        root: Directory to walk
        sink: Receives the starting notice, each entry and the final status
        storage: Backend to walk; the local filesystem by default

    Returns:
        Hex correlation id prefixed to every line the walk emits
    """
    walk_id = uuid.uuid4().hex
    logger.info("Starting detached walk", walk_id=walk_id, root=root)
    sink(f"[{walk_id}] starting: {root}")

    if settings.detached_walk_inline:
        _run_walk(walk_id, root, sink, storage)
        return walk_id

    with _pending_lock:
        future = _executor.submit(_run_walk, walk_id, root, sink, storage)
        _pending[walk_id] = future
    future.add_done_callback(lambda done: _forget(walk_id, done))
    return walk_id


def wait_for_walk(walk_id: str, timeout: Optional[float] = None) -> bool:
    """Block until the walk identified by ``walk_id`` has finished.

    Returns:
        False if ``timeout`` expired first; True otherwise, including for
        ids that are unknown or already finished
    """
    with _pending_lock:
        future = _pending.get(walk_id)
    if future is None:
        return True

    done, _ = wait([future], timeout=timeout)
    return bool(done)
