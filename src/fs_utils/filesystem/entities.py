"""In-memory handles mirroring a directory or a file on disk.

A handle is a snapshot: it is populated by a read or a create, and cleared
by a successful remove. Nothing refreshes it when the disk changes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

import typer

from fs_utils.core.exceptions import ValidationError
from fs_utils.schemas import TaggedEntry

Sink = Callable[[str], Any]


class HandleState(str, Enum):
    """Lifecycle state of a handle.

    ``unbound`` handles were never populated; ``released`` handles were
    populated once and then cleared by a remove.
    """

    unbound = "unbound"
    bound = "bound"
    released = "released"


def _require_path(path: str, handle: str) -> None:
    if not path:
        raise ValidationError(f"{handle} handle has no path")


@dataclass
class Dir:
    """Directory handle.

    Attributes:
        path: Directory path; empty once released
        children: Tagged entries from the last enumeration
        state: Lifecycle state
    """

    path: str = ""
    children: list[TaggedEntry] = field(default_factory=list)
    state: HandleState = HandleState.unbound

    @property
    def is_bound(self) -> bool:
        return self.state is HandleState.bound

    def bind(self, children: Optional[list[TaggedEntry]] = None) -> "Dir":
        """Append ``children`` and mark the snapshot valid."""
        _require_path(self.path, "Dir")
        if children:
            self.children.extend(children)
        self.state = HandleState.bound
        return self

    def release(self) -> list[TaggedEntry]:
        """Clear the handle and return the children it held."""
        previous = self.children
        self.path = ""
        self.children = []
        self.state = HandleState.released
        return previous

    def tagged_children(self) -> list[str]:
        return [child.tagged() for child in self.children]

    def output(self, sink: Sink = typer.echo) -> None:
        sink(f"Path: {self.path}")
        sink(f"Children: {self.tagged_children()}")


@dataclass
class File:
    """File handle.

    Attributes:
        path: File path; empty once released
        content: Lines from the last read, without terminators
        state: Lifecycle state
    """

    path: str = ""
    content: list[str] = field(default_factory=list)
    state: HandleState = HandleState.unbound

    @property
    def is_bound(self) -> bool:
        return self.state is HandleState.bound

    def bind(self, content: Optional[list[str]] = None) -> "File":
        """Append ``content`` and mark the snapshot valid."""
        _require_path(self.path, "File")
        if content:
            self.content.extend(content)
        self.state = HandleState.bound
        return self

    def release(self) -> list[str]:
        """Clear the handle and return the content it held."""
        previous = self.content
        self.path = ""
        self.content = []
        self.state = HandleState.released
        return previous

    def output(self, sink: Sink = typer.echo) -> None:
        sink(f"Path: {self.path}")
        sink(f"Content: {self.content}")
