"""Record schemas for fs-utils."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntryKind(str, Enum):
    """Kind of a filesystem node at traversal time."""

    directory = "dir"
    file = "file"


class TaggedEntry(BaseModel):
    """A path paired with the kind of node found there."""

    model_config = ConfigDict(frozen=True)

    kind: EntryKind = Field(..., description="Node kind at traversal time")
    path: str = Field(..., description="Full path as produced by the walk")

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.directory

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.file

    def tagged(self) -> str:
        """Serialize as ``"<tag>: <path>"`` for line-oriented output."""
        return f"{self.kind.value}: {self.path}"

    def __str__(self) -> str:
        return self.tagged()
