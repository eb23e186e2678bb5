"""
PollWatch Snapshot Data Models.

Defines the point-in-time view of a watched directory tree.
Requires Python 3.11+.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType


class EntryKind(str, Enum):
    """Kinds of filesystem entries captured in a snapshot."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class EntryInfo:
    """Metadata captured for a single file or directory."""

    full_path: str
    kind: EntryKind
    mtime_ns: int
    parent_path: str | None = None

    @property
    def last_modified_utc(self) -> datetime:
        """Last modification time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.mtime_ns / 1_000_000_000, tz=timezone.utc)

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def is_unchanged_from(self, other: "EntryInfo") -> bool:
        """Entries are unchanged when kind and timestamp both match."""
        return self.kind is other.kind and self.mtime_ns == other.mtime_ns


# Read-only view; builders fill a plain dict and wrap it once complete.
Snapshot = Mapping[str, EntryInfo]

EMPTY_SNAPSHOT: Snapshot = MappingProxyType({})


def freeze_snapshot(entries: dict[str, EntryInfo]) -> Snapshot:
    """Wrap a finished entry dict as an immutable snapshot."""
    return MappingProxyType(entries)
