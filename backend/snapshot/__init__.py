"""
PollWatch Snapshot Package.

Directory snapshots and snapshot diffing for polling change detection.
Requires Python 3.11+.
"""

from snapshot.models import EMPTY_SNAPSHOT, EntryInfo, EntryKind, Snapshot
from snapshot.builder import SnapshotBuilder, build_snapshot
from snapshot.change_detector import (
    ChangeDetector,
    ParentLookup,
    ParentStatus,
    lookup_parent,
)

__all__ = [
    # Models
    "EMPTY_SNAPSHOT",
    "EntryInfo",
    "EntryKind",
    "Snapshot",
    # Building
    "SnapshotBuilder",
    "build_snapshot",
    # Diffing
    "ChangeDetector",
    "ParentLookup",
    "ParentStatus",
    "lookup_parent",
]
