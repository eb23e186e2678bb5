"""
PollWatch Change Detector.

Diffs two directory snapshots and propagates changes to ancestors.
Requires Python 3.11+.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from snapshot.models import EntryInfo, Snapshot
from utils.logger import LoggerMixin


class ParentStatus(Enum):
    """Outcome of looking up the parent of a path."""

    FOUND = "found"
    NONE = "none"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ParentLookup:
    """Parent lookup result; ``path`` is set only when status is FOUND."""

    status: ParentStatus
    path: str | None = None


def lookup_parent(path: str, info: EntryInfo | None = None) -> ParentLookup:
    """
    Find the directory containing ``path``.

    Uses the parent captured in the snapshot when available, otherwise
    derives it from the path itself.
    """
    if info is not None and info.parent_path is not None:
        return ParentLookup(ParentStatus.FOUND, info.parent_path)

    try:
        parent = os.path.dirname(path)
    except (TypeError, ValueError):
        return ParentLookup(ParentStatus.FAILED)

    if not parent or parent == path:
        return ParentLookup(ParentStatus.NONE)
    return ParentLookup(ParentStatus.FOUND, parent)


class ChangeDetector(LoggerMixin):
    """
    Detects changed paths between two snapshots of the same root.

    Every recorded path also records its containing directories up to,
    but not including, the watched root.
    """

    def __init__(self, root: str | Path) -> None:
        """
        Initialize the change detector.

        Args:
            root: The watched root; never reported as changed
        """
        self._root = os.path.abspath(root)

    @property
    def root(self) -> str:
        return self._root

    def record_changes(
        self,
        changes: set[str],
        old_snapshot: Snapshot,
        new_snapshot: Snapshot,
    ) -> set[str]:
        """
        Record every path that differs between two snapshots.

        Args:
            changes: Set to populate; reused by callers across cycles
            old_snapshot: Previous snapshot
            new_snapshot: Current snapshot

        Returns:
            The same ``changes`` set
        """
        for full_path, new_info in new_snapshot.items():
            old_info = old_snapshot.get(full_path)
            if old_info is None:
                # Added
                self._record(changes, new_info)
            elif not new_info.is_unchanged_from(old_info):
                # Modified, or replaced by an entry of another kind
                self._record(changes, new_info)

        for full_path, old_info in old_snapshot.items():
            if full_path not in new_snapshot:
                # Deleted
                self._record(changes, old_info)

        if changes:
            self.log.debug("changes_detected", root=self._root, count=len(changes))
        return changes

    def detect_changes(self, old_snapshot: Snapshot, new_snapshot: Snapshot) -> set[str]:
        """Diff two snapshots into a fresh change set."""
        return self.record_changes(set(), old_snapshot, new_snapshot)

    def _record(self, changes: set[str], info: EntryInfo) -> None:
        path: str | None = info.full_path
        current: EntryInfo | None = info

        while path is not None and path != self._root:
            if path in changes:
                # Ancestors were walked when this path was first recorded
                return
            changes.add(path)

            parent = lookup_parent(path, current)
            if parent.status is not ParentStatus.FOUND:
                return
            path = parent.path
            current = None
