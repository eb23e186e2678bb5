"""
PollWatch Snapshot Builder.

Captures a full recursive listing of a directory tree.
Requires Python 3.11+.
"""

import os
from pathlib import Path

from snapshot.models import (
    EMPTY_SNAPSHOT,
    EntryInfo,
    EntryKind,
    Snapshot,
    freeze_snapshot,
)
from utils.logger import LoggerMixin


class SnapshotBuilder(LoggerMixin):
    """
    Walks a directory tree and records metadata for every entry.

    The builder never raises for filesystem races: an unobservable root
    yields an empty snapshot, and entries or subtrees that vanish or deny
    access mid-walk are left out. Both show up as deletions on the next diff.
    """

    def __init__(self, follow_symlinks: bool = False) -> None:
        """
        Initialize the snapshot builder.

        Args:
            follow_symlinks: Whether to descend into symlinked directories
        """
        self._follow_symlinks = follow_symlinks

    def build(self, root: str | Path) -> Snapshot:
        """
        Build a snapshot of everything below ``root``.

        The root itself is not part of the snapshot.

        Args:
            root: Directory to walk

        Returns:
            Immutable mapping of absolute path to EntryInfo
        """
        root_path = os.path.abspath(root)

        try:
            top_level = self._list_directory(root_path)
        except OSError as e:
            # Missing, not a directory, or access denied
            self.log.debug("snapshot_root_unavailable", path=root_path, error=str(e))
            return EMPTY_SNAPSHOT

        entries: dict[str, EntryInfo] = {}
        visited: set[str] = {os.path.realpath(root_path)}
        pending: list[tuple[str, list[os.DirEntry[str]]]] = [(root_path, top_level)]

        while pending:
            parent, listing = pending.pop()
            for entry in listing:
                info = self._entry_info(entry, parent)
                if info is None:
                    continue

                # Listings are not guaranteed to be unique; keep the first one
                if info.full_path in entries:
                    continue
                entries[info.full_path] = info

                if info.is_directory and self._should_descend(entry, visited):
                    try:
                        pending.append((info.full_path, self._list_directory(info.full_path)))
                    except OSError:
                        # Subtree vanished or denied access
                        continue

        self.log.debug("snapshot_built", path=root_path, entries=len(entries))
        return freeze_snapshot(entries)

    @staticmethod
    def _list_directory(path: str) -> list[os.DirEntry[str]]:
        with os.scandir(path) as it:
            return list(it)

    @staticmethod
    def _entry_info(entry: os.DirEntry[str], parent: str) -> EntryInfo | None:
        """Read metadata for a listed entry, or None if it is gone."""
        try:
            stat = entry.stat()
            is_dir = entry.is_dir()
        except FileNotFoundError:
            # Dangling links are still entries; record the link itself
            try:
                if not entry.is_symlink():
                    return None
                stat = entry.stat(follow_symlinks=False)
            except OSError:
                return None
            is_dir = False
        except OSError:
            return None

        return EntryInfo(
            full_path=entry.path,
            kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
            mtime_ns=stat.st_mtime_ns,
            parent_path=parent,
        )

    def _should_descend(self, entry: os.DirEntry[str], visited: set[str]) -> bool:
        try:
            is_link = entry.is_symlink()
        except OSError:
            return False

        if not is_link:
            if self._follow_symlinks:
                visited.add(os.path.realpath(entry.path))
            return True

        if not self._follow_symlinks:
            return False

        # Link cycles would otherwise walk forever
        target = os.path.realpath(entry.path)
        if target in visited:
            return False
        visited.add(target)
        return True


def build_snapshot(root: str | Path, *, follow_symlinks: bool = False) -> Snapshot:
    """Build a snapshot of ``root`` with a one-off builder."""
    return SnapshotBuilder(follow_symlinks=follow_symlinks).build(root)
