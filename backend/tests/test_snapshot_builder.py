"""
Tests for Snapshot Builder.

Requires Python 3.11+.
"""

import os
from dataclasses import replace
from datetime import timezone
from pathlib import Path

import pytest

from snapshot.builder import SnapshotBuilder, build_snapshot
from snapshot.models import EntryInfo, EntryKind


def _symlink_or_skip(target: Path, link: Path) -> None:
    try:
        os.symlink(target, link, target_is_directory=target.is_dir())
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"symlinks unavailable: {e}")


class TestSnapshotBuilder:
    """Test cases for SnapshotBuilder."""

    @pytest.fixture
    def builder(self) -> SnapshotBuilder:
        """Create a builder instance."""
        return SnapshotBuilder()

    def test_build_captures_whole_tree(self, builder: SnapshotBuilder, watched_tree: Path):
        """Test every file and directory is captured by absolute path."""
        snapshot = builder.build(watched_tree)

        expected = {
            str(watched_tree / "top.txt"),
            str(watched_tree / "a"),
            str(watched_tree / "a" / "a.txt"),
            str(watched_tree / "a" / "b"),
            str(watched_tree / "a" / "b" / "b.txt"),
        }
        assert set(snapshot) == expected

    def test_root_not_in_snapshot(self, builder: SnapshotBuilder, watched_tree: Path):
        """Test the watched root is never an entry."""
        snapshot = builder.build(watched_tree)

        assert str(watched_tree) not in snapshot

    def test_entry_metadata(self, builder: SnapshotBuilder, watched_tree: Path):
        """Test kind, parent and timestamp of captured entries."""
        snapshot = builder.build(watched_tree)

        directory = snapshot[str(watched_tree / "a" / "b")]
        assert directory.kind is EntryKind.DIRECTORY
        assert directory.is_directory
        assert directory.parent_path == str(watched_tree / "a")

        file_path = watched_tree / "a" / "b" / "b.txt"
        file_entry = snapshot[str(file_path)]
        assert file_entry.kind is EntryKind.FILE
        assert file_entry.parent_path == str(watched_tree / "a" / "b")
        assert file_entry.mtime_ns == file_path.stat().st_mtime_ns
        assert file_entry.last_modified_utc.tzinfo is timezone.utc

    def test_relative_root_is_absolutized(
        self, builder: SnapshotBuilder, watched_tree: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test a relative root yields absolute keys."""
        monkeypatch.chdir(watched_tree.parent)
        snapshot = builder.build("root")

        assert str(watched_tree / "top.txt") in snapshot

    def test_missing_root_is_empty(self, builder: SnapshotBuilder, tmp_path: Path):
        """Test a missing root produces an empty snapshot instead of failing."""
        snapshot = builder.build(tmp_path / "missing")

        assert len(snapshot) == 0

    def test_file_root_is_empty(self, builder: SnapshotBuilder, tmp_path: Path):
        """Test a root that is a file produces an empty snapshot."""
        target = tmp_path / "plain.txt"
        target.write_text("x")

        assert len(builder.build(target)) == 0

    def test_empty_directory(self, builder: SnapshotBuilder, tmp_path: Path):
        """Test an empty directory produces an empty snapshot."""
        assert len(builder.build(tmp_path)) == 0

    def test_snapshot_is_read_only(self, builder: SnapshotBuilder, watched_tree: Path):
        """Test snapshots cannot be mutated."""
        snapshot = builder.build(watched_tree)

        with pytest.raises(TypeError):
            snapshot["extra"] = snapshot[str(watched_tree / "top.txt")]  # type: ignore[index]

    def test_snapshots_are_independent(self, builder: SnapshotBuilder, watched_tree: Path):
        """Test a later build does not alter an earlier snapshot."""
        first = builder.build(watched_tree)
        (watched_tree / "new.txt").write_text("new")
        second = builder.build(watched_tree)

        assert str(watched_tree / "new.txt") not in first
        assert str(watched_tree / "new.txt") in second

    def test_duplicate_listings_keep_first_entry(
        self, builder: SnapshotBuilder, watched_tree: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test a path listed twice is captured once, keeping the first occurrence."""
        expected = builder.build(watched_tree)
        listed = SnapshotBuilder._list_directory
        read_info = SnapshotBuilder._entry_info
        reads: dict[str, int] = {}

        def list_twice(path: str) -> list[os.DirEntry[str]]:
            entries = listed(path)
            return entries + listed(path)

        def numbered_info(entry: os.DirEntry[str], parent: str) -> EntryInfo | None:
            # Stamp each read with how often the path has been seen
            info = read_info(entry, parent)
            reads[entry.path] = reads.get(entry.path, 0) + 1
            return replace(info, mtime_ns=reads[entry.path])

        monkeypatch.setattr(SnapshotBuilder, "_list_directory", staticmethod(list_twice))
        monkeypatch.setattr(SnapshotBuilder, "_entry_info", staticmethod(numbered_info))
        snapshot = builder.build(watched_tree)

        assert len(snapshot) == len(expected) == 5
        assert set(snapshot) == set(expected)
        assert all(count == 2 for count in reads.values())
        assert all(info.mtime_ns == 1 for info in snapshot.values())

    @pytest.mark.skipif(
        os.name != "posix" or os.geteuid() == 0,
        reason="permission bits are not enforced",
    )
    def test_unreadable_subtree_is_omitted(self, builder: SnapshotBuilder, watched_tree: Path):
        """Test a subtree that cannot be listed is skipped, not fatal."""
        locked = watched_tree / "a" / "b"
        locked.chmod(0)
        try:
            snapshot = builder.build(watched_tree)
        finally:
            locked.chmod(0o755)

        assert str(locked) in snapshot
        assert str(locked / "b.txt") not in snapshot
        assert str(watched_tree / "a" / "a.txt") in snapshot


class TestSymlinks:
    """Test cases for symlink handling."""

    def test_symlinked_directory_not_followed_by_default(self, watched_tree: Path):
        """Test links are recorded but not descended into."""
        link = watched_tree / "link"
        _symlink_or_skip(watched_tree / "a", link)

        snapshot = build_snapshot(watched_tree)

        assert str(link) in snapshot
        assert str(link / "a.txt") not in snapshot

    def test_follow_symlinks_descends(self, tmp_path: Path, watched_tree: Path):
        """Test links are descended into when requested."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "o.txt").write_text("o")
        link = watched_tree / "link"
        _symlink_or_skip(outside, link)

        snapshot = build_snapshot(watched_tree, follow_symlinks=True)

        assert str(link / "o.txt") in snapshot

    def test_symlink_cycle_terminates(self, watched_tree: Path):
        """Test a link back to the root does not loop."""
        link = watched_tree / "a" / "b" / "loop"
        _symlink_or_skip(watched_tree, link)

        snapshot = build_snapshot(watched_tree, follow_symlinks=True)

        assert str(link) in snapshot
        assert str(link / "top.txt") not in snapshot

    def test_dangling_symlink_is_recorded(self, watched_tree: Path):
        """Test a link whose target is missing is captured as the link itself."""
        link = watched_tree / "dangling"
        _symlink_or_skip(watched_tree / "nowhere", link)

        snapshot = build_snapshot(watched_tree)

        assert snapshot[str(link)].kind is EntryKind.FILE
        assert snapshot[str(link)].mtime_ns == os.lstat(link).st_mtime_ns
        assert str(watched_tree / "top.txt") in snapshot

    def test_dangling_symlink_removal_is_detected(self, watched_tree: Path):
        """Test removing a dangling link shows up between snapshots."""
        link = watched_tree / "a" / "dangling"
        _symlink_or_skip(watched_tree / "nowhere", link)
        before = build_snapshot(watched_tree)

        link.unlink()
        after = build_snapshot(watched_tree)

        assert str(link) in before
        assert str(link) not in after
