"""
PollWatch Polling File Watcher.

Detects changes by periodically snapshotting and diffing a directory tree,
for filesystems where native change notifications are unreliable.
Requires Python 3.11+.
"""

import threading
import time
from pathlib import Path

from snapshot.builder import SnapshotBuilder
from snapshot.change_detector import ChangeDetector
from snapshot.models import Snapshot
from utils.config import get_settings
from watcher.base import FileSystemWatcher
from watcher.notifications import FileChangeListener


class PollingFileWatcher(FileSystemWatcher):
    """
    Watches a directory tree by polling.

    A daemon worker thread starts on construction and keeps snapshotting
    whether or not events are enabled, so that enabling events never
    reports the whole tree as changed. Every changed path, and each of its
    ancestors below the root, is reported once per cycle with
    ``is_new_file=False``.
    """

    def __init__(
        self,
        watched_directory: str | Path,
        on_file_change: FileChangeListener | None = None,
        enable_raising_events: bool = False,
        min_interval: float | None = None,
        follow_symlinks: bool | None = None,
    ) -> None:
        """
        Initialize the watcher and start polling.

        Args:
            watched_directory: Directory to watch; need not exist yet
            on_file_change: Optional listener to subscribe before polling starts
            enable_raising_events: Initial value of the enable flag
            min_interval: Minimum cycle duration in seconds
            follow_symlinks: Whether to descend into symlinked directories

        Raises:
            ValueError: If ``watched_directory`` is empty
        """
        super().__init__(watched_directory)
        settings = get_settings().watcher

        self._min_interval = (
            min_interval if min_interval is not None else settings.poll_interval_seconds
        )
        self._builder = SnapshotBuilder(
            follow_symlinks=(
                follow_symlinks if follow_symlinks is not None else settings.follow_symlinks
            )
        )
        self._detector = ChangeDetector(self.base_path)

        self._raise_events = enable_raising_events
        self._disposed = threading.Event()

        if on_file_change is not None:
            self.subscribe(on_file_change)

        self._polling_thread = threading.Thread(
            target=self._polling_loop,
            name=self.__class__.__name__,
            daemon=True,
        )
        self._polling_thread.start()

        self.log.info(
            "polling_watcher_started",
            path=self.base_path,
            min_interval=self._min_interval,
            enabled=enable_raising_events,
        )

    @property
    def is_disposed(self) -> bool:
        return self._disposed.is_set()

    @property
    def enable_raising_events(self) -> bool:
        self._ensure_not_disposed()
        return self._raise_events

    @enable_raising_events.setter
    def enable_raising_events(self, value: bool) -> None:
        self._ensure_not_disposed()
        self._raise_events = value

    @property
    def min_interval(self) -> float:
        """Minimum duration of a polling cycle, in seconds."""
        return self._min_interval

    @property
    def is_alive(self) -> bool:
        """Check if the worker thread is still running."""
        return self._polling_thread.is_alive()

    def dispose(self) -> None:
        """
        Stop polling.

        Returns immediately; the worker exits at its next checkpoint.
        Calling dispose() again is a no-op.
        """
        if self._disposed.is_set():
            return

        self._raise_events = False
        self._disposed.set()
        self.log.info("polling_watcher_disposed", path=self.base_path)

    def _polling_loop(self) -> None:
        current_snapshot = self._builder.build(self.base_path)
        changes: set[str] = set()
        cycle_started = time.monotonic()

        while not self._disposed.is_set():
            if time.monotonic() - cycle_started < self._min_interval:
                # Waits the full interval, so cycles can be up to twice as far apart
                self._disposed.wait(self._min_interval)
            if self._disposed.is_set():
                break

            cycle_started = time.monotonic()
            try:
                current_snapshot = self._poll(current_snapshot, changes)
            except Exception as e:
                self.log.error("polling_cycle_failed", path=self.base_path, error=str(e))
            finally:
                changes.clear()

        self.log.debug("polling_loop_exited", path=self.base_path)

    def _poll(self, previous_snapshot: Snapshot, changes: set[str]) -> Snapshot:
        """Run one cycle and return the snapshot that becomes the new baseline."""
        raise_events = self._raise_events

        # Snapshot even while disabled to keep the baseline current
        new_snapshot = self._builder.build(self.base_path)

        if raise_events and not self._disposed.is_set():
            self._detector.record_changes(changes, previous_snapshot, new_snapshot)
            if changes:
                delivered = self._sink.notify_all(changes, self._should_notify)
                self.log.debug(
                    "changes_notified",
                    path=self.base_path,
                    changed=len(changes),
                    delivered=delivered,
                )

        return new_snapshot

    def _should_notify(self) -> bool:
        return self._raise_events and not self._disposed.is_set()
