"""
PollWatch Event-Based File Watcher.

Native file system notifications using watchdog.
Requires Python 3.11+.
"""

import os
import threading
from pathlib import Path

from watchdog.events import (
    DirCreatedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
    DirMovedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from watcher.base import FileSystemWatcher
from watcher.notifications import FileChangeListener


class ChangeForwardingHandler(FileSystemEventHandler):
    """
    Forwards watchdog events to a watcher as (path, is_new_file) pairs.

    Creations report ``is_new_file=True``; a move reports its source as a
    plain change and its destination as new.
    """

    def __init__(self, watcher: "EventBasedFileWatcher") -> None:
        """
        Initialize the handler.

        Args:
            watcher: Watcher whose listeners receive the changes
        """
        super().__init__()
        self._watcher = watcher

    def on_created(self, event: FileCreatedEvent | DirCreatedEvent) -> None:
        """Handle file/directory creation."""
        self._watcher._forward(os.fsdecode(event.src_path), True)

    def on_modified(self, event: FileModifiedEvent | DirModifiedEvent) -> None:
        """Handle file/directory modification."""
        self._watcher._forward(os.fsdecode(event.src_path), False)

    def on_deleted(self, event: FileDeletedEvent | DirDeletedEvent) -> None:
        """Handle file/directory deletion."""
        self._watcher._forward(os.fsdecode(event.src_path), False)

    def on_moved(self, event: FileMovedEvent | DirMovedEvent) -> None:
        """Handle file/directory move/rename."""
        self._watcher._forward(os.fsdecode(event.src_path), False)
        self._watcher._forward(os.fsdecode(event.dest_path), True)


class EventBasedFileWatcher(FileSystemWatcher):
    """
    Watches a directory tree through the platform's native notifications.

    The watchdog observer only runs while events are enabled; the watched
    directory must exist at that point.
    """

    def __init__(
        self,
        watched_directory: str | Path,
        on_file_change: FileChangeListener | None = None,
        enable_raising_events: bool = False,
    ) -> None:
        """
        Initialize the watcher.

        Args:
            watched_directory: Directory to watch
            on_file_change: Optional listener to subscribe
            enable_raising_events: Start the observer immediately

        Raises:
            ValueError: If ``watched_directory`` is empty
        """
        super().__init__(watched_directory)
        self._handler = ChangeForwardingHandler(self)
        self._observer: BaseObserver | None = None
        self._lock = threading.Lock()
        self._disposed = False

        if on_file_change is not None:
            self.subscribe(on_file_change)

        if enable_raising_events:
            self.enable_raising_events = True

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def enable_raising_events(self) -> bool:
        self._ensure_not_disposed()
        return self._observer is not None

    @enable_raising_events.setter
    def enable_raising_events(self, value: bool) -> None:
        self._ensure_not_disposed()
        if value:
            self._start()
        else:
            self._stop()

    def dispose(self) -> None:
        """Stop the observer. Calling dispose() again is a no-op."""
        if self._disposed:
            return
        self._disposed = True
        self._stop()
        self.log.info("event_watcher_disposed", path=self.base_path)

    def _start(self) -> None:
        with self._lock:
            if self._observer is not None:
                return

            observer = Observer()
            observer.schedule(self._handler, self.base_path, recursive=True)
            observer.start()
            self._observer = observer

        self.log.info("event_watcher_started", path=self.base_path)

    def _stop(self) -> None:
        with self._lock:
            observer, self._observer = self._observer, None

        if observer is not None:
            observer.stop()
            observer.join(timeout=5.0)
            self.log.info("event_watcher_stopped", path=self.base_path)

    def _forward(self, path: str, is_new_file: bool) -> None:
        if self._disposed or self._observer is None:
            return
        self._sink.notify(path, is_new_file)
