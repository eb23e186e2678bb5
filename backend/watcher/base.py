"""
PollWatch Watcher Contract.

Common surface shared by the polling and event-based watchers.
Requires Python 3.11+.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from utils.logger import LoggerMixin
from watcher.errors import WatcherDisposedError
from watcher.notifications import FileChangeListener, NotificationSink


def resolve_watched_directory(watched_directory: str | Path) -> str:
    """
    Validate and absolutize a directory to watch.

    A ``Path`` compares equal to ``Path("")`` when built from an empty
    string, so such paths are rejected as well.

    Raises:
        ValueError: If the path is empty
    """
    if watched_directory is None:
        empty = True
    elif isinstance(watched_directory, Path):
        empty = watched_directory == Path("")
    else:
        empty = not os.fspath(watched_directory)
    if empty:
        raise ValueError("watched_directory must be a non-empty path")
    return os.path.abspath(watched_directory)


class FileSystemWatcher(ABC, LoggerMixin):
    """
    A watcher over one directory tree.

    Changes are reported to listeners as ``listener(path, is_new_file)``
    while ``enable_raising_events`` is true. Once disposed, the watcher
    stays silent and rejects configuration access.
    """

    def __init__(self, watched_directory: str | Path) -> None:
        self._base_path = resolve_watched_directory(watched_directory)
        self._sink = NotificationSink()

    @property
    def base_path(self) -> str:
        """Absolute path of the watched root."""
        return self._base_path

    @property
    @abstractmethod
    def is_disposed(self) -> bool:
        """Whether dispose() has been called."""

    @property
    @abstractmethod
    def enable_raising_events(self) -> bool:
        """Whether change notifications are delivered."""

    @enable_raising_events.setter
    @abstractmethod
    def enable_raising_events(self, value: bool) -> None: ...

    @abstractmethod
    def dispose(self) -> None:
        """Stop watching; further notifications are never delivered."""

    def subscribe(self, listener: FileChangeListener) -> None:
        """Register a change listener."""
        self._sink.subscribe(listener)

    def unsubscribe(self, listener: FileChangeListener) -> None:
        """Remove a change listener."""
        self._sink.unsubscribe(listener)

    def set_event_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Set the event loop for async listeners."""
        self._sink.set_event_loop(loop)

    @property
    def listener_count(self) -> int:
        """Get number of registered listeners."""
        return self._sink.listener_count

    def close(self) -> None:
        """Alias for dispose()."""
        self.dispose()

    def _ensure_not_disposed(self) -> None:
        if self.is_disposed:
            raise WatcherDisposedError(self.__class__.__name__)

    def __enter__(self) -> "FileSystemWatcher":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.dispose()
