"""
PollWatch File Watcher Package.

Polling and event-based file system monitoring.
Requires Python 3.11+.
"""

from watcher.base import FileSystemWatcher
from watcher.errors import WatcherDisposedError
from watcher.factory import create_watcher
from watcher.file_watcher import EventBasedFileWatcher
from watcher.notifications import FileChangeListener, NotificationSink
from watcher.polling_watcher import PollingFileWatcher

__all__ = [
    "FileSystemWatcher",
    "WatcherDisposedError",
    "create_watcher",
    "EventBasedFileWatcher",
    "FileChangeListener",
    "NotificationSink",
    "PollingFileWatcher",
]
