"""
PollWatch Watcher Factory.

Requires Python 3.11+.
"""

from pathlib import Path

from utils.config import get_settings
from utils.logger import get_logger
from watcher.base import FileSystemWatcher
from watcher.file_watcher import EventBasedFileWatcher
from watcher.notifications import FileChangeListener
from watcher.polling_watcher import PollingFileWatcher

logger = get_logger("watcher.factory")


def create_watcher(
    watched_directory: str | Path,
    on_file_change: FileChangeListener | None = None,
    use_polling: bool | None = None,
    enable_raising_events: bool | None = None,
) -> FileSystemWatcher:
    """
    Create a watcher for a directory.

    Args:
        watched_directory: Directory to watch
        on_file_change: Optional listener to subscribe
        use_polling: Force polling (True) or native events (False);
            defaults to WATCHER_USE_POLLING
        enable_raising_events: Initial enable flag; defaults to WATCHER_ENABLED

    Returns:
        A polling or event-based watcher
    """
    settings = get_settings().watcher
    if use_polling is None:
        use_polling = settings.use_polling
    if enable_raising_events is None:
        enable_raising_events = settings.enabled

    logger.debug(
        "creating_watcher",
        path=str(watched_directory),
        polling=use_polling,
    )

    if use_polling:
        return PollingFileWatcher(
            watched_directory,
            on_file_change=on_file_change,
            enable_raising_events=enable_raising_events,
        )
    return EventBasedFileWatcher(
        watched_directory,
        on_file_change=on_file_change,
        enable_raising_events=enable_raising_events,
    )
