"""
PollWatch Utilities Package.

Settings and structured logging shared by the snapshot and watcher packages.
Requires Python 3.11+.
"""

from utils.config import LoggingSettings, Settings, WatcherSettings, get_settings
from utils.logger import LoggerMixin, configure_logging, get_logger

__all__ = [
    "LoggingSettings",
    "Settings",
    "WatcherSettings",
    "get_settings",
    "LoggerMixin",
    "configure_logging",
    "get_logger",
]
