"""
PollWatch Watcher Errors.

Requires Python 3.11+.
"""


class WatcherDisposedError(RuntimeError):
    """Raised when a disposed watcher is read or reconfigured."""

    def __init__(self, watcher_name: str) -> None:
        super().__init__(f"Cannot access a disposed watcher: {watcher_name}")
        self.watcher_name = watcher_name
