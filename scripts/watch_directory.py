#!/usr/bin/env python3
"""
PollWatch Directory Watch Script.

Prints a line for every change reported under a directory.
Requires Python 3.11+.

Usage:
    python scripts/watch_directory.py /path/to/project --polling
"""

import argparse
import sys
import threading
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from utils.config import get_settings
from utils.logger import configure_logging, get_logger
from watcher.factory import create_watcher


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Report file changes under a directory"
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path.cwd(),
        help="Directory to watch",
    )
    parser.add_argument(
        "--polling",
        action="store_true",
        default=None,
        help="Use the polling watcher (default: WATCHER_USE_POLLING)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL",
    )

    args = parser.parse_args()

    configure_logging(args.log_level)
    logger = get_logger("watch_directory")

    if not args.path.is_dir():
        print(f"Error: Path is not a directory: {args.path}")
        sys.exit(1)

    def on_change(path: str, is_new_file: bool) -> None:
        marker = "+" if is_new_file else "~"
        print(f"{marker} {path}", flush=True)

    settings = get_settings()
    watcher = create_watcher(
        args.path,
        on_file_change=on_change,
        use_polling=args.polling,
        enable_raising_events=True,
    )
    logger.info(
        "watching",
        path=watcher.base_path,
        watcher=type(watcher).__name__,
        interval=settings.watcher.poll_interval_seconds,
    )

    stop = threading.Event()
    try:
        with watcher:
            stop.wait()
    except KeyboardInterrupt:
        print("\nStopped")


if __name__ == "__main__":
    main()
