"""
PollWatch Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

from pathlib import Path

import pytest

from tests.helpers import EventRecorder
from utils.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recorder() -> EventRecorder:
    """Create an event recorder."""
    return EventRecorder()


@pytest.fixture
def watched_tree(tmp_path: Path) -> Path:
    """
    Create a small tree to watch.

    Layout:
        root/
            top.txt
            a/
                a.txt
                b/
                    b.txt
    """
    root = tmp_path / "root"
    (root / "a" / "b").mkdir(parents=True)
    (root / "top.txt").write_text("top")
    (root / "a" / "a.txt").write_text("a")
    (root / "a" / "b" / "b.txt").write_text("b")
    return root
