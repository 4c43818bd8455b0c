"""
Configuration for pytest to set up the import path and shared fixtures.
"""

import sys
from pathlib import Path
from typing import Any, Callable, List, Tuple
import pytest


# Add the project root to the Python path so `import underbar` works uninstalled
parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir))


class RecordingScheduler:
    """Stand-in timer facility: records scheduled callbacks and fires them on demand."""

    def __init__(self):
        self.pending: List[Tuple[float, Callable, Tuple[Any, ...]]] = []

    def __call__(self, seconds: float, callback: Callable, *args):
        self.pending.append((seconds, callback, args))

    def fire_all(self):
        """Run every pending callback, as if all timers had expired."""
        due, self.pending = self.pending, []
        for _seconds, callback, args in due:
            callback(*args)


@pytest.fixture
def scheduler():
    """Fixture providing a fresh RecordingScheduler."""
    return RecordingScheduler()


@pytest.fixture
def recorder():
    """Fixture providing a function that records every call it receives."""
    calls = []

    def record(*args, **kwargs):
        calls.append((args, kwargs))
        return len(calls)

    record.calls = calls
    return record
