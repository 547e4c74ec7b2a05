from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A controllable clock so timestamped file names are deterministic.
3. Reset of the process-wide default logger between tests.
"""

import os
import sys
from datetime import datetime, timedelta
from typing import Generator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from stamplog import facade  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------

class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """
    Return a clock frozen at 2026-01-31 23:10:15.250.

    Returns:
        FakeClock: Callable returning the current fake time.
    """
    return FakeClock(datetime(2026, 1, 31, 23, 10, 15, 250000))


@pytest.fixture(autouse=True)
def reset_default_logger() -> Generator[None, None, None]:
    """Close and forget the process-wide default logger around each test."""
    facade._default_logger = None
    facade._init_fired = False
    yield
    if facade._default_logger is not None:
        facade._default_logger.close()
    facade._default_logger = None
    facade._init_fired = False
