from __future__ import annotations

import sys
import time
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from PySide6.QtCore import QCoreApplication  # noqa: E402

from ev_dash.models.dashboard_state import DashboardSnapshot  # noqa: E402
from ev_dash.services.trip_store import MemoryTripFlagStore  # noqa: E402

# 13:22 local time on an arbitrary day
FIXED_TIME = time.struct_time((2024, 5, 17, 13, 22, 0, 4, 138, -1))


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """QTimer and QThreadPool need an application object."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def snapshot() -> DashboardSnapshot:
    return DashboardSnapshot()


@pytest.fixture
def memory_store() -> MemoryTripFlagStore:
    return MemoryTripFlagStore()


@pytest.fixture
def saved_trip_store() -> MemoryTripFlagStore:
    return MemoryTripFlagStore({"tripInProgress": "true"})


class SignalRecorder:
    """Collects the arguments of every emission of a Qt signal."""

    def __init__(self, signal):
        self.calls = []
        signal.connect(self._record)

    def _record(self, *args):
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder():
    return SignalRecorder


def _pump(duration_ms: int) -> None:
    """Run the Qt event loop for roughly duration_ms so timers can fire."""
    app = QCoreApplication.instance()
    deadline = time.monotonic() + duration_ms / 1000
    while time.monotonic() < deadline:
        app.processEvents()
        time.sleep(0.002)


@pytest.fixture
def pump_events():
    return _pump
