"""Animated quantities: the car sweep and the distilled water level."""

from __future__ import annotations

import logging
from collections import deque

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from ev_dash.models.dashboard_state import (
    CAR_STEP,
    CAR_TRACK_MAX,
    WATER_FLOOR,
    WATER_WINDOW,
    DashboardSnapshot,
)
from ev_dash.models.data_records import WaterPoint
from ev_dash.utils.numeric import clamp_floor

logger = logging.getLogger(__name__)


class MotionDriver(QObject):
    """
    Second periodic driver, independent of the telemetry simulator.

    Car position is a sawtooth: 0, 5, ..., 90, 0, ...
    Water level drains by a fixed amount per tick and stops at the floor.
    The chart keeps only the most recent `window` samples (at least one).
    """

    # Signals
    moved = Signal()

    # Configuration
    INTERVAL_MS = 1000
    WATER_DRAIN = 0.03
    WATER_INITIAL = 6.0

    def __init__(
        self,
        snapshot: DashboardSnapshot,
        interval_ms: int = INTERVAL_MS,
        car_step: int = CAR_STEP,
        car_max: int = CAR_TRACK_MAX,
        water_initial: float = WATER_INITIAL,
        water_floor: float = WATER_FLOOR,
        water_drain: float = WATER_DRAIN,
        window: int = WATER_WINDOW,
    ):
        super().__init__()
        self._snapshot = snapshot
        self._car_step = car_step
        self._car_max = car_max
        self._water_floor = water_floor
        self._water_drain = water_drain
        self._window = max(1, window)
        self._running = False

        with snapshot.locked() as snap:
            snap.car_position = 0
            snap.water_series = deque(
                [WaterPoint(0, clamp_floor(water_initial, water_floor))],
                maxlen=self._window,
            )

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @Slot()
    def start(self) -> None:
        """Start animating. No-op if already running."""
        if self._running:
            return
        self._running = True
        self._timer.start()
        logger.debug("Motion driver started (%d ms)", self._timer.interval())

    @Slot()
    def stop(self) -> None:
        """Stop animating. Safe to call more than once."""
        if not self._running:
            return
        self._running = False
        self._timer.stop()
        logger.debug("Motion driver stopped")

    @Slot()
    def _on_timeout(self) -> None:
        if not self._running:
            return
        self.step()

    def step(self) -> None:
        """Advance both animations by one tick."""
        with self._snapshot.locked() as snap:
            snap.car_position = self.next_car_position(snap.car_position)

            series = snap.water_series
            level = clamp_floor(series[-1].level - self._water_drain, self._water_floor)
            series.append(WaterPoint(len(series), level))

        self.moved.emit()

    def next_car_position(self, position: int) -> int:
        """Sawtooth step: wrap to 0 once the end of the track is reached."""
        if position >= self._car_max:
            return 0
        return min(position + self._car_step, self._car_max)
