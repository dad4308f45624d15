"""Synthetic telemetry: speed, battery, clock and cycle count."""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from ev_dash.models.dashboard_state import (
    BATTERY_RANGE,
    SPEED_RANDOM_CEILING,
    DashboardSnapshot,
)
from ev_dash.utils.clock import Clock, format_clock
from ev_dash.utils.numeric import clamp

logger = logging.getLogger(__name__)


class TelemetrySimulator(QObject):
    """
    Periodic driver for the live gauges.

    Every tick:
    - time: current wall clock
    - cycles: +1 (saturates at cycle_limit when one is set)
    - speed: random integer in [0, 79]
    - battery: +/- battery_step, clamped to [0, 100]

    Only touches the fields above; everything else in the snapshot belongs
    to other services.
    """

    # Signals
    ticked = Signal()

    # Configuration
    INTERVAL_MS = 2000
    BATTERY_STEP = 0.2

    def __init__(
        self,
        snapshot: DashboardSnapshot,
        interval_ms: int = INTERVAL_MS,
        battery_step: float = BATTERY_STEP,
        cycle_limit: Optional[int] = None,
        clock_format: str = "%H:%M",
        rng: Optional[random.Random] = None,
        clock: Clock = time.localtime,
    ):
        super().__init__()
        self._snapshot = snapshot
        self._battery_step = battery_step
        self._cycle_limit = cycle_limit
        self._clock_format = clock_format
        self._rng = rng or random.Random()
        self._clock = clock
        self._running = False

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
        """Start ticking. No-op if already running."""
        if self._running:
            return
        self._running = True
        self._timer.start()
        logger.debug("Telemetry simulator started (%d ms)", self._timer.interval())

    @Slot()
    def stop(self) -> None:
        """Stop ticking. Safe to call more than once."""
        if not self._running:
            return
        self._running = False
        self._timer.stop()
        logger.debug("Telemetry simulator stopped")

    @Slot()
    def _on_timeout(self) -> None:
        # A timeout already queued when stop() ran must not mutate anything
        if not self._running:
            return
        self.step()

    def step(self) -> None:
        """Advance the simulation by one tick."""
        now = format_clock(self._clock_format, self._clock)
        speed = self._rng.randrange(SPEED_RANDOM_CEILING)
        delta = self._battery_step if self._rng.random() > 0.5 else -self._battery_step

        with self._snapshot.locked() as snap:
            snap.time = now
            snap.cycles = self._next_cycles(snap.cycles)
            snap.speed = speed
            snap.battery = clamp(snap.battery + delta, *BATTERY_RANGE)

        self.ticked.emit()

    def _next_cycles(self, cycles: int) -> int:
        if self._cycle_limit is not None and cycles >= self._cycle_limit:
            return cycles
        return cycles + 1
