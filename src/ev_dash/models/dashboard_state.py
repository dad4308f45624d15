"""Central dashboard state - single source of truth for all gauge values."""

from __future__ import annotations

import threading
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Deque, Iterator, Optional

from ev_dash.models.data_records import DashboardView, PredictionResult, WaterPoint


@dataclass
class DashboardSnapshot:
    """
    Mutable dashboard state shared by the simulation drivers.

    Each driver owns a disjoint slice of the fields. All writes go through
    locked(), and the presentation layer only ever sees freeze() copies.
    """

    # Live telemetry (TelemetrySimulator)
    speed: int = 0  # km/h
    battery: float = 76.0  # Percent, always within BATTERY_RANGE
    cycles: int = 112  # Charge cycles, never decreases
    time: str = ""  # Wall clock, HH:MM

    # Static display values
    voltage: float = 48.2  # Volts
    temp: float = 32  # Celsius
    amps: float = 10.5  # Amps
    efficiency: float = 940  # Wh
    max_speed: int = 120  # km/h
    avg_speed: int = 65  # km/h
    total_distance: float = 15420  # Odometer (km)

    # Trip fields (TripSessionManager)
    distance: float = 0.0  # km
    started: str = "-"
    duration: str = "-"
    eta: str = "-"
    show_prompt: bool = False

    # Derived (BatteryHealthPredictor)
    predicted_health: float = 100.0
    future_estimate: str = "Calculating..."

    # Animation (MotionDriver)
    car_position: int = 0  # Percent of track width
    water_series: Deque[WaterPoint] = field(default_factory=deque)

    cycle_display_limit: Optional[int] = None  # Denominator shown next to cycles

    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    @contextmanager
    def locked(self) -> Iterator[DashboardSnapshot]:
        """Hold the snapshot lock for a batch of related writes."""
        with self._lock:
            yield self

    def apply_prediction(self, result: PredictionResult) -> None:
        """Store the latest battery health prediction."""
        with self._lock:
            self.predicted_health = result.predicted_health
            self.future_estimate = result.future_estimate

    def freeze(self) -> DashboardView:
        """Take a consistent read-only copy for rendering."""
        with self._lock:
            return DashboardView(
                speed=self.speed,
                battery=self.battery,
                voltage=self.voltage,
                temp=self.temp,
                amps=self.amps,
                efficiency=self.efficiency,
                max_speed=self.max_speed,
                avg_speed=self.avg_speed,
                cycles=self.cycles,
                time=self.time,
                distance=self.distance,
                started=self.started,
                duration=self.duration,
                eta=self.eta,
                total_distance=self.total_distance,
                predicted_health=self.predicted_health,
                future_estimate=self.future_estimate,
                car_position=self.car_position,
                water_series=tuple(self.water_series),
                show_prompt=self.show_prompt,
                cycle_display_limit=self.cycle_display_limit,
            )


# Range constants (used by the simulation services)
BATTERY_RANGE = (0.0, 100.0)
SPEED_RANDOM_CEILING = 80  # Exclusive upper bound for generated speeds

CAR_TRACK_MAX = 90
CAR_STEP = 5

WATER_FLOOR = 2.5
WATER_WINDOW = 20
