"""Data transfer objects for predictions, trip sessions and render snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class WaterPoint:
    """Single sample of the distilled water level chart."""

    index: int  # Position on the chart's x axis
    level: float  # Liters


@dataclass(frozen=True)
class PredictionResult:
    """Battery health estimate derived from cycle count and temperature."""

    predicted_health: float  # Current efficiency (%)
    future_estimate: str  # Human-readable 30 day projection


@dataclass
class TripSession:
    """Trip continuation state, read from storage at startup."""

    trip_in_progress: bool = False  # Persisted flag
    continue_trip: bool = False  # Outcome of the resume/new decision
    show_prompt: bool = False  # True while the resume prompt is pending


@dataclass(frozen=True)
class DashboardView:
    """
    Read-only copy of the dashboard state handed to the presentation layer.

    Produced by DashboardSnapshot.freeze(); never mutated after creation.
    """

    speed: int
    battery: float
    voltage: float
    temp: float
    amps: float
    efficiency: float
    max_speed: int
    avg_speed: int
    cycles: int
    time: str
    distance: float
    started: str
    duration: str
    eta: str
    total_distance: float
    predicted_health: float
    future_estimate: str
    car_position: int
    water_series: Tuple[WaterPoint, ...] = field(default_factory=tuple)
    show_prompt: bool = False
    cycle_display_limit: Optional[int] = None

    def to_dict(self) -> dict:
        """Flatten to the key names used by dashboard front ends."""
        return {
            "speed": self.speed,
            "battery": self.battery,
            "voltage": self.voltage,
            "temp": self.temp,
            "amps": self.amps,
            "efficiency": self.efficiency,
            "maxSpeed": self.max_speed,
            "avgSpeed": self.avg_speed,
            "cycles": self.cycles,
            "cycleDisplayLimit": self.cycle_display_limit,
            "time": self.time,
            "distance": self.distance,
            "started": self.started,
            "duration": self.duration,
            "eta": self.eta,
            "totalDistance": self.total_distance,
            "predictedHealth": self.predicted_health,
            "futureEstimate": self.future_estimate,
            "carPosition": self.car_position,
            "waterSeries": [{"x": p.index, "y": p.level} for p in self.water_series],
            "showPrompt": self.show_prompt,
        }
