"""Headless presenter: prints the dashboard once per render tick."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from PySide6.QtCore import QObject, QTimer, Slot

from ev_dash.models.data_records import DashboardView
from ev_dash.services.engine import DashboardEngine

BAR_WIDTH = 20  # characters in the battery bar


def battery_bar(percent: float, width: int = BAR_WIDTH) -> str:
    filled = int(round(max(0.0, min(100.0, percent)) / 100 * width))
    return "[" + "#" * filled + "." * (width - filled) + "]"


def car_track(position: int, width: int = BAR_WIDTH) -> str:
    """Road strip with the car drawn at position percent of the width."""
    slot = min(width - 1, int(position / 100 * width))
    return "|" + "_" * slot + "C" + "_" * (width - slot - 1) + "|"


def format_view(view: DashboardView) -> List[str]:
    """
    Render a snapshot as text lines.

    Labels and units mirror the gauge cards of the graphical dashboard.
    """
    water = view.water_series[-1].level if view.water_series else None
    limit = f"/{view.cycle_display_limit}" if view.cycle_display_limit else ""
    lines = [
        f"System Online  {view.time}  Cycles: {view.cycles}{limit}",
        f"Speed: {view.speed} km/h   Battery: {battery_bar(view.battery)} {view.battery:.1f}%",
        f"Max Speed: {view.max_speed} km/h   Avg Speed: {view.avg_speed} km/h",
        f"Voltage: {view.voltage} V   Temperature: {view.temp}°C   "
        f"Current: {view.amps} Amps   Efficiency: {view.efficiency} Wh",
        f"Trip Distance: {view.distance} km   Trip Start: {view.started}   "
        f"Duration: {view.duration}   ETA: {view.eta}",
        f"Total Distance: {view.total_distance} km",
        f"AI Predicted Health: {view.predicted_health:.2f}%",
        f"AI Prediction: {view.future_estimate}",
        "Water Level: " + ("--" if water is None else f"{water:.2f} L"),
        car_track(view.car_position),
    ]
    if view.show_prompt:
        lines.insert(0, "Continue previous trip? (answer with --resume or --new-trip)")
    return lines


class ConsolePresenter(QObject):
    """Polls the engine on its own timer and writes each frame to a stream."""

    def __init__(
        self,
        engine: DashboardEngine,
        interval_ms: int = 500,
        stream: Optional[TextIO] = None,
    ):
        super().__init__()
        self._engine = engine
        self._stream = stream or sys.stdout
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.render)

    def start(self) -> None:
        self.render()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @Slot()
    def render(self) -> None:
        frame = "\n".join(format_view(self._engine.snapshot()))
        self._stream.write(frame + "\n\n")
        self._stream.flush()
