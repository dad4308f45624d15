"""Dashboard engine: owns the snapshot and the services that drive it."""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot

from ev_dash.config.settings import Settings
from ev_dash.models.dashboard_state import DashboardSnapshot
from ev_dash.models.data_records import DashboardView, PredictionResult, TripSession
from ev_dash.services.battery_health import BatteryHealthPredictor
from ev_dash.services.motion_driver import MotionDriver
from ev_dash.services.telemetry_simulator import TelemetrySimulator
from ev_dash.services.trip_session import TripSessionManager
from ev_dash.services.trip_store import MemoryTripFlagStore, TripFlagStore
from ev_dash.utils.clock import Clock, format_clock

logger = logging.getLogger(__name__)


class DashboardEngine(QObject):
    """
    Lifecycle-scoped owner of all dashboard state.

    Construct at dashboard startup, call start(), and stop() on teardown.
    The presentation layer reads snapshot() (or listens to snapshot_changed)
    and answers the resume prompt through on_resume_trip() and
    on_start_new_trip(). It never writes to the state directly.
    """

    # Signals
    snapshot_changed = Signal(object)  # DashboardView
    prompt_changed = Signal(bool)

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[TripFlagStore] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = time.localtime,
    ):
        super().__init__()
        self.settings = settings or Settings()
        self._store = store or MemoryTripFlagStore()
        s = self.settings

        self.snapshot_state = DashboardSnapshot(
            battery=s.initial_battery,
            cycles=s.initial_cycles,
            time=format_clock(s.clock_format, clock),
            voltage=s.voltage,
            temp=s.temp,
            amps=s.amps,
            efficiency=s.efficiency,
            max_speed=s.max_speed,
            avg_speed=s.avg_speed,
            total_distance=s.total_distance,
            cycle_display_limit=s.cycle_display_limit,
        )

        # Services
        self.trip_session = TripSessionManager(
            self.snapshot_state, self._store, clock_format=s.clock_format, clock=clock
        )
        self.predictor = BatteryHealthPredictor()
        self.telemetry = TelemetrySimulator(
            self.snapshot_state,
            interval_ms=s.telemetry_interval_ms,
            battery_step=s.battery_step,
            cycle_limit=s.cycle_limit,
            clock_format=s.clock_format,
            rng=rng,
            clock=clock,
        )
        self.motion = MotionDriver(
            self.snapshot_state,
            interval_ms=s.motion_interval_ms,
            car_step=s.car_step,
            car_max=s.car_max_position,
            water_initial=s.water_initial_level,
            water_floor=s.water_floor,
            water_drain=s.water_drain_per_tick,
            window=s.water_window,
        )

        self.predictor.prediction_changed.connect(self._on_prediction)
        self.telemetry.ticked.connect(self._on_telemetry_tick)
        self.motion.moved.connect(self._emit_snapshot)
        self.trip_session.prompt_changed.connect(self.prompt_changed)
        self.trip_session.session_changed.connect(self._on_session_changed)

        self.trip_session.initialize()
        self._refresh_prediction()

    @property
    def session(self) -> TripSession:
        return self.trip_session.session

    @property
    def is_running(self) -> bool:
        return self.telemetry.is_running or self.motion.is_running

    @Slot()
    def start(self) -> None:
        """Start both drivers."""
        self.telemetry.start()
        self.motion.start()
        logger.info("Dashboard engine started")

    @Slot()
    def stop(self) -> None:
        """Stop both drivers and flush the trip store. Idempotent."""
        was_running = self.is_running
        self.telemetry.stop()
        self.motion.stop()
        self._store.close()
        if was_running:
            logger.info("Dashboard engine stopped")

    def snapshot(self) -> DashboardView:
        """Consistent read-only copy of the current state."""
        return self.snapshot_state.freeze()

    @Slot()
    def on_resume_trip(self) -> None:
        """Presentation hook: the user chose to continue the saved trip."""
        self.trip_session.resume()

    @Slot()
    def on_start_new_trip(self) -> None:
        """Presentation hook: the user chose to start a new trip."""
        self.trip_session.start_new()

    @Slot()
    def _on_telemetry_tick(self) -> None:
        self._refresh_prediction()
        self._emit_snapshot()

    def _refresh_prediction(self) -> None:
        with self.snapshot_state.locked() as snap:
            cycles, temp = snap.cycles, snap.temp
        self.predictor.update(cycles, temp)

    @Slot(object)
    def _on_prediction(self, result: PredictionResult) -> None:
        self.snapshot_state.apply_prediction(result)

    @Slot(object)
    def _on_session_changed(self, session: TripSession) -> None:
        self._emit_snapshot()

    @Slot()
    def _emit_snapshot(self) -> None:
        self.snapshot_changed.emit(self.snapshot())
