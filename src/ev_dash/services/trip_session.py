"""Trip continuation: resume the previous trip or start a new one."""

from __future__ import annotations

import logging
import time

from PySide6.QtCore import QObject, Signal, Slot

from ev_dash.errors import TripStoreError
from ev_dash.models.dashboard_state import DashboardSnapshot
from ev_dash.models.data_records import TripSession
from ev_dash.services.trip_store import TripFlagStore
from ev_dash.utils.clock import Clock, format_clock

logger = logging.getLogger(__name__)

# Trip fields shown while a saved trip is awaiting the resume decision
RESUMED_TRIP_FIELDS = {
    "distance": 98.1,
    "started": "1:22 PM",
    "duration": "1h 23m",
    "eta": "2:45 PM",
}

FRESH_TRIP_FIELDS = {
    "distance": 0.0,
    "started": "-",
    "duration": "-",
    "eta": "-",
}


class TripSessionManager(QObject):
    """
    Owns the persisted trip flag and the trip fields of the snapshot.

    Lifecycle:
        initialize() reads the flag once at startup
        resume() / start_new() record the user's decision and rewrite the flag

    Storage failures never reach the caller: a failed read is a new trip,
    a failed write is logged and the in-memory decision stands.
    """

    # Signals
    prompt_changed = Signal(bool)  # show_prompt
    session_changed = Signal(object)  # TripSession

    def __init__(
        self,
        snapshot: DashboardSnapshot,
        store: TripFlagStore,
        clock_format: str = "%H:%M",
        clock: Clock = time.localtime,
    ):
        super().__init__()
        self._snapshot = snapshot
        self._store = store
        self._clock_format = clock_format
        self._clock = clock
        self._session = TripSession()

    @property
    def session(self) -> TripSession:
        """Current trip session state."""
        return self._session

    def initialize(self) -> TripSession:
        """Read the persisted flag and seed the snapshot's trip fields."""
        try:
            saved = self._store.load()
        except TripStoreError as e:
            logger.warning("Trip flag unavailable, starting fresh: %s", e)
            saved = False

        self._session = TripSession(
            trip_in_progress=saved,
            continue_trip=saved,
            show_prompt=saved,
        )

        fields = RESUMED_TRIP_FIELDS if saved else FRESH_TRIP_FIELDS
        with self._snapshot.locked() as snap:
            for name, value in fields.items():
                setattr(snap, name, value)
            snap.show_prompt = saved

        logger.info("Trip session initialized (trip in progress: %s)", saved)
        self._notify()
        return self._session

    @Slot()
    def resume(self) -> None:
        """Continue the saved trip."""
        self._session.continue_trip = True
        self._session.trip_in_progress = True
        self._set_prompt(False)
        self._persist(True)
        logger.info("Resuming previous trip")
        self._notify()

    @Slot()
    def start_new(self) -> None:
        """Discard any saved trip and start counting from now."""
        self._session.continue_trip = False
        self._session.trip_in_progress = False
        started = format_clock(self._clock_format, self._clock)

        with self._snapshot.locked() as snap:
            snap.distance = 0.0
            snap.started = started
            snap.duration = "-"
            snap.eta = "-"
            snap.show_prompt = False
        self._session.show_prompt = False

        self._persist(False)
        logger.info("Started new trip at %s", started)
        self.prompt_changed.emit(False)
        self._notify()

    def _set_prompt(self, visible: bool) -> None:
        self._session.show_prompt = visible
        with self._snapshot.locked() as snap:
            snap.show_prompt = visible
        self.prompt_changed.emit(visible)

    def _persist(self, value: bool) -> None:
        try:
            self._store.save(value)
        except TripStoreError as e:
            logger.warning("Could not save trip flag: %s", e)

    def _notify(self) -> None:
        self.session_changed.emit(self._session)
