"""Persistence for the trip-in-progress flag."""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QThreadPool

from ev_dash.errors import TripStoreError

logger = logging.getLogger(__name__)

TRIP_FLAG_KEY = "tripInProgress"


def _encode(value: bool) -> str:
    return "true" if value else "false"


def _decode(raw: Optional[str]) -> bool:
    # Anything other than the literal "true" (including absence) means no trip
    return raw == "true"


class TripFlagStore(ABC):
    """Typed boolean view over a key-value store that survives restarts."""

    @abstractmethod
    def load(self) -> bool:
        """Return the persisted flag. Raises TripStoreError if unavailable."""

    @abstractmethod
    def save(self, value: bool) -> None:
        """Persist the flag. Raises TripStoreError if unavailable."""

    def close(self) -> None:
        """Release resources, finishing any pending writes."""


class MemoryTripFlagStore(TripFlagStore):
    """In-process store, for tests and for running without a data directory."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(values or {})

    def load(self) -> bool:
        return _decode(self.values.get(TRIP_FLAG_KEY))

    def save(self, value: bool) -> None:
        self.values[TRIP_FLAG_KEY] = _encode(value)


class JsonTripFlagStore(TripFlagStore):
    """
    Stores the flag in a small JSON object file.

    With background=True, writes are queued on a single-thread pool so the
    caller never waits on disk I/O. Writes still land in submission order.
    Call close() on shutdown to flush pending writes.
    """

    def __init__(self, path: Path, background: bool = True):
        self._path = Path(path)
        self._background = background
        self._pool: Optional[QThreadPool] = None
        if background:
            self._pool = QThreadPool()
            self._pool.setMaxThreadCount(1)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> bool:
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return False
        except (OSError, ValueError) as e:
            raise TripStoreError(f"Cannot read trip flag: {e}", self._path) from e

        if not isinstance(data, dict):
            raise TripStoreError("Trip flag file is not a JSON object", self._path)
        return _decode(data.get(TRIP_FLAG_KEY))

    def save(self, value: bool) -> None:
        if self._pool is None:
            self._write(value)
            return

        def task() -> None:
            try:
                self._write(value)
            except TripStoreError as e:
                logger.warning("%s", e)

        self._pool.start(task)

    def close(self) -> None:
        if self._pool is not None:
            self._pool.waitForDone()

    def _write(self, value: bool) -> None:
        """Write the flag atomically (temp file + rename)."""
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump({TRIP_FLAG_KEY: _encode(value)}, f)
            os.replace(tmp, self._path)
        except OSError as e:
            raise TripStoreError(f"Cannot write trip flag: {e}", self._path) from e
