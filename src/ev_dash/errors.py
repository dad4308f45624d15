"""Exceptions raised by the dashboard's storage layer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TripStoreError(RuntimeError):
    """The persisted trip flag could not be read or written."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
