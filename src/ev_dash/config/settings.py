"""Application settings, loaded from JSON."""

from __future__ import annotations

import json
import logging
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def get_data_dir() -> Path:
    """Get the per-user data directory (not created here)."""
    if platform.system() == "Windows":
        return Path.home() / ".ev_dash"
    return Path.home() / ".local" / "share" / "ev_dash"


@dataclass
class Settings:
    """
    Simulation settings with defaults, loaded from JSON.

    Intervals are in milliseconds. Speeds in km/h, temperature in Celsius.
    """

    # Timer periods (ms)
    telemetry_interval_ms: int = 2000
    motion_interval_ms: int = 1000
    render_interval_ms: int = 500

    # Starting values for the live gauges
    initial_battery: float = 76.0
    initial_cycles: int = 112
    battery_step: float = 0.2

    # Static display values
    voltage: float = 48.2
    temp: float = 32
    amps: float = 10.5
    efficiency: float = 940
    max_speed: int = 120
    avg_speed: int = 65
    total_distance: float = 15420

    # Car sweep
    car_step: int = 5
    car_max_position: int = 90

    # Distilled water tank
    water_initial_level: float = 6.0
    water_floor: float = 2.5
    water_drain_per_tick: float = 0.03
    water_window: int = 20

    # Cycle counter (None = count without limit)
    cycle_limit: Optional[int] = None
    cycle_display_limit: int = 1000

    # Display
    clock_format: str = "%H:%M"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Settings:
        """
        Load settings from JSON file.

        Args:
            path: Optional custom path. Uses default if None.

        Returns:
            Settings instance (defaults if file doesn't exist or fails)
        """
        if path is None:
            path = cls._default_path()

        try:
            if path.exists():
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
                # Filter to only known fields (ignore obsolete settings)
                known_fields = {f.name for f in cls.__dataclass_fields__.values()}
                filtered = {k: v for k, v in data.items() if k in known_fields}
                return cls(**filtered)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load settings from %s: %s", path, e)

        return cls()

    @staticmethod
    def _default_path() -> Path:
        """Get default settings file location."""
        return get_data_dir() / "settings.json"

