"""Wall clock formatting for the dashboard's time fields."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], time.struct_time]


def format_clock(clock_format: str = "%H:%M", clock: Clock = time.localtime) -> str:
    """Format the current local time, e.g. "13:22"."""
    return time.strftime(clock_format, clock())
