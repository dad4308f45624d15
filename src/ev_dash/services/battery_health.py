"""Battery health estimate and 30 day projection."""

from __future__ import annotations

from typing import Optional, Tuple

from PySide6.QtCore import QObject, Signal, Slot

from ev_dash.models.data_records import PredictionResult
from ev_dash.utils.numeric import clamp, finite_or, round_half_up

# Model constants
CYCLE_WEAR = 0.001  # % lost per charge cycle
TEMP_WEAR = 0.04  # % lost per degree above the reference temperature
REFERENCE_TEMP_C = 25.0
PROJECTION_DAYS = 30
DAILY_DROP = 0.23  # % per day at current usage
HEALTH_RANGE = (60.0, 100.0)


def predict_battery_health(cycles: float, temp: float) -> PredictionResult:
    """
    Estimate current battery efficiency and where it will be in 30 days.

    Degradation is linear in cycle count and in temperature above 25 C.
    Both results are clamped to [60, 100]. Non-finite inputs count as 0.

    Args:
        cycles: Charge cycle count
        temp: Battery temperature (Celsius)

    Returns:
        PredictionResult with efficiency rounded half-up to 2 places and the
        projection rounded to 1 place inside the estimate text
    """
    cycles = finite_or(cycles)
    temp = finite_or(temp)

    base_degradation = CYCLE_WEAR * cycles + TEMP_WEAR * (temp - REFERENCE_TEMP_C)
    current = round_half_up(clamp(100 - base_degradation, *HEALTH_RANGE), 2)
    projected = round_half_up(
        clamp(current - PROJECTION_DAYS * DAILY_DROP, *HEALTH_RANGE), 1
    )

    return PredictionResult(
        predicted_health=current,
        future_estimate=(
            f"At your usage, your battery will reach {projected:.1f}% "
            f"in {PROJECTION_DAYS} days"
        ),
    )


class BatteryHealthPredictor(QObject):
    """
    Recomputes the prediction when cycle count or temperature changes.

    Repeated calls with unchanged inputs return the cached result without
    emitting prediction_changed.
    """

    prediction_changed = Signal(object)  # PredictionResult

    def __init__(self):
        super().__init__()
        self._inputs: Optional[Tuple[float, float]] = None
        self._result: Optional[PredictionResult] = None

    @property
    def result(self) -> Optional[PredictionResult]:
        """Latest prediction (None before the first update)."""
        return self._result

    @Slot(object, object)
    def update(self, cycles: float, temp: float) -> PredictionResult:
        inputs = (finite_or(cycles), finite_or(temp))
        if self._result is not None and inputs == self._inputs:
            return self._result

        self._inputs = inputs
        self._result = predict_battery_health(*inputs)
        self.prediction_changed.emit(self._result)
        return self._result
