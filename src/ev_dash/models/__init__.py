# EV Dash - Data models
from ev_dash.models.dashboard_state import DashboardSnapshot
from ev_dash.models.data_records import (
    DashboardView,
    PredictionResult,
    TripSession,
    WaterPoint,
)

__all__ = [
    "DashboardSnapshot",
    "DashboardView",
    "PredictionResult",
    "TripSession",
    "WaterPoint",
]
