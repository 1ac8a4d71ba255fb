"""
Trend, change-point and control-chart statistics for station trajectories.
"""

from .trend_tests import (
    Trend,
    mann_kendall_statistic,
    mann_kendall,
    pettitt_statistics,
    pettitt_change_point
)

from .control_charts import ControlLimits, control_limits, ewma

from .station_report import (
    SeriesStatistics,
    StationReport,
    series_statistics,
    station_history,
    station_report
)

__all__ = [
    # Trend tests
    "Trend",
    "mann_kendall_statistic",
    "mann_kendall",
    "pettitt_statistics",
    "pettitt_change_point",

    # Control charts
    "ControlLimits",
    "control_limits",
    "ewma",

    # Station report
    "SeriesStatistics",
    "StationReport",
    "series_statistics",
    "station_history",
    "station_report"
]
