"""
Statistics bundle for a single station, backing the trajectory and control charts.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from ..config import STATION, EC, NO3, PERIOD, EWMA_LAMBDA
from ..data_process.periods import trajectory
from ..data_process.validators import require_columns
from .control_charts import ControlLimits, control_limits, ewma
from .trend_tests import Trend, mann_kendall, pettitt_change_point


@dataclass(frozen=True)
class SeriesStatistics:
    trend: Trend
    change_point: Optional[str]
    limits: ControlLimits


@dataclass(frozen=True, eq=False)
class StationReport:
    station_id: str
    history: pd.DataFrame  # station rows in period order, with EWMA columns
    conductivity: SeriesStatistics
    nitrate: SeriesStatistics

    @property
    def n_periods(self) -> int:
        return len(self.history)

    def __repr__(self):
        return (
            f"StationReport(station='{self.station_id}', periods={self.n_periods}, "
            f"ec_trend='{self.conductivity.trend}', no3_trend='{self.nitrate.trend}')"
        )


def series_statistics(values, dates) -> SeriesStatistics:
    """Trend, change point and control limits of one measured series."""
    values = list(values)
    return SeriesStatistics(
        trend=mann_kendall(values),
        change_point=pettitt_change_point(values, list(dates)),
        limits=control_limits(values),
    )


def station_history(samples: pd.DataFrame, station_id: str, lam: float = EWMA_LAMBDA) -> pd.DataFrame:
    """
    One station's rows in period order with smoothed conductivity and nitrate.

    Periods in which the station was not sampled are absent from the history.
    """
    require_columns(samples, [STATION, PERIOD, EC, NO3])
    history = trajectory(samples, station_id).reset_index(drop=True)
    history[EC + "_ewma"] = ewma(history[EC], lam)
    history[NO3 + "_ewma"] = ewma(history[NO3], lam)
    return history


def station_report(samples: pd.DataFrame, station_id: str, lam: float = EWMA_LAMBDA) -> Optional[StationReport]:
    """
    Trend, change point, control limits and EWMA of both measurements for one station.

    Parameters:
    - samples: samples table sorted by period
    - station_id: station to report on
    - lam: EWMA smoothing factor

    Returns:
    - StationReport, or None if the station never appears
    """
    history = station_history(samples, station_id, lam)
    if history.empty:
        return None
    dates = history[PERIOD].tolist()
    return StationReport(
        station_id=station_id,
        history=history,
        conductivity=series_statistics(history[EC], dates),
        nitrate=series_statistics(history[NO3], dates),
    )
