"""
Period and trajectory views over the long samples table.

The samples table holds one row per measurement with the period label in a
column. A period is the rows sharing a label; a trajectory is one station's
rows across periods. Both views keep the table's row order, so the table is
expected to be sorted by period first (see ``sort_periods``).
"""
from __future__ import annotations
from typing import Iterator, Tuple

import numpy as np
import pandas as pd

from ..config import STATION, EC, NO3, PERIOD
from .validators import require_columns


def sort_periods(samples: pd.DataFrame) -> pd.DataFrame:
    """Order rows by period label, keeping the row order inside each period."""
    require_columns(samples, [PERIOD])
    return samples.sort_values(PERIOD, kind="mergesort").reset_index(drop=True)


def period_labels(samples: pd.DataFrame) -> list[str]:
    """Distinct period labels in table order."""
    return list(pd.unique(samples[PERIOD]))


def iter_periods(samples: pd.DataFrame) -> Iterator[Tuple[str, pd.DataFrame]]:
    """Yield (label, rows) per period, in table order."""
    for label, rows in samples.groupby(PERIOD, sort=False):
        yield label, rows


def trajectories(samples: pd.DataFrame) -> dict[str, pd.DataFrame]:
    """Map every station to its rows across periods, stations in first-appearance order."""
    require_columns(samples, [STATION, PERIOD])
    return {station: rows for station, rows in samples.groupby(STATION, sort=False)}


def trajectory(samples: pd.DataFrame, station_id: str) -> pd.DataFrame:
    """Rows of one station in period order (empty if the station is unknown)."""
    return samples.loc[samples[STATION] == station_id]


def period_overview(samples: pd.DataFrame) -> pd.DataFrame:
    """
    Sample count and mean conductivity/nitrate per period.

    Returns:
        DataFrame indexed by period label with columns count, conductivity, nitrate
    """
    require_columns(samples, [PERIOD, EC, NO3])
    grouped = samples.groupby(PERIOD, sort=False)
    return pd.DataFrame({
        "count": grouped.size(),
        EC: grouped[EC].mean(),
        NO3: grouped[NO3].mean(),
    })


def period_averages(samples: pd.DataFrame) -> pd.DataFrame:
    """Per-period averages as shown on the dashboard: EC to a whole number, nitrate to 2 decimals."""
    overview = period_overview(samples)
    return pd.DataFrame({
        "avg_" + EC: np.floor(overview[EC] + 0.5).astype(int),  # half up, not half even
        "avg_" + NO3: overview[NO3].round(2),
    }, index=overview.index)
