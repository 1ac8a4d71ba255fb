"""
Volatility ranking of stations across periods.

Each station's trajectory is walked pairwise. The magnitude of every step is
measured on conductivity and nitrate scaled by their global means, so stations
of different absolute level are comparable, and every change of quality band
adds a fixed penalty:

    score = mean normalized step + VOLATILITY_JUMP_WEIGHT * band changes
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from ..config import STATION, EC, NO3, CLUSTER, VOLATILITY_JUMP_WEIGHT
from ..data_process.periods import period_labels, trajectories
from ..data_process.validators import require_columns


def _safe_mean(values: pd.Series) -> float:
    mean = float(values.mean()) if len(values) else 0.0
    return mean if mean != 0 else 1.0


def station_volatility(history: pd.DataFrame, mean_ec: float, mean_no3: float,
                       jump_weight: float = VOLATILITY_JUMP_WEIGHT) -> tuple[float, int]:
    """
    Score and band-change count of one trajectory.

    Args:
        history: one station's rows in period order
        mean_ec, mean_no3: non-zero normalizing means
        jump_weight: score added per band change

    Returns:
        (score, jumps); (0.0, 0) for a single-row trajectory
    """
    if len(history) < 2:
        return 0.0, 0
    d_ec = np.abs(np.diff(history[EC].to_numpy(dtype=float))) / mean_ec
    d_no3 = np.abs(np.diff(history[NO3].to_numpy(dtype=float))) / mean_no3
    steps = np.sqrt(d_ec ** 2 + d_no3 ** 2)

    bands = history[CLUSTER].to_numpy()
    jumps = int((bands[1:] != bands[:-1]).sum())
    return float(steps.mean()) + jump_weight * jumps, jumps


def volatility_ranking(samples: pd.DataFrame,
                       jump_weight: float = VOLATILITY_JUMP_WEIGHT) -> pd.DataFrame:
    """
    Rank stations by instability across periods.

    Args:
        samples: clustered samples table, sorted by period
        jump_weight: score added per band change

    Returns:
        DataFrame with columns station_id, score, jumps sorted by descending
        score (ties keep first-appearance order); empty with fewer than two periods
    """
    require_columns(samples, [STATION, EC, NO3, CLUSTER])
    columns = [STATION, "score", "jumps"]
    if len(period_labels(samples)) < 2:
        return pd.DataFrame(columns=columns)

    mean_ec = _safe_mean(samples[EC])
    mean_no3 = _safe_mean(samples[NO3])

    rows = []
    for station, history in trajectories(samples).items():
        score, jumps = station_volatility(history, mean_ec, mean_no3, jump_weight)
        rows.append((station, score, jumps))

    ranking = pd.DataFrame(rows, columns=columns)
    return ranking.sort_values("score", ascending=False, kind="mergesort").reset_index(drop=True)


def search_stations(ranking: pd.DataFrame, term: str) -> pd.DataFrame:
    """Keep ranking rows whose station id contains term (case-insensitive)."""
    if not term:
        return ranking
    mask = ranking[STATION].astype(str).str.lower().str.contains(term.lower(), regex=False)
    return ranking.loc[mask].reset_index(drop=True)
