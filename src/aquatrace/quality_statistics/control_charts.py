"""
Control-chart helpers: Shewhart limits and EWMA smoothing.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..config import CONTROL_SIGMA, EWMA_LAMBDA


@dataclass(frozen=True)
class ControlLimits:
    mean: float
    ucl: float  # mean + 3 sigma
    lcl: float  # max(0, mean - 3 sigma), concentrations cannot be negative


def control_limits(data: Sequence[float], n_sigma: float = CONTROL_SIGMA) -> ControlLimits:
    """
    Shewhart control limits from the mean and the population standard deviation.

    Parameters:
    - data: sequence of values
    - n_sigma: width of the band in standard deviations (default 3)

    Returns:
    - ControlLimits; all zeros for empty input
    """
    x = np.asarray(data, dtype=float).ravel()
    if x.size == 0:
        return ControlLimits(mean=0.0, ucl=0.0, lcl=0.0)
    mean = float(x.mean())
    sigma = float(x.std(ddof=0))
    return ControlLimits(
        mean=mean,
        ucl=mean + n_sigma * sigma,
        lcl=max(0.0, mean - n_sigma * sigma),
    )


def ewma(data: Sequence[float], lam: float = EWMA_LAMBDA) -> list[float]:
    """
    Exponentially weighted moving average seeded with the first value.

    out[0] = x[0]; out[i] = lam * x[i] + (1 - lam) * out[i - 1].
    lam = 1 returns the input unchanged.
    """
    if not 0 < lam <= 1:
        raise ValueError(f"Smoothing factor must lie in (0, 1], got {lam}")
    out: list[float] = []
    for value in data:
        value = float(value)
        out.append(value if not out else lam * value + (1 - lam) * out[-1])
    return out
