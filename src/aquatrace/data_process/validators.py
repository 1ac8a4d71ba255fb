from __future__ import annotations
import numpy as np
import pandas as pd
from pandera import Column, DataFrameSchema, Check

from ..config import STATION, EC, NO3, PERIOD, TIMESTAMP, CLUSTER

_finite = Check(lambda s: np.isfinite(s), element_wise=False, error="value is not a finite number")

schema_samples = DataFrameSchema({
    STATION: Column(str, nullable=False),
    EC: Column(float, _finite, nullable=False),
    NO3: Column(float, _finite, nullable=False),
    TIMESTAMP: Column(str, nullable=False),
    PERIOD: Column(str, nullable=False),
    CLUSTER: Column(str, nullable=False, required=False),
})


def assert_samples(df: pd.DataFrame) -> pd.DataFrame:
    """Validate a samples table (all failures reported at once) and return it."""
    return schema_samples.validate(df, lazy=True)


def require_columns(df: pd.DataFrame, cols) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Samples table is missing columns {missing}. Available: {list(df.columns)}")
