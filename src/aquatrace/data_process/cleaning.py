from __future__ import annotations
import logging

import numpy as np
import pandas as pd

from ..config import COLUMN_ALIASES, STATION, EC, NO3, UNKNOWN_STATION

logger = logging.getLogger(__name__)


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize column names by stripping surrounding whitespace and collapsing
    inner runs of whitespace to a single space.

    Field sheets carry headers such as "EC " or Persian names, so no
    characters are removed beyond whitespace.

    Args:
        df: Input DataFrame

    Returns:
        DataFrame with normalized column names
    """
    df = df.copy()
    df.columns = (
        df.columns
        .astype(str)
        .str.strip()
        .str.replace(r"\s+", " ", regex=True)
    )
    return df


def _blank_to_nan(s: pd.Series) -> pd.Series:
    return s.where(~s.astype(str).str.strip().eq(""))


def _first_present(df: pd.DataFrame, aliases: list[str]) -> pd.Series | None:
    """Row-wise first non-empty value across the alias columns, in alias order."""
    names = list(df.columns)
    candidates = [
        _blank_to_nan(df.iloc[:, i])
        for alias in aliases
        for i, name in enumerate(names)
        if name == alias
    ]
    if not candidates:
        return None
    out = candidates[0]
    for s in candidates[1:]:
        out = out.where(out.notna(), s)
    return out


def resolve_aliases(df: pd.DataFrame, aliases: dict[str, list[str]] | None = None) -> pd.DataFrame:
    """
    Build the canonical station/conductivity/nitrate columns from header aliases.

    Args:
        df: DataFrame with normalized column names
        aliases: Mapping of canonical column -> accepted headers (default: config.COLUMN_ALIASES)

    Returns:
        DataFrame holding only the canonical columns

    Raises:
        ValueError: If no header for conductivity or nitrate is present
    """
    aliases = COLUMN_ALIASES if aliases is None else aliases
    out = pd.DataFrame(index=df.index)

    station = _first_present(df, aliases[STATION])
    out[STATION] = UNKNOWN_STATION if station is None else station.fillna(UNKNOWN_STATION)

    for col in (EC, NO3):
        values = _first_present(df, aliases[col])
        if values is None:
            raise ValueError(
                f"No column for '{col}' found. Accepted headers: {aliases[col]}. "
                f"Available: {list(df.columns)[:20]}"
            )
        out[col] = values
    return out


def drop_non_numeric(df: pd.DataFrame, cols: tuple[str, ...] = (EC, NO3)) -> pd.DataFrame:
    """
    Coerce measurement columns to float and drop rows that are not finite numbers.

    Args:
        df: Input DataFrame
        cols: Columns that must hold finite numbers

    Returns:
        DataFrame with float columns and invalid rows removed
    """
    df = df.copy()
    for col in cols:
        s = df[col]
        if not pd.api.types.is_numeric_dtype(s):
            s = s.astype(str).str.strip()
        df[col] = pd.to_numeric(s, errors="coerce").astype(float)
    keep = np.isfinite(df[list(cols)].to_numpy(dtype=float)).all(axis=1)
    if (~keep).any():
        logger.debug("Dropped %d rows with non-numeric measurements", int((~keep).sum()))
    return df.loc[keep].reset_index(drop=True)


def _id_text(value) -> str:
    # spreadsheet codes like 101 come back as 101.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def harmonize_ids(df: pd.DataFrame, id_col: str = STATION, upper: bool = False) -> pd.DataFrame:
    """
    Standardize ID column values by converting to trimmed strings.

    Args:
        df: Input DataFrame
        id_col: Name of the ID column to harmonize (default: "station_id")
        upper: Also uppercase the IDs (off by default, codes are case sensitive)

    Returns:
        DataFrame with standardized ID column
    """
    if id_col in df.columns:
        df = df.copy()
        df[id_col] = df[id_col].map(_id_text).astype(object)
        if upper:
            df[id_col] = df[id_col].str.upper()
    return df


