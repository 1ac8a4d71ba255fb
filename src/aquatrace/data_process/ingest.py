from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from ..config import EXCEL_SUFFIXES, CSV_SUFFIXES, STATION, EC, NO3, PERIOD, TIMESTAMP
from .cleaning import normalize_columns, resolve_aliases, drop_non_numeric, harmonize_ids
from .validators import assert_samples

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_period_table(path: PathLike) -> pd.DataFrame:
    """
    Read the first sheet of a period spreadsheet (or a CSV export) as raw rows.

    Args:
        path: Path to an Excel workbook or CSV file

    Returns:
        DataFrame with the spreadsheet's own headers, untouched
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=0, engine="openpyxl")
    if suffix in CSV_SUFFIXES:
        return pd.read_csv(path)
    raise ValueError(f"Unsupported file type '{path.suffix}' for {path.name}")


def period_label(path: PathLike) -> str:
    """Period label of a file: its name without the final extension."""
    return Path(path).stem


def prepare_period(raw: pd.DataFrame, label: str, timestamp: str) -> pd.DataFrame:
    """Turn the raw rows of one spreadsheet into samples of one period."""
    df = normalize_columns(raw)
    df = resolve_aliases(df)
    df = drop_non_numeric(df)
    df = harmonize_ids(df)
    df[TIMESTAMP] = timestamp
    df[PERIOD] = label
    return df


def load_periods(paths: Iterable[PathLike]) -> pd.DataFrame:
    """
    Load one period per file and stack them into the samples table.

    Files without a single usable row, including sheets lacking a conductivity
    or nitrate header, are skipped. The result is ordered by period label
    (lexicographically, stable) and keeps each file's row order.
    """
    frames = []
    for path in paths:
        path = Path(path)
        raw = read_period_table(path)
        try:
            samples = prepare_period(raw, period_label(path), path.name)
        except ValueError as e:
            logger.warning("Cannot read samples from %s (%s), skipping", path.name, e)
            continue
        if samples.empty:
            logger.warning("No valid samples in %s, skipping", path.name)
            continue
        logger.info("Loaded %d samples for period %s", len(samples), period_label(path))
        frames.append(samples)

    if not frames:
        return assert_samples(empty_samples())

    combined = pd.concat(frames, ignore_index=True)
    combined = combined.sort_values(PERIOD, kind="mergesort").reset_index(drop=True)
    return assert_samples(combined)


def empty_samples() -> pd.DataFrame:
    """Samples table with no rows but the canonical columns."""
    return pd.DataFrame({
        STATION: pd.Series(dtype=str),
        EC: pd.Series(dtype=float),
        NO3: pd.Series(dtype=float),
        TIMESTAMP: pd.Series(dtype=str),
        PERIOD: pd.Series(dtype=str),
    })
