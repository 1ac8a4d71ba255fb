from __future__ import annotations
import logging
from pathlib import Path

import pandas as pd

from ..config import INTERIM

logger = logging.getLogger(__name__)


def save_table(df: pd.DataFrame, name: str, directory: Path | None = None) -> Path:
    """
    Save a DataFrame as a Parquet file (default directory: config.INTERIM).

    Args:
        df: The DataFrame to save; its index is not written
        name: The filename (without path) for the saved file
        directory: Target directory, created if missing

    Returns:
        Path: The full path to the saved file
    """
    directory = INTERIM if directory is None else Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    df.to_parquet(path, index=False)
    logger.info("Wrote %d rows to %s", len(df), path)
    return path


def load_table(name: str, directory: Path | None = None) -> pd.DataFrame:
    """
    Load a DataFrame saved with ``save_table``.

    Args:
        name: The filename (without path) to load
        directory: Source directory (default: config.INTERIM)

    Returns:
        pd.DataFrame: The loaded DataFrame
    """
    directory = INTERIM if directory is None else Path(directory)
    return pd.read_parquet(directory / name)
