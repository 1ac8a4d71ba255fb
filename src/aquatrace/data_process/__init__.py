"""
Data processing utilities for aquatrace.

This subpackage reads the per-period spreadsheets, cleans them into the long
samples table and provides period/trajectory views over it.
"""

from .ingest import read_period_table, period_label, prepare_period, load_periods, empty_samples
from .cleaning import normalize_columns, resolve_aliases, drop_non_numeric, harmonize_ids
from .validators import schema_samples, assert_samples, require_columns
from .periods import (
    sort_periods, period_labels, iter_periods, trajectories, trajectory,
    period_overview, period_averages
)
from .data_io import save_table, load_table

__all__ = [
    # Ingestion
    "read_period_table", "period_label", "prepare_period", "load_periods", "empty_samples",

    # Cleaning
    "normalize_columns", "resolve_aliases", "drop_non_numeric", "harmonize_ids",

    # Validation
    "schema_samples", "assert_samples", "require_columns",

    # Period views
    "sort_periods", "period_labels", "iter_periods", "trajectories", "trajectory",
    "period_overview", "period_averages",

    # Storage
    "save_table", "load_table",
]
