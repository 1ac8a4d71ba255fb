"""
aquatrace - Water-quality trajectory analysis across sampling periods

This package turns per-period spreadsheets of electrical conductivity (EC) and
nitrate measurements into the numbers behind a monitoring dashboard.

Subpackages:
- data_process: Spreadsheet ingestion, cleaning, period and trajectory views
- quality_statistics: Mann-Kendall, Pettitt, Shewhart limits and EWMA
- clustering: Period-local quality bands and volatility ranking
- summary: Narrative summary from the Gemini API
"""

# Import from subpackages for convenience
from .data_process import (
    load_periods, read_period_table, period_overview, period_averages,
    trajectories, trajectory, save_table, load_table
)

from .quality_statistics import (
    mann_kendall, pettitt_change_point, control_limits, ewma,
    ControlLimits, StationReport, station_report
)

from .clustering import (
    cluster_labels, cluster_period, cluster_periods, cluster_counts,
    cluster_separation, volatility_ranking, search_stations
)

from .summary import AnalysisResult, FALLBACK_RESULT, analyze_water_data

from .pipeline import WaterQualityAnalysis, run_analysis

__all__ = [
    # Data processing
    "load_periods", "read_period_table", "period_overview", "period_averages",
    "trajectories", "trajectory", "save_table", "load_table",

    # Statistics
    "mann_kendall", "pettitt_change_point", "control_limits", "ewma",
    "ControlLimits", "StationReport", "station_report",

    # Clustering
    "cluster_labels", "cluster_period", "cluster_periods", "cluster_counts",
    "cluster_separation", "volatility_ranking", "search_stations",

    # Summary
    "AnalysisResult", "FALLBACK_RESULT", "analyze_water_data",

    # Pipeline
    "WaterQualityAnalysis", "run_analysis",
]

# Package metadata
__version__ = "0.1.0"
__description__ = "aquatrace - Water-quality trajectory analysis across sampling periods"
