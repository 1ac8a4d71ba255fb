from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .config import DEFAULT_CLUSTER_COUNT, EWMA_LAMBDA, PERIOD
from .data_process.ingest import load_periods
from .data_process.periods import sort_periods, period_labels, period_averages
from .data_process.validators import assert_samples
from .data_process.data_io import save_table
from .clustering.period_clusters import (
    Algorithm, cluster_labels, cluster_periods, cluster_counts, cluster_separation
)
from .clustering.volatility import volatility_ranking, search_stations
from .quality_statistics.station_report import StationReport, station_report
from .summary.gemini_summary import AnalysisResult, analyze_water_data

logger = logging.getLogger(__name__)


# stack the steps together in a fit_transform style object
class WaterQualityAnalysis:
    """
    Full dashboard analysis of a samples table.

    Every call to ``fit_transform`` recomputes everything from the samples;
    changing the cluster count or algorithm means building a new object.

    Attributes (after fit_transform):
        samples (pd.DataFrame): clustered samples, sorted by period
        labels (list): band palette, least loaded first
        ranking (pd.DataFrame): volatility ranking
        counts (pd.DataFrame): samples per band and period
        averages (pd.DataFrame): rounded period averages
        separation (pd.Series): silhouette score per period
    """

    def __init__(self, cluster_count: int = DEFAULT_CLUSTER_COUNT,
                 algorithm: Algorithm = "uniform",
                 lam: float = EWMA_LAMBDA):
        self.cluster_count = cluster_count
        self.algorithm = algorithm
        self.lam = lam
        self.labels = cluster_labels(cluster_count)
        self.samples = None
        self.ranking = None
        self.counts = None
        self.averages = None
        self.separation = None

    def fit_transform(self, samples: pd.DataFrame) -> pd.DataFrame:
        # Step 1: validate and order the periods
        samples = sort_periods(assert_samples(samples))

        # Step 2: band every period independently
        self.samples = cluster_periods(samples, k=self.cluster_count,
                                       algorithm=self.algorithm, labels=self.labels)

        # Step 3: cross-period views
        self.ranking = volatility_ranking(self.samples)
        self.counts = cluster_counts(self.samples, self.labels)
        self.averages = period_averages(self.samples)
        self.separation = cluster_separation(self.samples)

        logger.info("Analysed %d samples over %d periods (%s, k=%d)",
                    len(self.samples), len(self.periods), self.algorithm, self.cluster_count)
        return self.samples

    @classmethod
    def from_files(cls, paths: Iterable, **kwargs) -> "WaterQualityAnalysis":
        analysis = cls(**kwargs)
        analysis.fit_transform(load_periods(paths))
        return analysis

    def _require_fit(self) -> None:
        if self.samples is None:
            raise ValueError("Analysis has not been run yet; call fit_transform first")

    @property
    def periods(self) -> list[str]:
        self._require_fit()
        return period_labels(self.samples)

    def search(self, term: str) -> pd.DataFrame:
        """Volatility ranking filtered by station id."""
        self._require_fit()
        return search_stations(self.ranking, term)

    def station(self, station_id: str) -> Optional[StationReport]:
        self._require_fit()
        return station_report(self.samples, station_id, lam=self.lam)

    def summarize(self, client=None, **kwargs) -> Optional[AnalysisResult]:
        self._require_fit()
        return analyze_water_data(self.samples, client=client, **kwargs)

    def export(self, directory: Optional[Path] = None) -> dict[str, Path]:
        """Write the derived tables to parquet files and return their paths."""
        self._require_fit()
        return {
            "samples": save_table(self.samples, "samples_clustered.parquet", directory),
            "ranking": save_table(self.ranking, "volatility_ranking.parquet", directory),
            "counts": save_table(self.counts.rename_axis(PERIOD).reset_index(),
                                 "cluster_counts.parquet", directory),
            "averages": save_table(self.averages.rename_axis(PERIOD).reset_index(),
                                   "period_averages.parquet", directory),
        }

    def __repr__(self):
        state = f"periods={len(self.periods)}, samples={len(self.samples)}" if self.samples is not None else "not fitted"
        return (f"WaterQualityAnalysis(algorithm='{self.algorithm}', "
                f"clusters={self.cluster_count}, {state})")


def run_analysis(paths: Iterable, cluster_count: int = DEFAULT_CLUSTER_COUNT,
                 algorithm: Algorithm = "uniform", export: bool = False) -> WaterQualityAnalysis:
    analysis = WaterQualityAnalysis.from_files(paths, cluster_count=cluster_count, algorithm=algorithm)
    if export:
        analysis.export()
    return analysis
