"""
Quality banding per period and volatility ranking across periods.
"""

from .period_clusters import (
    PeriodClusters,
    cluster_labels,
    cluster_color,
    uniform_centroids,
    kmeans_centroids,
    nearest_centroid,
    cluster_period,
    cluster_periods,
    cluster_counts,
    cluster_separation
)

from .volatility import station_volatility, volatility_ranking, search_stations

__all__ = [
    # Banding
    "PeriodClusters",
    "cluster_labels",
    "cluster_color",
    "uniform_centroids",
    "kmeans_centroids",
    "nearest_centroid",
    "cluster_period",
    "cluster_periods",
    "cluster_counts",
    "cluster_separation",

    # Volatility
    "station_volatility",
    "volatility_ranking",
    "search_stations"
]
