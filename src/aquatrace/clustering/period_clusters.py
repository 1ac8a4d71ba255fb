"""
Period-local quality banding of sampling stations

Stations are grouped in conductivity x nitrate space separately for every
period. Two ways of placing the band centroids are provided:
- uniform: k centroids evenly spaced between the origin and the period maximum
- kmeans: a fixed-iteration k-means seeded with the first k samples

Either way the centroids are then ordered by conductivity + nitrate so that
band 0 is always the least loaded one, and every sample takes the label of its
nearest centroid. No continuity is enforced between periods: a station may
change band from one period to the next, which the volatility ranking counts.

Notes
-----
- k-means runs exactly KMEANS_ITERATIONS rounds without a convergence check.
  This reproduces the dashboard's behaviour and is not guaranteed to reach a
  local optimum. Empty clusters keep their previous centroid.
- With fewer samples than bands every sample gets the first label.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import silhouette_score

from ..config import (
    EC, NO3, PERIOD, CLUSTER,
    DEFAULT_CLUSTER_COUNT, MIN_CLUSTER_COUNT, MAX_CLUSTER_COUNT,
    KMEANS_ITERATIONS, CLUSTER_ALGORITHMS, DEFAULT_CLUSTER_LABELS,
    CLUSTER_COLORS, PERIOD_COLORS,
)
from ..data_process.periods import iter_periods, period_labels
from ..data_process.validators import require_columns

Algorithm = Literal["uniform", "kmeans"]

# Public API
__all__ = [
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
]


@dataclass(eq=False)
class PeriodClusters:
    labels: list  # one band label per sample, input order
    indices: np.ndarray  # band index per sample, 0 = least loaded
    centroids: np.ndarray  # (k, 2) conductivity/nitrate, sorted; empty when degenerate
    algorithm: str
    meta: dict = field(default_factory=dict)

    @property
    def degenerate(self) -> bool:
        return len(self.centroids) == 0


# --------------------------- Labels and colours ---------------------------

def _check_cluster_count(k: int) -> None:
    if not MIN_CLUSTER_COUNT <= k <= MAX_CLUSTER_COUNT:
        raise ValueError(
            f"Cluster count must be between {MIN_CLUSTER_COUNT} and {MAX_CLUSTER_COUNT}, got {k}"
        )


def cluster_labels(k: int = DEFAULT_CLUSTER_COUNT) -> list[str]:
    """
    Ordered band labels, least to most loaded.

    The five-band palette uses the quality names; any other count gets
    "group 1" .. "group k".
    """
    _check_cluster_count(k)
    if k == len(DEFAULT_CLUSTER_LABELS):
        return list(DEFAULT_CLUSTER_LABELS)
    return [f"group {i + 1}" for i in range(k)]


def cluster_color(label: str, index: int) -> str:
    """Display colour of a band, falling back to the cyclic period palette."""
    return CLUSTER_COLORS.get(label, PERIOD_COLORS[index % len(PERIOD_COLORS)])


# --------------------------- Centroids ---------------------------

def uniform_centroids(X: np.ndarray, k: int) -> np.ndarray:
    """k centroids at fractions 0, 1/(k-1), .., 1 of the column maxima."""
    fractions = np.linspace(0.0, 1.0, k)
    return np.outer(fractions, X.max(axis=0))


def nearest_centroid(X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid per row (Euclidean; lowest index wins ties)."""
    d = np.sqrt(((X[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2).sum(axis=2))
    return np.argmin(d, axis=1)


def kmeans_centroids(X: np.ndarray, k: int, n_iter: int = KMEANS_ITERATIONS) -> np.ndarray:
    """
    Fixed-iteration k-means seeded with the first k rows of X.

    Parameters:
    - X: (n, 2) array with n >= k
    - k: number of clusters
    - n_iter: number of assign/update rounds, always all of them

    Returns:
    - (k, 2) array of centroids, in seed order
    """
    centroids = X[:k].astype(float).copy()
    for _ in range(n_iter):
        assign = nearest_centroid(X, centroids)
        for j in range(k):
            members = X[assign == j]
            if len(members):
                centroids[j] = members.mean(axis=0)
    return centroids


# --------------------------- Banding ---------------------------

def cluster_period(conductivity: Sequence[float],
                   nitrate: Sequence[float],
                   k: int = DEFAULT_CLUSTER_COUNT,
                   algorithm: Algorithm = "uniform",
                   labels: Optional[Sequence[str]] = None) -> PeriodClusters:
    """
    Assign quality bands to the samples of one period.

    Parameters:
    - conductivity, nitrate: parallel sequences, one entry per sample
    - k: number of bands (3..8)
    - algorithm: "uniform" or "kmeans"
    - labels: band labels, least loaded first (default: cluster_labels(k))

    Returns:
    - PeriodClusters with labels in input order and the sorted centroids
    """
    _check_cluster_count(k)
    if algorithm not in CLUSTER_ALGORITHMS:
        raise ValueError(f"Unknown clustering algorithm '{algorithm}'. Choose from {CLUSTER_ALGORITHMS}")
    labels = cluster_labels(k) if labels is None else list(labels)
    if len(labels) != k:
        raise ValueError(f"Length mismatch: {len(labels)} labels for {k} clusters")

    X = np.column_stack([np.asarray(conductivity, dtype=float),
                         np.asarray(nitrate, dtype=float)])
    n = X.shape[0]
    if n < k:
        return PeriodClusters(labels=[labels[0]] * n,
                              indices=np.zeros(n, dtype=int),
                              centroids=np.empty((0, 2)),
                              algorithm=algorithm,
                              meta={"reason": f"{n} samples for {k} clusters"})

    if algorithm == "uniform":
        centroids = uniform_centroids(X, k)
    else:
        centroids = kmeans_centroids(X, k)

    order = np.argsort(centroids.sum(axis=1), kind="stable")
    centroids = centroids[order]
    indices = nearest_centroid(X, centroids)
    return PeriodClusters(labels=[labels[i] for i in indices],
                          indices=indices,
                          centroids=centroids,
                          algorithm=algorithm)


def cluster_periods(samples: pd.DataFrame,
                    k: int = DEFAULT_CLUSTER_COUNT,
                    algorithm: Algorithm = "uniform",
                    labels: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Band every period of a samples table independently.

    Returns a copy of the table with a ``cluster`` column; measured columns
    are left untouched.
    """
    require_columns(samples, [PERIOD, EC, NO3])
    out = samples.copy()
    out[CLUSTER] = pd.Series(index=out.index, dtype=object)
    for _, rows in iter_periods(out):
        result = cluster_period(rows[EC], rows[NO3], k=k, algorithm=algorithm, labels=labels)
        out.loc[rows.index, CLUSTER] = result.labels
    return out


def cluster_counts(samples: pd.DataFrame, labels: Sequence[str]) -> pd.DataFrame:
    """
    Number of samples per band and period.

    Returns:
        DataFrame indexed by period (table order) with one column per label
        (palette order, zero-filled)
    """
    require_columns(samples, [PERIOD, CLUSTER])
    counts = pd.crosstab(samples[PERIOD], samples[CLUSTER])
    return counts.reindex(index=period_labels(samples), columns=list(labels), fill_value=0)


def cluster_separation(samples: pd.DataFrame) -> pd.Series:
    """
    Silhouette score of the assigned bands per period, in conductivity x nitrate space.

    NaN where the score is undefined (fewer than two bands in use, or every
    sample in its own band).
    """
    require_columns(samples, [PERIOD, EC, NO3, CLUSTER])
    scores = {}
    for label, rows in iter_periods(samples):
        n_bands = rows[CLUSTER].nunique()
        if n_bands < 2 or n_bands > len(rows) - 1:
            scores[label] = np.nan
            continue
        scores[label] = float(silhouette_score(rows[[EC, NO3]].to_numpy(dtype=float), rows[CLUSTER]))
    return pd.Series(scores, name="silhouette", dtype=float)
