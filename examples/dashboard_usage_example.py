"""
Simple usage example for the aquatrace analysis.

Pass one spreadsheet per sampling period (file name = period label):

    python dashboard_usage_example.py data/raw/1401-06.xlsx data/raw/1402-06.xlsx

Without arguments a small synthetic campaign is analysed instead.
"""

import logging
import sys

import numpy as np
import pandas as pd

from aquatrace import WaterQualityAnalysis


def create_mock_samples(n_stations: int = 12, periods=("1401-06", "1401-12", "1402-06", "1402-12")) -> pd.DataFrame:
    """Synthetic campaign: a few stations drift upwards, the rest stay put."""
    rng = np.random.default_rng(42)
    base_ec = rng.uniform(400, 2500, n_stations)
    base_no3 = rng.uniform(2, 45, n_stations)
    drift = np.where(np.arange(n_stations) % 4 == 0, 0.25, 0.0)
    rows = []
    for step, period in enumerate(periods):
        for i in range(n_stations):
            rows.append({
                "station_id": f"W-{i + 1:02d}",
                "conductivity": float(base_ec[i] * (1 + drift[i] * step) + rng.normal(0, 30)),
                "nitrate": float(max(0.0, base_no3[i] * (1 + drift[i] * step) + rng.normal(0, 1.5))),
                "timestamp": f"{period}.xlsx",
                "period": period,
            })
    return pd.DataFrame(rows)


def simple_usage_example(paths):
    print("=== Water-quality trajectory analysis - Usage Example ===\n")

    print("1. Loading samples...")
    if paths:
        analysis = WaterQualityAnalysis.from_files(paths, cluster_count=5, algorithm="kmeans")
    else:
        analysis = WaterQualityAnalysis(cluster_count=5, algorithm="kmeans")
        analysis.fit_transform(create_mock_samples())
    print(f"   {analysis}")

    print("\n2. Quality bands per period:")
    print(analysis.counts.to_string())

    print("\n3. Most volatile stations:")
    print(analysis.ranking.head(5).to_string(index=False))

    if analysis.ranking.empty:
        return
    station = analysis.ranking["station_id"].iloc[0]
    report = analysis.station(station)
    print(f"\n4. Station {station}:")
    for name, stats in (("EC", report.conductivity), ("NO3", report.nitrate)):
        limits = stats.limits
        print(f"   {name:<4} trend={stats.trend:<11} change point={stats.change_point} "
              f"mean={limits.mean:.1f} UCL={limits.ucl:.1f} LCL={limits.lcl:.1f}")

    print("\n5. Gemini summary (fallback text if no API key is set):")
    result = analysis.summarize()
    print(f"   {result.summary}")
    for item in result.recommendations:
        print(f"   - {item}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)-8s | %(message)s")
    simple_usage_example(sys.argv[1:])
