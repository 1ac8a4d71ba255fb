import pandas as pd
import pytest

from aquatrace.data_process.data_io import load_table
from aquatrace.pipeline import WaterQualityAnalysis, run_analysis


@pytest.fixture
def period_files(tmp_path):
    frames = {
        "2023-06.csv": pd.DataFrame({
            "Code": ["A", "B", "C", "D"],
            "EC": [110, 1900, 2100, 115],
            "NO3": [1.2, 40.0, 50.0, 1.4],
        }),
        "2023-01.csv": pd.DataFrame({
            "Code": ["A", "B", "C", "D", "E"],
            "EC": [100, 1000, 2000, 120, "?"],
            "NO3": [1.0, 20.0, 45.0, 1.5, 3.0],
        }),
    }
    paths = []
    for name, frame in frames.items():
        path = tmp_path / name
        frame.to_csv(path, index=False)
        paths.append(path)
    return paths


def test_analysis_from_files(period_files):
    analysis = WaterQualityAnalysis.from_files(period_files, cluster_count=3, algorithm="uniform")

    assert analysis.periods == ["2023-01", "2023-06"]
    assert len(analysis.samples) == 8
    assert analysis.ranking["station_id"].iloc[0] == "B"
    assert set(analysis.ranking["station_id"]) == {"A", "B", "C", "D"}
    assert analysis.counts.loc["2023-06"].tolist() == [2, 0, 2]
    assert analysis.averages.loc["2023-01", "avg_conductivity"] == 805
    assert analysis.search("b")["station_id"].tolist() == ["B"]

    report = analysis.station("C")
    assert report.conductivity.trend == "increasing"
    assert report.history["period"].tolist() == ["2023-01", "2023-06"]


def test_fit_transform_does_not_mutate_input(two_period_samples):
    before = two_period_samples.copy()
    analysis = WaterQualityAnalysis(cluster_count=3, algorithm="kmeans")
    out = analysis.fit_transform(two_period_samples)

    pd.testing.assert_frame_equal(two_period_samples, before)
    assert "cluster" in out.columns
    assert analysis.separation.index.tolist() == ["2023-01", "2023-06"]


def test_unfitted_analysis_refuses_queries():
    analysis = WaterQualityAnalysis()
    with pytest.raises(ValueError):
        analysis.station("A")
    assert "not fitted" in repr(analysis)


def test_invalid_configuration():
    with pytest.raises(ValueError):
        WaterQualityAnalysis(cluster_count=12)


def test_export_round_trip(period_files, tmp_path):
    analysis = run_analysis(period_files, cluster_count=3)
    paths = analysis.export(tmp_path / "out")

    assert all(p.exists() for p in paths.values())
    ranking = load_table("volatility_ranking.parquet", tmp_path / "out")
    assert ranking["station_id"].tolist() == analysis.ranking["station_id"].tolist()
    counts = load_table("cluster_counts.parquet", tmp_path / "out")
    assert counts["period"].tolist() == ["2023-01", "2023-06"]
