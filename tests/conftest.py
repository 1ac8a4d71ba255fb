import pandas as pd
import pytest


def _samples(records):
    """records: (period, station_id, conductivity, nitrate[, cluster])"""
    rows = []
    for rec in records:
        row = {
            "station_id": rec[1],
            "conductivity": float(rec[2]),
            "nitrate": float(rec[3]),
            "timestamp": f"{rec[0]}.xlsx",
            "period": rec[0],
        }
        if len(rec) > 4:
            row["cluster"] = rec[4]
        rows.append(row)
    return pd.DataFrame(rows)


@pytest.fixture
def make_samples():
    return _samples


@pytest.fixture
def two_period_samples():
    return _samples([
        ("2023-01", "A", 100, 1.0),
        ("2023-01", "B", 1000, 20.0),
        ("2023-01", "C", 2000, 45.0),
        ("2023-01", "D", 120, 1.5),
        ("2023-06", "A", 110, 1.2),
        ("2023-06", "B", 1900, 40.0),
        ("2023-06", "C", 2100, 50.0),
        ("2023-06", "D", 115, 1.4),
    ])
