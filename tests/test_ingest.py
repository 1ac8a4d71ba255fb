import pandas as pd
import pytest

from aquatrace.data_process.ingest import load_periods, period_label, read_period_table


def _write_csv(path, frame):
    frame.to_csv(path, index=False)
    return path


def test_period_label_drops_last_extension():
    assert period_label("data/2023.05.survey.xlsx") == "2023.05.survey"


def test_read_period_table_rejects_unknown_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("Code,EC,NO3\n")
    with pytest.raises(ValueError):
        read_period_table(path)


def test_load_periods_orders_by_label_and_drops_invalid_rows(tmp_path):
    later = _write_csv(tmp_path / "2023-05.csv", pd.DataFrame({
        "Code": ["A", "B", "C"],
        "EC": [510, "n/a", 700],
        "NO3": [12.0, 3.0, 9.5],
    }))
    earlier = _write_csv(tmp_path / "2022-11.csv", pd.DataFrame({
        "ID": ["B", "A"],
        "Conductivity": [480, 500],
        "Nitrate": [2.5, 11.0],
    }))

    samples = load_periods([later, earlier])

    assert samples["period"].unique().tolist() == ["2022-11", "2023-05"]
    # file row order is kept inside a period
    assert samples["station_id"].tolist() == ["B", "A", "A", "C"]
    assert samples["timestamp"].tolist() == ["2022-11.csv", "2022-11.csv", "2023-05.csv", "2023-05.csv"]
    assert samples["conductivity"].tolist() == [480.0, 500.0, 510.0, 700.0]


def test_load_periods_skips_files_without_valid_rows(tmp_path):
    good = _write_csv(tmp_path / "p1.csv", pd.DataFrame({"Code": ["A"], "EC": [1.0], "NO3": [2.0]}))
    bad = _write_csv(tmp_path / "p2.csv", pd.DataFrame({"Code": ["A"], "EC": ["--"], "NO3": [2.0]}))

    samples = load_periods([good, bad])

    assert samples["period"].unique().tolist() == ["p1"]


def test_load_periods_empty_input_gives_empty_table():
    samples = load_periods([])
    assert samples.empty
    assert {"station_id", "conductivity", "nitrate", "period", "timestamp"} <= set(samples.columns)


def test_load_periods_reads_excel_with_persian_headers(tmp_path):
    path = tmp_path / "1402-07.xlsx"
    pd.DataFrame({
        "نام نقطه": ["P-1", "P-2"],
        "EC ": [1250.0, 980.0],
        "نیترات": [31.0, 18.5],
    }).to_excel(path, index=False, engine="openpyxl")

    samples = load_periods([path])

    assert samples["station_id"].tolist() == ["P-1", "P-2"]
    assert samples["conductivity"].tolist() == [1250.0, 980.0]
    assert samples["nitrate"].tolist() == [31.0, 18.5]
    assert set(samples["period"]) == {"1402-07"}


def test_load_periods_skips_sheet_without_measurement_header(tmp_path):
    good = _write_csv(tmp_path / "p1.csv", pd.DataFrame({"Code": ["A"], "EC": [1.0], "NO3": [2.0]}))
    headerless = _write_csv(tmp_path / "p2.csv", pd.DataFrame({"Code": ["A"], "EC": [1.0], "Notes": ["x"]}))

    samples = load_periods([good, headerless])

    assert samples["period"].unique().tolist() == ["p1"]
    assert samples["station_id"].tolist() == ["A"]


def test_load_periods_rejects_unknown_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("Code,EC,NO3\n")
    with pytest.raises(ValueError):
        load_periods([path])


def test_non_numeric_suffixes_are_not_parsed(tmp_path):
    # trailing units make the cell non-numeric, the row is dropped
    path = _write_csv(tmp_path / "p.csv", pd.DataFrame({
        "Code": ["A", "B"], "EC": ["1200 ", "850us"], "NO3": [2.0, 3.0],
    }))
    samples = load_periods([path])
    assert samples["conductivity"].tolist() == [1200.0]


def test_config_declares_only_used_directories():
    from aquatrace import config
    assert not hasattr(config, "RAW")
    assert config.INTERIM.parent == config.DATA
