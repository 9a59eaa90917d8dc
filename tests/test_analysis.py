import pandas as pd
import pytest

from conftest import trip_row, write_trips
from cyclistic.clean.trip_cleaner import COORDINATE_COLUMNS
from cyclistic.ingest.errors import IngestionError, SchemaMismatchError
from cyclistic.ingest.load_trips import TRIP_COLUMNS
from cyclistic.pipeline import analysis
from cyclistic.pipeline.analysis import run_analysis


def test_run_analysis_end_to_end(trips_dir):
    result = run_analysis(trips_dir)

    # A1 (member, Tue) and A2 (casual, Sun) and B3 (casual, Tue) survive
    assert sorted(result.cleaned["ride_id"]) == ["A1", "A2", "B3"]
    for col in COORDINATE_COLUMNS:
        assert col not in result.cleaned.columns

    assert result.ingest.files == 2
    assert result.ingest.rows == 6
    assert result.cleaning.rows_in == 6
    assert result.cleaning.rows_out == 3

    assert result.by_weekday["ride_count"].sum() == len(result.cleaned)
    assert result.by_month["ride_count"].sum() == len(result.cleaned)

    weekday = {
        (r.member_casual, r.day_of_week): r.ride_count
        for r in result.by_weekday.itertuples()
    }
    assert weekday == {
        ("casual", "Sunday"): 1,
        ("casual", "Tuesday"): 1,
        ("member", "Tuesday"): 1,
    }
    assert result.by_month["month"].tolist() == ["June", "July", "June"]
    assert result.meta["files"] == ["202106-divvy-tripdata.csv", "202107-divvy-tripdata.csv"]


def test_run_analysis_writes_outputs(trips_dir, tmp_path):
    out_dir = tmp_path / "out"

    result = run_analysis(trips_dir, out_dir=out_dir)

    for name in ("rides_by_weekday.csv", "rides_by_month.csv", "ride_length_summary.csv"):
        assert (out_dir / name).exists()
    assert len(result.meta["outputs"]) == 3

    summary = pd.read_csv(out_dir / "ride_length_summary.csv")
    assert set(summary["member_casual"]) == {"casual", "member"}


def test_everything_excluded_is_not_fatal(tmp_path):
    write_trips(
        tmp_path / "202101.csv",
        [
            trip_row("x1", "2021-01-01 08:00:00", "2021-01-01 07:00:00"),
            trip_row("x2", "2021-01-01 08:00:00", "2021-01-01 08:10:00", rideable_type="docked_bike"),
        ],
    )

    result = run_analysis(tmp_path)

    assert result.cleaned.empty
    assert result.by_weekday.empty
    assert result.by_month.empty
    assert result.summary.empty


def test_header_only_file_yields_empty_result(tmp_path):
    write_trips(tmp_path / "202101.csv", [])

    result = run_analysis(tmp_path)

    assert result.ingest.rows == 0
    assert result.by_weekday.empty


def test_ingestion_errors_propagate(tmp_path):
    with pytest.raises(IngestionError):
        run_analysis(tmp_path / "missing")


def test_schema_mismatch_aborts_before_outputs(trips_dir, tmp_path):
    cols = [c for c in TRIP_COLUMNS if c != "member_casual"]
    write_trips(trips_dir / "202108-divvy-tripdata.csv", [trip_row("C1", "2021-08-01 08:00:00", "2021-08-01 08:10:00")], columns=cols)
    out_dir = tmp_path / "out"

    with pytest.raises(SchemaMismatchError):
        run_analysis(trips_dir, out_dir=out_dir)

    assert not out_dir.exists()


def test_trip_without_segment_stays_in_every_total(tmp_path):
    write_trips(
        tmp_path / "202106.csv",
        [
            trip_row("m1", "2021-06-15 08:00:00", "2021-06-15 08:10:00"),
            trip_row("n1", "2021-06-15 09:00:00", "2021-06-15 09:20:00", member_casual=None),
        ],
    )

    result = run_analysis(tmp_path)

    assert len(result.cleaned) == 2
    assert result.by_weekday["ride_count"].sum() == 2
    assert result.by_month["ride_count"].sum() == 2
    assert result.summary["rides"].sum() == 2


def test_trip_files_are_listed_once(trips_dir, monkeypatch):
    calls = []
    real = analysis.list_trip_files

    def counting(*args, **kwargs):
        calls.append(args)
        return real(*args, **kwargs)

    monkeypatch.setattr(analysis, "list_trip_files", counting)

    result = run_analysis(trips_dir)

    assert len(calls) == 1
    assert result.ingest.files == len(result.meta["files"]) == 2
