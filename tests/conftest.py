from pathlib import Path

import pandas as pd
import pytest

from cyclistic.ingest.load_trips import TRIP_COLUMNS


def trip_row(ride_id, started_at, ended_at, **overrides):
    row = {
        "ride_id": ride_id,
        "rideable_type": "classic_bike",
        "started_at": started_at,
        "ended_at": ended_at,
        "start_station_name": "Clark St & Elm St",
        "start_station_id": "TA1307000039",
        "end_station_name": "Wells St & Concord Ln",
        "end_station_id": "TA1308000050",
        "start_lat": 41.902973,
        "start_lng": -87.63128,
        "end_lat": 41.912133,
        "end_lng": -87.634656,
        "member_casual": "member",
    }
    row.update(overrides)
    return row


def write_trips(path: Path, rows, columns=None) -> Path:
    columns = columns or TRIP_COLUMNS
    pd.DataFrame(rows, columns=columns).to_csv(path, index=False)
    return path


@pytest.fixture
def trips_dir(tmp_path):
    d = tmp_path / "trips"
    d.mkdir()
    write_trips(
        d / "202106-divvy-tripdata.csv",
        [
            trip_row("A1", "2021-06-15 08:00:00", "2021-06-15 08:15:30"),
            trip_row("A2", "2021-06-13 10:00:00", "2021-06-13 10:40:00", member_casual="casual"),
            trip_row("A3", "2021-06-14 09:00:00", "2021-06-14 09:05:00", end_station_name=None),
        ],
    )
    write_trips(
        d / "202107-divvy-tripdata.csv",
        [
            trip_row("B1", "2021-07-05 12:00:00", "2021-07-05 12:20:00", rideable_type="docked_bike"),
            trip_row("B2", "2021-07-05 18:00:00", "2021-07-05 17:59:00", member_casual="casual"),
            trip_row("B3", "2021-07-06 07:30:00", "2021-07-06 07:50:00", member_casual="casual"),
        ],
    )
    return d


@pytest.fixture
def raw_trips():
    df = pd.DataFrame(
        [
            trip_row("R1", "2021-06-15 08:00:00", "2021-06-15 08:15:30"),
            trip_row("R2", "2021-06-14 09:00:00", "2021-06-14 09:05:00", end_station_name=None),
            trip_row("R3", "2021-07-05 12:00:00", "2021-07-05 12:20:00", rideable_type="docked_bike"),
            trip_row("R4", "2021-07-05 18:00:00", "2021-07-05 18:00:00", member_casual="casual"),
            trip_row("R5", "2021-07-05 18:00:00", "2021-07-05 17:50:00", member_casual="casual"),
            trip_row("R6", "2021-12-31 23:59:00", "2022-01-01 00:09:00", member_casual="casual"),
        ],
        columns=TRIP_COLUMNS,
    )
    df["started_at"] = pd.to_datetime(df["started_at"])
    df["ended_at"] = pd.to_datetime(df["ended_at"])
    return df
