# cyclistic/ingest/load_trips.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from .errors import IngestionError, SchemaMismatchError


TRIP_COLUMNS = [
    "ride_id",
    "rideable_type",
    "started_at",
    "ended_at",
    "start_station_name",
    "start_station_id",
    "end_station_name",
    "end_station_id",
    "start_lat",
    "start_lng",
    "end_lat",
    "end_lng",
    "member_casual",
]

# one dtype map for every monthly file, so concat never mixes inferred types
TRIP_DTYPES = {
    "ride_id": str,
    "rideable_type": str,
    "start_station_name": str,
    "start_station_id": str,
    "end_station_name": str,
    "end_station_id": str,
    "start_lat": "float64",
    "start_lng": "float64",
    "end_lat": "float64",
    "end_lng": "float64",
    "member_casual": str,
}

TIMESTAMP_COLUMNS = ["started_at", "ended_at"]


@dataclass
class IngestSummary:
    files: int
    rows: int
    distinct_ride_ids: int
    duplicate_ride_ids: int


def list_trip_files(trips_dir: str | Path, pattern: str = "*.csv") -> List[Path]:
    trips_dir = Path(trips_dir)
    if not trips_dir.exists():
        raise IngestionError(f"Trip directory not found: {trips_dir}")
    if not trips_dir.is_dir():
        raise IngestionError(f"Trip path is not a directory: {trips_dir}")

    files = sorted(p for p in trips_dir.glob(pattern) if p.is_file())
    if not files:
        raise IngestionError(f"No files matching {pattern!r} in {trips_dir}")
    return files


def read_trip_csv(path: str | Path) -> pd.DataFrame:
    """
    Parse one monthly trip file with the shared dtype map.

    Timestamps are parsed as naive local wall-clock values (ISO 8601,
    e.g. "2021-06-15 08:00:00" or "2021-06-15T08:00:00").
    """
    path = Path(path)

    try:
        df = pd.read_csv(path, dtype=TRIP_DTYPES)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as exc:
        raise IngestionError(f"Failed to parse trip file {path.name}: {exc}") from exc

    missing = [c for c in TIMESTAMP_COLUMNS if c not in df.columns]
    if missing:
        raise SchemaMismatchError(f"{path.name} is missing timestamp columns: {missing}")

    for col in TIMESTAMP_COLUMNS:
        try:
            df[col] = pd.to_datetime(df[col], format="ISO8601")
        except (ValueError, TypeError) as exc:
            raise IngestionError(
                f"Unparseable {col} timestamp in {path.name}: {exc}"
            ) from exc

    return df


def _check_schema(path: Path, columns: List[str], expected: List[str]) -> None:
    extra = sorted(set(columns) - set(expected))
    missing = sorted(set(expected) - set(columns))
    if extra or missing:
        raise SchemaMismatchError(
            f"Schema mismatch in {path.name}: missing={missing} unexpected={extra}"
        )
    if columns != expected:
        raise SchemaMismatchError(
            f"Schema mismatch in {path.name}: column order {columns} != {expected}"
        )


def load_trip_files(files: List[Path]) -> pd.DataFrame:
    """
    Read the given trip files and stack them into one frame.

    Rows keep the order of files, then row order within each file. The first
    file must carry exactly TRIP_COLUMNS (any order); every later file must
    carry the first file's columns in the same order. Any failure aborts the
    load.
    """
    if not files:
        raise IngestionError("No trip files to load")

    frames: List[pd.DataFrame] = []
    reference: List[str] | None = None

    for path in tqdm(files, desc="Reading trip files", unit="file"):
        path = Path(path)
        df = read_trip_csv(path)

        if reference is None:
            _check_schema(path, sorted(df.columns), sorted(TRIP_COLUMNS))
            reference = list(df.columns)
        else:
            _check_schema(path, list(df.columns), reference)

        frames.append(df)

    trips = pd.concat(frames, ignore_index=True)

    print(f"{Fore.MAGENTA}Loaded {len(trips):,} trips{Style.RESET_ALL}")
    return trips


def load_trip_directory(trips_dir: str | Path, pattern: str = "*.csv") -> pd.DataFrame:
    """
    Read every trip file in trips_dir (sorted by file name) into one frame.
    """
    files = list_trip_files(trips_dir, pattern)

    print(f"{Fore.CYAN}Loading {len(files)} trip files from {trips_dir}…{Style.RESET_ALL}")
    return load_trip_files(files)


def summarize_ingest(trips: pd.DataFrame, files: int) -> IngestSummary:
    """
    Row and ride_id counts of a loaded frame. Duplicated ride ids are only
    counted here; nothing downstream drops them.
    """
    ride_ids = trips["ride_id"]
    return IngestSummary(
        files=int(files),
        rows=int(len(trips)),
        distinct_ride_ids=int(ride_ids.nunique(dropna=True)),
        duplicate_ride_ids=int(ride_ids.duplicated(keep="first").sum()),
    )
