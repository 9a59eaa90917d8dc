# cyclistic/clean/trip_cleaner.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import pandas as pd
from colorama import Fore, Style


COORDINATE_COLUMNS = ["start_lat", "start_lng", "end_lat", "end_lng"]

STATION_COLUMNS = [
    "start_station_name",
    "start_station_id",
    "end_station_name",
    "end_station_id",
]

DISALLOWED_RIDEABLE_TYPE = "docked_bike"


@dataclass
class CleaningReport:
    """
    rows_in / rows_out: frame sizes before and after cleaning
    excluded: rows failing each rule ("missing_station", "docked_bike",
      "non_positive_length"). Rules overlap, so these can sum past
      rows_in - rows_out.
    excluded_by_segment: member_casual -> rows dropped for any reason
    """
    rows_in: int
    rows_out: int
    excluded: Dict[str, int] = field(default_factory=dict)
    excluded_by_segment: Dict[str, int] = field(default_factory=dict)

    @property
    def rows_dropped(self) -> int:
        return self.rows_in - self.rows_out


@dataclass
class CleanResult:
    trips: pd.DataFrame
    report: CleaningReport


def exclusion_masks(enriched: pd.DataFrame) -> Dict[str, pd.Series]:
    """
    One boolean mask per exclusion rule, True where the row is dropped.
    All masks share the input index.
    """
    if "ride_length" not in enriched.columns:
        raise ValueError("Trips frame missing 'ride_length'; run add_calendar_fields first.")

    missing = [c for c in STATION_COLUMNS + ["rideable_type"] if c not in enriched.columns]
    if missing:
        raise ValueError(f"Trips frame missing columns: {missing}")

    return {
        "missing_station": enriched[STATION_COLUMNS].isna().any(axis=1),
        "docked_bike": enriched["rideable_type"] == DISALLOWED_RIDEABLE_TYPE,
        # NaN lengths fail the > 0 check too
        "non_positive_length": ~(enriched["ride_length"] > 0),
    }


def clean_trips_with_report(enriched: pd.DataFrame) -> CleanResult:
    masks = exclusion_masks(enriched)

    drop = pd.Series(False, index=enriched.index)
    for mask in masks.values():
        drop = drop | mask

    cleaned = enriched.loc[~drop].drop(columns=COORDINATE_COLUMNS, errors="ignore")

    by_segment: Dict[str, int] = {}
    if "member_casual" in enriched.columns and len(enriched):
        counts = enriched.loc[drop, "member_casual"].value_counts(dropna=False)
        by_segment = {str(k): int(v) for k, v in counts.items()}

    report = CleaningReport(
        rows_in=int(len(enriched)),
        rows_out=int(len(cleaned)),
        excluded={name: int(mask.sum()) for name, mask in masks.items()},
        excluded_by_segment=by_segment,
    )

    if report.rows_dropped:
        print(
            f"{Fore.YELLOW}Excluded {report.rows_dropped:,} of {report.rows_in:,} trips "
            f"({', '.join(f'{k}={v:,}' for k, v in report.excluded.items())}){Style.RESET_ALL}"
        )

    return CleanResult(trips=cleaned, report=report)


def clean_trips(enriched: pd.DataFrame) -> pd.DataFrame:
    """
    Drop the coordinate columns and every row that has a missing station
    field, is a docked bike, or has ride_length <= 0.

    Surviving rows keep their values and index, so cleaning an already
    cleaned frame returns the same frame.
    """
    return clean_trips_with_report(enriched).trips
