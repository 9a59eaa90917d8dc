# cyclistic/aggregate/segment_buckets.py
from __future__ import annotations

import calendar
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd

from cyclistic.enrich.calendar_fields import WEEKDAY_ORDER


MONTH_ORDER = list(calendar.month_name)[1:]

DIMENSION_ORDER = {
    "day_of_week": WEEKDAY_ORDER,
    "month": MONTH_ORDER,
}

BUCKET_COLUMNS = ["ride_count", "mean_duration"]

# bucket label for rows whose member_casual is missing
UNKNOWN_SEGMENT = "unknown"


def _segment_labels(cleaned: pd.DataFrame) -> pd.Series:
    return cleaned["member_casual"].fillna(UNKNOWN_SEGMENT)


def _dimension_labels(cleaned: pd.DataFrame, dimension: str) -> pd.Series:
    if dimension == "month":
        # "06" -> "June"
        return cleaned["month"].astype(int).map(lambda m: MONTH_ORDER[m - 1])
    return cleaned[dimension]


def aggregate_by_segment(cleaned: pd.DataFrame, dimension: str) -> pd.DataFrame:
    """
    Ride count and mean ride_length per (member_casual, dimension value).

    dimension: "day_of_week" (Sunday..Saturday) or "month" (January..December,
    labelled by month name).

    Only combinations present in cleaned produce a row. Rows come back sorted
    by segment, then by calendar order of the dimension. Rows with no
    member_casual are counted under UNKNOWN_SEGMENT, so ride_count always
    sums to len(cleaned).
    """
    if dimension not in DIMENSION_ORDER:
        raise ValueError(
            f"dimension must be one of {sorted(DIMENSION_ORDER)}, got {dimension!r}"
        )

    out_columns = ["member_casual", dimension] + BUCKET_COLUMNS
    if cleaned.empty:
        return pd.DataFrame(columns=out_columns)

    order = DIMENSION_ORDER[dimension]
    labels = _dimension_labels(cleaned, dimension)

    unknown = sorted(set(labels.dropna()) - set(order))
    if unknown:
        raise ValueError(f"Unexpected {dimension} values: {unknown}")

    df = pd.DataFrame(
        {
            "member_casual": _segment_labels(cleaned).values,
            dimension: pd.Categorical(labels.values, categories=order, ordered=True),
            "ride_length": cleaned["ride_length"].values,
        }
    )

    buckets = (
        df.groupby(["member_casual", dimension], observed=True)
        .agg(
            ride_count=("ride_length", "size"),
            mean_duration=("ride_length", "mean"),
        )
        .reset_index()
        .sort_values(["member_casual", dimension])
        .reset_index(drop=True)
    )

    buckets[dimension] = buckets[dimension].astype(str)
    buckets["ride_count"] = buckets["ride_count"].astype(int)
    buckets["mean_duration"] = buckets["mean_duration"].astype(np.float64)

    return buckets[out_columns]


def bucket_dict(buckets: pd.DataFrame) -> Dict[Tuple[str, str], Dict[str, float]]:
    """
    {(segment, dimension value): {"ride_count": int, "mean_duration": float}}
    """
    dimension = buckets.columns[1]
    out: Dict[Tuple[str, str], Dict[str, float]] = {}
    for row in buckets.itertuples(index=False):
        seg = str(getattr(row, "member_casual"))
        value = str(getattr(row, dimension))
        out[(seg, value)] = {
            "ride_count": int(row.ride_count),
            "mean_duration": float(row.mean_duration),
        }
    return out


def dimension_values(buckets: pd.DataFrame) -> List[str]:
    """Observed dimension values in calendar order."""
    dimension = buckets.columns[1]
    seen = set(buckets[dimension].astype(str))
    return [v for v in DIMENSION_ORDER[dimension] if v in seen]


def describe_ride_length(cleaned: pd.DataFrame) -> pd.DataFrame:
    """
    Per-segment ride_length description in seconds:
      member_casual, rides, mean, median, max, min

    Missing segments are grouped under UNKNOWN_SEGMENT.
    """
    columns = ["member_casual", "rides", "mean", "median", "max", "min"]
    if cleaned.empty:
        return pd.DataFrame(columns=columns)

    summary = (
        cleaned["ride_length"]
        .groupby(_segment_labels(cleaned).rename("member_casual"))
        .agg(
            rides="size",
            mean="mean",
            median="median",
            max="max",
            min="min",
        )
        .reset_index()
    )
    summary["rides"] = summary["rides"].astype(int)
    for col in ("mean", "median", "max", "min"):
        summary[col] = summary[col].astype(np.float64)

    return summary[columns]


def write_buckets_csv(buckets: pd.DataFrame, out_csv: str | Path) -> Path:
    out_csv = Path(out_csv)
    out_csv.parent.mkdir(parents=True, exist_ok=True)

    buckets.to_csv(out_csv, index=False)
    return out_csv
