# cyclistic/enrich/calendar_fields.py
from __future__ import annotations

import pandas as pd


WEEKDAY_ORDER = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

DERIVED_COLUMNS = ["date", "year", "month", "day", "day_of_week", "ride_length"]


def add_calendar_fields(trips: pd.DataFrame) -> pd.DataFrame:
    """
    Returns a new frame with the calendar and duration fields added:

      - date         started_at truncated to midnight
      - year         "2021"
      - month        "06"
      - day          "15"
      - day_of_week  "Tuesday"
      - ride_length  ended_at - started_at in seconds (float, may be negative)

    Every calendar field comes from started_at itself, so date and
    day_of_week can never land on different days. Negative ride lengths are
    left in place for the cleaner.
    """
    for col in ("started_at", "ended_at"):
        if col not in trips.columns:
            raise ValueError(f"Trips frame missing '{col}' column.")

    started = pd.to_datetime(trips["started_at"])
    ended = pd.to_datetime(trips["ended_at"])

    return trips.assign(
        date=started.dt.normalize(),
        year=started.dt.strftime("%Y"),
        month=started.dt.strftime("%m"),
        day=started.dt.strftime("%d"),
        day_of_week=started.dt.day_name(),
        ride_length=(ended - started).dt.total_seconds(),
    )
