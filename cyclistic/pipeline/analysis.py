# cyclistic/pipeline/analysis.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd
from colorama import Fore, Style

from cyclistic.aggregate.segment_buckets import (
    aggregate_by_segment,
    describe_ride_length,
    write_buckets_csv,
)
from cyclistic.clean.trip_cleaner import CleaningReport, clean_trips_with_report
from cyclistic.enrich.calendar_fields import add_calendar_fields
from cyclistic.ingest.load_trips import (
    IngestSummary,
    list_trip_files,
    load_trip_files,
    summarize_ingest,
)


@dataclass
class AnalysisResult:
    name: str
    cleaned: pd.DataFrame
    by_weekday: pd.DataFrame
    by_month: pd.DataFrame
    summary: pd.DataFrame
    cleaning: CleaningReport
    ingest: IngestSummary
    meta: dict


def run_analysis(
    trips_dir: str | Path,
    *,
    pattern: str = "*.csv",
    out_dir: str | Path | None = None,
    name: str = "Casual vs member riders",
) -> AnalysisResult:
    """
    Pipeline:
      1) load every trip file in trips_dir
      2) add calendar fields and ride_length
      3) clean (coordinate drop + row exclusions)
      4) aggregate by segment x weekday and segment x month

    Ingestion errors abort before anything is returned or written.
    If out_dir is given, the aggregates and the ride-length summary are
    written there as CSV.
    """
    files = list_trip_files(trips_dir, pattern)

    # ----------------------------
    # Step 1) load
    # ----------------------------
    print(f"{Fore.CYAN}Loading {len(files)} trip files from {trips_dir}…{Style.RESET_ALL}")
    raw = load_trip_files(files)
    ingest = summarize_ingest(raw, files=len(files))
    if ingest.duplicate_ride_ids:
        print(
            f"{Fore.YELLOW}{ingest.duplicate_ride_ids:,} rows share a ride_id "
            f"with an earlier row{Style.RESET_ALL}"
        )

    # ----------------------------
    # Step 2) enrich
    # ----------------------------
    print(f"{Fore.CYAN}Deriving calendar fields and ride length…{Style.RESET_ALL}")
    enriched = add_calendar_fields(raw)
    del raw

    # ----------------------------
    # Step 3) clean
    # ----------------------------
    print(f"{Fore.CYAN}Cleaning trips…{Style.RESET_ALL}")
    cleaned_result = clean_trips_with_report(enriched)
    del enriched
    cleaned = cleaned_result.trips

    # ----------------------------
    # Step 4) aggregate
    # ----------------------------
    print(f"{Fore.CYAN}Aggregating by segment…{Style.RESET_ALL}")
    by_weekday = aggregate_by_segment(cleaned, "day_of_week")
    by_month = aggregate_by_segment(cleaned, "month")
    summary = describe_ride_length(cleaned)

    written = []
    if out_dir is not None:
        out_dir = Path(out_dir)
        print(f"{Fore.CYAN}Writing aggregates to {out_dir}…{Style.RESET_ALL}")
        written.append(write_buckets_csv(by_weekday, out_dir / "rides_by_weekday.csv"))
        written.append(write_buckets_csv(by_month, out_dir / "rides_by_month.csv"))
        written.append(write_buckets_csv(summary, out_dir / "ride_length_summary.csv"))

    print(f"{Fore.MAGENTA}{len(cleaned):,} trips ready for analysis{Style.RESET_ALL}")
    print(f"{Fore.GREEN}Analysis complete.{Style.RESET_ALL}")

    return AnalysisResult(
        name=name,
        cleaned=cleaned,
        by_weekday=by_weekday,
        by_month=by_month,
        summary=summary,
        cleaning=cleaned_result.report,
        ingest=ingest,
        meta={
            "trips_dir": str(trips_dir),
            "pattern": pattern,
            "files": [p.name for p in files],
            "outputs": [str(p) for p in written],
        },
    )
