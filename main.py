import sys

from cyclistic.pipeline.analysis import run_analysis
from cyclistic.viz.app.report import serve_report


TRIPS_DIR = "data/trips"
OUT_DIR = "outputs"


def main():
    trips_dir = sys.argv[1] if len(sys.argv) > 1 else TRIPS_DIR

    result = run_analysis(trips_dir, out_dir=OUT_DIR)

    # ---- cleaning ----
    report = result.cleaning
    print(f"\nCleaning: {report.rows_in:,} in → {report.rows_out:,} out\n")
    for rule, n in report.excluded.items():
        print(f"  {rule:<20s} {n:>10,}")
    for seg, n in sorted(report.excluded_by_segment.items()):
        print(f"  dropped ({seg:<7s})    {n:>10,}")

    # ---- ride length summary ----
    print("\nRide length (seconds):\n")
    print(result.summary.to_string(index=False))

    print("\nRides by weekday:\n")
    print(result.by_weekday.to_string(index=False))

    # ---- UI ----
    serve_report(result, port=8080, title="Cyclistic: casual vs member riders")


if __name__ == "__main__":
    main()
