import os

from cyclistic.pipeline.analysis import run_analysis
from cyclistic.viz.app.report import create_report_app

TRIPS_DIR = os.environ.get("TRIPS_DIR", "data/trips")
OUT_DIR = os.environ.get("OUT_DIR") or None


def build_app():
  result = run_analysis(TRIPS_DIR, out_dir=OUT_DIR)
  return create_report_app(result, title="Cyclistic: casual vs member riders")


def main():
  app = build_app()

  port = int(os.environ.get("PORT", "8080"))

  app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
  main()
