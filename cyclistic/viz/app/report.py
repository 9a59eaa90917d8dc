# cyclistic/viz/app/report.py
from __future__ import annotations

from flask import Flask, Response, abort

from cyclistic.viz.charts.graphs import build_segment_charts


def create_report_app(result, title: str | None = None) -> Flask:
    """
    result expected:
      - .name
      - .by_weekday / .by_month aggregate frames
    """
    if result is None:
        raise ValueError("create_report_app requires an AnalysisResult")

    tables = {
        "day_of_week": result.by_weekday,
        "month": result.by_month,
    }
    page_title = title or result.name

    app = Flask(__name__)

    @app.route("/")
    def _index():
        return build_segment_charts(result.by_weekday, result.by_month, title=page_title)

    @app.route("/buckets/<dimension>.csv")
    def _buckets(dimension: str):
        table = tables.get(dimension)
        if table is None:
            abort(404)
        return Response(
            table.to_csv(index=False),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={dimension}.csv"},
        )

    return app


def serve_report(
    result,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = None,
):
    app = create_report_app(result, title=title)
    app.run(host=host, port=int(port), debug=bool(debug))
