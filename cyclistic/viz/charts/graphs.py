# cyclistic/viz/charts/graphs.py
from __future__ import annotations

import json
from typing import Dict, List

import numpy as np
import pandas as pd

from cyclistic.aggregate.segment_buckets import bucket_dict, dimension_values


SEGMENTS = ["casual", "member"]

SEGMENT_COLORS = {
    "casual": ("#f28e2b", "rgba(242,142,43,0.75)"),
    "member": ("#4e79a7", "rgba(78,121,167,0.75)"),
}


def _series(buckets: pd.DataFrame, metric: str) -> Dict[str, object]:
    """
    Chart payload for one aggregate and one metric:
      labels: observed dimension values in calendar order
      datasets: one list per segment, None where the bucket is absent
    """
    labels = dimension_values(buckets)
    table = bucket_dict(buckets)

    segments = SEGMENTS + sorted(
        {seg for seg, _ in table.keys()} - set(SEGMENTS)
    )

    datasets: List[Dict[str, object]] = []
    for seg in segments:
        values = []
        for label in labels:
            b = table.get((seg, label))
            if b is None:
                values.append(None)
            elif metric == "ride_count":
                values.append(int(b["ride_count"]))
            else:
                # seconds -> minutes
                values.append(float(np.round(b["mean_duration"] / 60.0, 2)))
        if any(v is not None for v in values):
            datasets.append({"segment": seg, "data": values})

    return {"labels": labels, "datasets": datasets}


def build_chart_payload(by_weekday: pd.DataFrame, by_month: pd.DataFrame) -> Dict[str, object]:
    return {
        "weekday_rides": _series(by_weekday, "ride_count"),
        "weekday_duration": _series(by_weekday, "mean_duration"),
        "month_rides": _series(by_month, "ride_count"),
        "month_duration": _series(by_month, "mean_duration"),
        "colors": SEGMENT_COLORS,
    }


def build_segment_charts(
    by_weekday: pd.DataFrame,
    by_month: pd.DataFrame,
    title: str = "Casual vs member riders",
) -> str:
    """
    Returns a full HTML page with four grouped bar charts:
      rides per weekday, mean duration per weekday,
      rides per month, mean duration per month.

    Empty aggregates render a notice instead of charts.
    """
    payload = build_chart_payload(by_weekday, by_month)
    payload_json = json.dumps(payload)

    empty = by_weekday.empty and by_month.empty

    if empty:
        body_html = """
  <div class="cy-empty">No rides left after cleaning, nothing to chart.</div>
"""
    else:
        body_html = """
  <div class="cy-grid">
    <div class="cy-card">
      <h3 class="cy-h3">Number of rides by weekday</h3>
      <div class="chart-box"><canvas id="weekday_rides"></canvas></div>
    </div>
    <div class="cy-card">
      <h3 class="cy-h3">Average ride duration by weekday (min)</h3>
      <div class="chart-box"><canvas id="weekday_duration"></canvas></div>
    </div>
    <div class="cy-card">
      <h3 class="cy-h3">Number of rides by month</h3>
      <div class="chart-box"><canvas id="month_rides"></canvas></div>
    </div>
    <div class="cy-card">
      <h3 class="cy-h3">Average ride duration by month (min)</h3>
      <div class="chart-box"><canvas id="month_duration"></canvas></div>
    </div>
  </div>
"""

    return f"""
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8" />
<title>{title}</title>

<style>
body {{
  margin: 0;
  font-family: sans-serif;
  background: #fafafa;
}}

.cy-wrap {{
  max-width: 1600px;
  margin: 32px auto 120px auto;
  padding: 0 24px;
}}

.cy-grid {{
  display: grid;
  grid-template-columns: 1fr 1fr;
  gap: 24px;
}}

.cy-card {{
  background: #fff;
  border: 1px solid #e5e5e5;
  border-radius: 12px;
  padding: 12px 14px;
}}

.cy-h3 {{
  font-size: 14px;
  font-weight: 800;
  margin: 0 0 10px 0;
}}

.chart-box {{
  height: 320px;
  position: relative;
}}
.chart-box canvas {{
  width: 100% !important;
  height: 100% !important;
}}

.cy-empty {{
  padding: 24px;
  color: #444;
  border: 1px dashed #ccc;
  border-radius: 12px;
}}
</style>
</head>
<body>
<div class="cy-wrap">
  <h2>{title}</h2>
{body_html}
</div>

<script>
  window.__CY_CHARTS__ = {payload_json};
</script>

<script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
<script>
(function() {{
  var DATA = window.__CY_CHARTS__;
  if (!DATA || !window.Chart) return;

  function draw(id, yTitle) {{
    var el = document.getElementById(id);
    var series = DATA[id];
    if (!el || !series) return;

    new Chart(el, {{
      type: "bar",
      data: {{
        labels: series.labels,
        datasets: series.datasets.map(function(d) {{
          var c = DATA.colors[d.segment] || ["#888", "rgba(136,136,136,0.75)"];
          return {{
            label: d.segment,
            data: d.data,
            borderColor: c[0],
            backgroundColor: c[1],
            borderWidth: 1
          }};
        }})
      }},
      options: {{
        responsive: true,
        maintainAspectRatio: false,
        plugins: {{ legend: {{ display: true }} }},
        scales: {{
          y: {{ beginAtZero: true, title: {{ display: true, text: yTitle }} }}
        }}
      }}
    }});
  }}

  draw("weekday_rides", "Rides");
  draw("weekday_duration", "Minutes");
  draw("month_rides", "Rides");
  draw("month_duration", "Minutes");
}})();
</script>
</body>
</html>
"""
