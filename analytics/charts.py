from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def monthly_requests_chart(monthly: pd.DataFrame) -> alt.LayerChart:
    base = alt.Chart(monthly).encode(x=alt.X("month:O", title="Month", sort=None))
    bars = base.mark_bar(opacity=0.6, cornerRadiusTopLeft=4, cornerRadiusTopRight=4).encode(
        y=alt.Y("closed:Q", title="Requests"),
        tooltip=[alt.Tooltip("month:O", title="Month"), alt.Tooltip("closed:Q", title="Closed", format=",")],
    )
    line = base.mark_line(point=True, color="#ff6384").encode(
        y=alt.Y("requests:Q"),
        tooltip=[alt.Tooltip("month:O", title="Month"), alt.Tooltip("requests:Q", title="Requests", format=",")],
    )
    return alt.layer(bars, line)


def closure_rate_chart(monthly: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(monthly)
        .mark_area(line=True, opacity=0.2)
        .encode(
            x=alt.X("month:O", title="Month", sort=None),
            y=alt.Y("closureRate:Q", title="Closure Rate (%)", scale=alt.Scale(domain=[0, 100])),
            tooltip=[alt.Tooltip("month:O", title="Month"), alt.Tooltip("closureRate:Q", title="Closure Rate", format=".1f")],
        )
    )


def department_status_chart(breakdown: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(breakdown)
        .mark_bar()
        .encode(
            x=alt.X("department:N", title="Department", sort=alt.EncodingSortField(field="count", op="sum", order="descending"), axis=alt.Axis(labelAngle=-45)),
            y=alt.Y("count:Q", title="Requests", stack="zero"),
            color=alt.Color("status:N", title="Status"),
            tooltip=["department", "status", alt.Tooltip("count:Q", format=",")],
        )
    )


def status_distribution_chart(distribution: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(distribution)
        .mark_arc(innerRadius=60)
        .encode(
            theta=alt.Theta("count:Q"),
            color=alt.Color("status:N", title="Status"),
            tooltip=["status", alt.Tooltip("count:Q", format=",")],
        )
    )


def spectrum_chart(points: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(points)
        .mark_line()
        .encode(
            x=alt.X("x:Q", title="Bin"),
            y=alt.Y("y:Q", title="Magnitude"),
            tooltip=[alt.Tooltip("x:Q", format="d"), alt.Tooltip("y:Q", format=".4f")],
        )
    )
