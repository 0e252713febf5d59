"""Declarative area-chart config and its Plotly rendering."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from eip_status_radar.config import Settings
from eip_status_radar.dates import period_sort_key
from eip_status_radar.palette import color_sequence_for, ordered_categories
from eip_status_radar.schema import SeriesPoint
from eip_status_radar.series import series_frame
from eip_status_radar.ui.style import apply_plotly_theme

X_FIELD = "date"
Y_FIELD = "value"
SERIES_FIELD = "category"

_LEGEND_ANCHORS: Dict[str, Dict[str, Any]] = {
    "top-right": dict(x=1.0, y=1.0, xanchor="right", yanchor="top", orientation="v"),
    "top-left": dict(x=0.0, y=1.0, xanchor="left", yanchor="top", orientation="v"),
    "top": dict(x=0.5, y=1.12, xanchor="center", yanchor="bottom", orientation="h"),
    "bottom": dict(x=0.5, y=-0.25, xanchor="center", yanchor="top", orientation="h"),
    "right": dict(x=1.02, y=0.5, xanchor="left", yanchor="middle", orientation="v"),
}

_RGB_RE = re.compile(r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)")


def build_area_config(points: Sequence[SeriesPoint], settings: Settings) -> Dict[str, Any]:
    """Return the chart widget configuration object for the given points."""
    df = series_frame(points)
    categories = df[SERIES_FIELD].tolist() if not df.empty else []
    return {
        "data": df.to_dict(orient="records"),
        "xField": X_FIELD,
        "yField": Y_FIELD,
        "seriesField": SERIES_FIELD,
        "color": color_sequence_for(categories),
        "xAxis": {"range": [0, 1], "tickCount": int(settings.CHART_TICK_COUNT)},
        "areaStyle": {"fillOpacity": float(settings.CHART_FILL_OPACITY)},
        "legend": {"position": str(settings.CHART_LEGEND_POSITION or "top-right")},
        "smooth": bool(settings.CHART_SMOOTH),
        "slider": {
            "start": float(settings.CHART_SLIDER_START),
            "end": float(settings.CHART_SLIDER_END),
        },
    }


def _with_alpha(color: str, alpha: float) -> str:
    m = _RGB_RE.match(str(color or ""))
    if not m:
        return color
    r, g, b = m.groups()
    return f"rgba({r}, {g}, {b}, {alpha:.2f})"


def chronological_periods(labels: Sequence[str]) -> List[str]:
    return sorted({str(x) for x in labels}, key=period_sort_key)


def _slider_window(n_periods: int, start: float, end: float) -> List[float] | None:
    if n_periods < 2:
        return None
    lo = min(max(float(start), 0.0), 1.0)
    hi = min(max(float(end), 0.0), 1.0)
    if hi <= lo:
        lo, hi = 0.0, 1.0
    span = n_periods - 1
    return [lo * span, hi * span]


def area_figure(config: Dict[str, Any], *, dark_mode: bool = False) -> go.Figure:
    """Translate the declarative config into a stacked Plotly area figure."""
    x = str(config.get("xField") or X_FIELD)
    y = str(config.get("yField") or Y_FIELD)
    series = str(config.get("seriesField") or SERIES_FIELD)
    df = pd.DataFrame(list(config.get("data") or []), columns=[series, x, y])

    if df.empty:
        fig = go.Figure()
        fig.add_annotation(
            text="No activity recorded for this status",
            showarrow=False,
            xref="paper",
            yref="paper",
            x=0.5,
            y=0.5,
        )
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False)
        return apply_plotly_theme(fig, dark_mode=dark_mode, showlegend=False)

    periods = chronological_periods(df[x].tolist())
    rank = {label: idx for idx, label in enumerate(periods)}
    # Stable sort keeps duplicate (category, period) points in source order.
    df = df.assign(__rank=df[x].map(rank)).sort_values("__rank", kind="stable")
    df = df.drop(columns="__rank")
    categories = ordered_categories(df[series].tolist())

    fig = px.area(
        df,
        x=x,
        y=y,
        color=series,
        category_orders={x: periods, series: categories},
        color_discrete_sequence=list(config.get("color") or []) or None,
        line_shape="spline" if bool(config.get("smooth")) else "linear",
    )
    opacity = float((config.get("areaStyle") or {}).get("fillOpacity", 0.6))
    for trace in fig.data:
        trace.fillcolor = _with_alpha(trace.line.color, opacity)

    x_axis = config.get("xAxis") or {}
    fig.update_xaxes(type="category", nticks=int(x_axis.get("tickCount") or 5))

    slider = config.get("slider") or {}
    window = _slider_window(len(periods), slider.get("start", 0.0), slider.get("end", 1.0))
    if window is not None:
        fig.update_xaxes(rangeslider=dict(visible=True, thickness=0.08), range=window)

    position = str((config.get("legend") or {}).get("position") or "top-right")
    fig.update_layout(
        legend=_LEGEND_ANCHORS.get(position, _LEGEND_ANCHORS["top-right"]),
        hovermode="x unified",
    )
    return apply_plotly_theme(fig, dark_mode=dark_mode, showlegend=True)


def render_area_chart(fig: go.Figure, *, key: str) -> None:
    """Mount the chart under `key`; a new key forces a full remount."""
    st.plotly_chart(fig, use_container_width=True, key=key)
