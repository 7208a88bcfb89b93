"""Portfolio composition chart: outstanding balance per customer segment."""

from __future__ import annotations

from typing import Mapping, Optional

import plotly.graph_objects as go

from ...models.record import Segment
from ...models.results import SegmentSummary
from ..themes import DEFAULT_THEME


def build_segment_composition(
    segments: Mapping[Segment, SegmentSummary],
    *,
    chart_type: str = "bar",
    theme: Optional[dict] = None,
) -> go.Figure:
    """
    Plot total balance per segment as bars (default) or a connected line.
    """
    theme = theme or DEFAULT_THEME
    colors = theme["segment_colors"]
    ordered = [segments[segment] for segment in Segment if segment in segments]
    names = [summary.segment.value for summary in ordered]
    balances = [summary.balance for summary in ordered]
    customdata = [[summary.count, summary.revenue] for summary in ordered]
    hover = (
        "%{x}<br>Balance $%{y:,.0f}<br>Customers %{customdata[0]}"
        "<br>Revenue $%{customdata[1]:,.0f}<extra></extra>"
    )

    if chart_type == "line":
        trace = go.Scatter(
            x=names,
            y=balances,
            mode="lines+markers",
            line=dict(color=theme["palette"]["primary_purple"], width=3),
            marker=dict(size=12, color=theme["palette"]["primary_purple"]),
            customdata=customdata,
            hovertemplate=hover,
            name="Balance",
        )
    else:
        trace = go.Bar(
            x=names,
            y=balances,
            marker=dict(color=[colors.get(name) for name in names], opacity=0.85),
            customdata=customdata,
            hovertemplate=hover,
            name="Balance",
        )

    fig = go.Figure(trace)
    fig.update_layout(
        template=theme["plotly_template"],
        title="Portfolio Composition",
        yaxis=dict(title="Outstanding Balance", tickprefix="$", tickformat="~s"),
        margin=dict(l=60, r=30, t=60, b=40),
        showlegend=False,
        height=360,
    )
    return fig
