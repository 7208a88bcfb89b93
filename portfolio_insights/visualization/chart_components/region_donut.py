"""Regional revenue contribution donut."""

from __future__ import annotations

from typing import Optional, Sequence

import plotly.graph_objects as go

from ...models.results import RegionSummary
from ..themes import DEFAULT_THEME


def build_region_donut(
    regions: Sequence[RegionSummary],
    *,
    theme: Optional[dict] = None,
) -> go.Figure:
    theme = theme or DEFAULT_THEME
    colors = theme["region_colors"]
    pie = go.Pie(
        labels=[summary.region.value for summary in regions],
        values=[summary.revenue for summary in regions],
        hole=0.55,
        sort=False,
        marker=dict(colors=[colors[index % len(colors)] for index in range(len(regions))]),
        hovertemplate="%{label}<br>Revenue $%{value:,.0f}<br>%{percent}<extra></extra>",
    )
    fig = go.Figure(pie)
    fig.update_layout(
        template=theme["plotly_template"],
        title="Regional Performance",
        legend=dict(orientation="h", yanchor="top", y=-0.05, xanchor="center", x=0.5),
        margin=dict(l=20, r=20, t=60, b=20),
        height=360,
    )
    return fig
