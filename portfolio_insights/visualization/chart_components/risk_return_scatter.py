"""Risk versus revenue scatter, coloured by default status."""

from __future__ import annotations

from typing import Optional, Sequence

import plotly.graph_objects as go

from ...models.results import RiskReturnPoint
from ..themes import DEFAULT_THEME


def build_risk_return_scatter(
    points: Sequence[RiskReturnPoint],
    *,
    theme: Optional[dict] = None,
) -> go.Figure:
    """
    Plot annual revenue against risk score.

    Defaulted customers and current customers are drawn as separate traces so
    the legend doubles as the colour key.
    """
    theme = theme or DEFAULT_THEME
    palette = theme["palette"]

    fig = go.Figure()
    for defaulted, label, color in (
        (False, "Current", palette["secondary_teal"]),
        (True, "Defaulted", palette["negative"]),
    ):
        subset = [point for point in points if point.default_flag is defaulted]
        fig.add_trace(
            go.Scatter(
                x=[point.risk_score for point in subset],
                y=[point.annual_revenue for point in subset],
                mode="markers",
                name=label,
                marker=dict(color=color, size=9, opacity=0.75),
                customdata=[[point.segment.value, point.customer_id] for point in subset],
                hovertemplate=(
                    "%{customdata[0]} (%{customdata[1]})<br>Rev $%{y:,.0f}"
                    "<br>Risk %{x:.2f}<extra></extra>"
                ),
            )
        )

    fig.update_layout(
        template=theme["plotly_template"],
        title="Risk-Return Profile",
        xaxis=dict(title="Risk Score", range=[0, 1]),
        yaxis=dict(title="Annual Revenue", tickprefix="$", tickformat="~s"),
        margin=dict(l=60, r=30, t=60, b=50),
        height=360,
    )
    return fig
