"""Reusable Plotly chart components for the portfolio dashboard."""

from .segment_composition import build_segment_composition
from .region_donut import build_region_donut
from .risk_return_scatter import build_risk_return_scatter

__all__ = [
    "build_segment_composition",
    "build_region_donut",
    "build_risk_return_scatter",
]
