"""Visualization utilities for portfolio analytics."""

from __future__ import annotations

from .chart_components import (
    build_region_donut,
    build_risk_return_scatter,
    build_segment_composition,
)
from .dashboard_data import extract_dashboard_payload, region_frame, segment_frame, static_insights
from .themes import DEFAULT_THEME, get_theme

__all__ = [
    "DEFAULT_THEME",
    "build_region_donut",
    "build_risk_return_scatter",
    "build_segment_composition",
    "extract_dashboard_payload",
    "get_theme",
    "region_frame",
    "segment_frame",
    "static_insights",
]
