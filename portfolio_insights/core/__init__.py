"""Core generation, aggregation and state logic."""

from .aggregator import (
    PortfolioView,
    aggregate,
    compute_metrics,
    filter_records,
    group_by_region,
    group_by_segment,
    revenue_share,
    risk_return_points,
)
from .generator import DEFAULT_RECORD_COUNT, SEGMENT_PROFILES, generate, records_to_frame
from .validator import ValidationError

__all__ = [
    "DEFAULT_RECORD_COUNT",
    "PortfolioView",
    "SEGMENT_PROFILES",
    "ValidationError",
    "aggregate",
    "compute_metrics",
    "filter_records",
    "generate",
    "group_by_region",
    "group_by_segment",
    "records_to_frame",
    "revenue_share",
    "risk_return_points",
]
