"""Domain models for portfolio records and their summaries."""

from .record import ALL, PortfolioRecord, Region, Segment
from .results import (
    AggregateMetrics,
    InsightReport,
    RegionSummary,
    RiskReturnPoint,
    SegmentSummary,
)

__all__ = [
    "ALL",
    "AggregateMetrics",
    "InsightReport",
    "PortfolioRecord",
    "Region",
    "RegionSummary",
    "RiskReturnPoint",
    "Segment",
    "SegmentSummary",
]
