"""Data preparation helpers for the dashboard panels."""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from ..core.aggregator import PortfolioView
from ..models.record import Segment
from ..utils.numbers import format_currency


def segment_frame(view: PortfolioView) -> pd.DataFrame:
    rows = [
        {
            "segment": summary.segment.value,
            "balance": summary.balance,
            "revenue": summary.revenue,
            "count": summary.count,
        }
        for summary in (view.segments.get(segment) for segment in Segment)
        if summary is not None
    ]
    return pd.DataFrame(rows, columns=["segment", "balance", "revenue", "count"])


def region_frame(view: PortfolioView) -> pd.DataFrame:
    total = view.metrics.total_revenue
    rows = [
        {
            "region": summary.region.value,
            "revenue": summary.revenue,
            "balance": summary.balance,
            "count": summary.count,
            "revenue_share_pct": round(summary.revenue / total * 100.0, 1) if total else 0.0,
        }
        for summary in view.regions
    ]
    return pd.DataFrame(rows, columns=["region", "revenue", "balance", "count", "revenue_share_pct"])


def extract_dashboard_payload(view: PortfolioView) -> Dict[str, object]:
    """
    Collect the tables and headline numbers rendered by the dashboard.
    """
    return {
        "metrics": view.metrics,
        "segment_table": segment_frame(view),
        "region_table": region_frame(view),
        "scatter": view.scatter,
        "displayed": len(view.filtered),
        "total": view.total_records,
    }


def static_insights(view: PortfolioView) -> List[str]:
    """Rule-based observations shown until an AI summary is requested."""
    if view.metrics.is_empty:
        return ["No accounts match the current filters."]

    insights: List[str] = []
    hnw_share = view.segment_share(Segment.HIGH_NET_WORTH)
    hnw = view.segments.get(Segment.HIGH_NET_WORTH)
    if hnw is not None:
        customer_share = hnw.count / view.metrics.record_count * 100.0
        insights.append(
            f"High Net Worth dominance: {customer_share:.0f}% of customers generate "
            f"{hnw_share:.0f}% of total revenue."
        )

    mass = view.segments.get(Segment.MASS_MARKET)
    if mass is not None:
        stretched = sum(
            1
            for record in view.filtered
            if record.segment is Segment.MASS_MARKET and record.utilization > 0.5
        )
        insights.append(
            f"Risk concentration: {stretched} of {mass.count} Mass Market accounts run above "
            "50% utilization, the main driver of elevated risk scores."
        )

    top = view.top_region
    if top is not None:
        insights.append(
            f"Regional opportunity: {top.region.value} leads with "
            f"{format_currency(top.revenue)} in annual revenue."
        )
    return insights
