"""Filter, group and reduce portfolio records into dashboard summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..models.record import ALL, PortfolioRecord, Region, Segment
from ..models.results import AggregateMetrics, RegionSummary, RiskReturnPoint, SegmentSummary
from .validator import normalize_region_filter, normalize_segment_filter

SCATTER_POINT_LIMIT = 150


def filter_records(
    records: Iterable[PortfolioRecord],
    segment_filter: Union[Segment, str, None] = ALL,
    region_filter: Union[Region, str, None] = ALL,
) -> Tuple[PortfolioRecord, ...]:
    """Keep records matching both filters, preserving input order."""
    segment = normalize_segment_filter(segment_filter)
    region = normalize_region_filter(region_filter)
    return tuple(record for record in records if record.matches(segment, region))


def compute_metrics(filtered: Iterable[PortfolioRecord]) -> AggregateMetrics:
    """Compute KPI totals and means.

    An empty input yields all-zero metrics rather than NaN.
    """
    count = 0
    total_balance = 0
    total_revenue = 0
    risk_sum = 0.0
    defaults = 0
    for record in filtered:
        count += 1
        total_balance += record.account_balance
        total_revenue += record.annual_revenue
        risk_sum += record.risk_score
        defaults += int(record.default_flag)

    if count == 0:
        return AggregateMetrics()
    return AggregateMetrics(
        record_count=count,
        total_balance=total_balance,
        total_revenue=total_revenue,
        avg_risk=risk_sum / count,
        default_rate=defaults / count * 100.0,
    )


def group_by_segment(filtered: Iterable[PortfolioRecord]) -> Dict[Segment, SegmentSummary]:
    """Accumulate balance, revenue and count per segment in one pass."""
    totals: Dict[Segment, List[int]] = {}
    for record in filtered:
        acc = totals.setdefault(record.segment, [0, 0, 0])
        acc[0] += record.account_balance
        acc[1] += record.annual_revenue
        acc[2] += 1
    return {
        segment: SegmentSummary(segment=segment, balance=balance, revenue=revenue, count=count)
        for segment, (balance, revenue, count) in totals.items()
    }


def group_by_region(filtered: Iterable[PortfolioRecord]) -> List[RegionSummary]:
    """Accumulate per-region totals, ordered by descending revenue."""
    totals: Dict[Region, List[int]] = {}
    for record in filtered:
        acc = totals.setdefault(record.region, [0, 0, 0])
        acc[0] += record.annual_revenue
        acc[1] += record.account_balance
        acc[2] += 1
    summaries = [
        RegionSummary(region=region, revenue=revenue, balance=balance, count=count)
        for region, (revenue, balance, count) in totals.items()
    ]
    return sorted(summaries, key=lambda summary: summary.revenue, reverse=True)


def risk_return_points(
    filtered: Iterable[PortfolioRecord], limit: int = SCATTER_POINT_LIMIT
) -> List[RiskReturnPoint]:
    """Return scatter points for the first ``limit`` records."""
    points: List[RiskReturnPoint] = []
    for record in filtered:
        if len(points) >= limit:
            break
        points.append(
            RiskReturnPoint(
                customer_id=record.customer_id,
                risk_score=record.risk_score,
                annual_revenue=record.annual_revenue,
                segment=record.segment,
                default_flag=record.default_flag,
            )
        )
    return points


def revenue_share(part: float, total: float) -> float:
    """Percentage of ``total`` represented by ``part``; zero when total is zero."""
    if not total:
        return 0.0
    return part / total * 100.0


@dataclass(frozen=True)
class PortfolioView:
    """Everything the presentation layer needs for one filter selection."""

    records: Tuple[PortfolioRecord, ...]
    filtered: Tuple[PortfolioRecord, ...]
    segment_filter: Union[Segment, str]
    region_filter: Union[Region, str]
    metrics: AggregateMetrics
    segments: Dict[Segment, SegmentSummary]
    regions: List[RegionSummary]
    scatter: List[RiskReturnPoint]

    @property
    def total_records(self) -> int:
        return len(self.records)

    @property
    def top_region(self) -> Optional[RegionSummary]:
        return self.regions[0] if self.regions else None

    def segment_share(self, segment: Segment) -> float:
        summary = self.segments.get(segment)
        if summary is None:
            return 0.0
        return revenue_share(summary.revenue, self.metrics.total_revenue)


def aggregate(
    records: Iterable[PortfolioRecord],
    segment_filter: Union[Segment, str, None] = ALL,
    region_filter: Union[Region, str, None] = ALL,
) -> PortfolioView:
    """Run the full filter/group/reduce pipeline for one selection."""
    records = tuple(records)
    segment = normalize_segment_filter(segment_filter)
    region = normalize_region_filter(region_filter)
    filtered = filter_records(records, segment, region)
    return PortfolioView(
        records=records,
        filtered=filtered,
        segment_filter=segment,
        region_filter=region,
        metrics=compute_metrics(filtered),
        segments=group_by_segment(filtered),
        regions=group_by_region(filtered),
        scatter=risk_return_points(filtered),
    )
