"""Shared record builders for the test suite."""

from __future__ import annotations

from typing import Tuple

from portfolio_insights.core.generator import SEGMENT_PROFILES
from portfolio_insights.models.record import PortfolioRecord, Region, Segment


def make_record(
    customer_id: str,
    segment: Segment,
    region: Region,
    balance: int,
    revenue: int,
    risk: float,
    defaulted: bool = False,
) -> PortfolioRecord:
    limit = SEGMENT_PROFILES[segment].credit_limit
    return PortfolioRecord(
        customer_id=customer_id,
        segment=segment,
        region=region,
        account_balance=balance,
        credit_limit=limit,
        utilization=round(min(balance / limit, 1.2), 2),
        risk_score=risk,
        annual_revenue=revenue,
        default_flag=defaulted,
    )


def three_record_portfolio() -> Tuple[PortfolioRecord, ...]:
    return (
        make_record("CUST-1", Segment.MASS_MARKET, Region.NORTH_AMERICA, 5000, 700, 0.3),
        make_record("CUST-2", Segment.AFFLUENT, Region.EMEA, 20000, 1300, 0.5),
        make_record("CUST-3", Segment.HIGH_NET_WORTH, Region.EMEA, 100000, 4500, 0.2, defaulted=True),
    )
