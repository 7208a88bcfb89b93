"""Synthetic portfolio data generation.

Records are drawn from segment-conditioned distributions so that the
aggregate views show realistic contrasts: high-net-worth customers carry
large balances against generous limits, mass-market customers run close to
their limits and score riskier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..models.record import (
    MAX_RISK_SCORE,
    MAX_UTILIZATION,
    MIN_RISK_SCORE,
    PortfolioRecord,
    Region,
    Segment,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_RECORD_COUNT = 200
CUSTOMER_ID_OFFSET = 1000

HIGH_RISK_THRESHOLD = 0.75
HIGH_RISK_DEFAULT_PROBABILITY = 0.4
BASE_DEFAULT_PROBABILITY = 0.02
REVENUE_YIELD = 0.04
REVENUE_NOISE_MAX = 500.0


@dataclass(frozen=True)
class SegmentProfile:
    """Distribution parameters for one customer segment."""

    balance_low: float
    balance_high: float
    credit_limit: int
    risk_bias: float
    risk_add_on: float = 0.0


SEGMENT_PROFILES: Dict[Segment, SegmentProfile] = {
    Segment.HIGH_NET_WORTH: SegmentProfile(50_000, 200_000, 100_000, risk_bias=0.1),
    Segment.AFFLUENT: SegmentProfile(15_000, 65_000, 40_000, risk_bias=0.3),
    Segment.MASS_MARKET: SegmentProfile(1_000, 11_000, 15_000, risk_bias=0.0, risk_add_on=0.1),
}

SEGMENTS: Tuple[Segment, ...] = tuple(Segment)
REGIONS: Tuple[Region, ...] = tuple(Region)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _build_record(index: int, rng: np.random.Generator) -> PortfolioRecord:
    segment = SEGMENTS[int(rng.integers(len(SEGMENTS)))]
    region = REGIONS[int(rng.integers(len(REGIONS)))]
    profile = SEGMENT_PROFILES[segment]

    balance = float(rng.uniform(profile.balance_low, profile.balance_high))
    utilization = min(balance / profile.credit_limit, MAX_UTILIZATION)

    risk_score = float(rng.uniform(0.0, 1.0)) * 0.4 + utilization * 0.5 + profile.risk_add_on
    risk_score = _clamp(risk_score, MIN_RISK_SCORE, MAX_RISK_SCORE)

    default_probability = (
        HIGH_RISK_DEFAULT_PROBABILITY if risk_score > HIGH_RISK_THRESHOLD else BASE_DEFAULT_PROBABILITY
    )
    default_flag = bool(rng.uniform(0.0, 1.0) < default_probability)
    annual_revenue = balance * REVENUE_YIELD + float(rng.uniform(0.0, REVENUE_NOISE_MAX))

    return PortfolioRecord(
        customer_id=f"CUST-{CUSTOMER_ID_OFFSET + index}",
        segment=segment,
        region=region,
        account_balance=int(round(balance)),
        credit_limit=profile.credit_limit,
        utilization=round(utilization, 2),
        risk_score=round(risk_score, 3),
        annual_revenue=int(round(annual_revenue)),
        default_flag=default_flag,
    )


def generate(
    count: int = DEFAULT_RECORD_COUNT,
    rng: Optional[np.random.Generator] = None,
    *,
    seed: Optional[int] = None,
) -> Tuple[PortfolioRecord, ...]:
    """Generate ``count`` synthetic portfolio records.

    Pass ``rng`` (or ``seed``) for reproducible output. A non-positive or
    non-integer ``count`` yields an empty tuple.
    """
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count <= 0:
        LOGGER.warning("Requested %r records; returning an empty portfolio", count)
        return ()
    rng = rng if rng is not None else np.random.default_rng(seed)
    records = tuple(_build_record(index, rng) for index in range(int(count)))
    LOGGER.debug("Generated %d synthetic portfolio records", len(records))
    return records


RECORD_COLUMNS: List[str] = list(PortfolioRecord.model_fields)


def records_to_frame(records: Sequence[PortfolioRecord]) -> pd.DataFrame:
    """Flatten records into a dataframe with enum values as plain strings."""
    rows = [record.model_dump(mode="json") for record in records]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)
