"""Customer account snapshot model definitions."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ALL = "all"
MAX_UTILIZATION = 1.2
MIN_RISK_SCORE = 0.01
MAX_RISK_SCORE = 0.99


class Segment(str, Enum):
    """Customer wealth tier."""

    MASS_MARKET = "Mass Market"
    AFFLUENT = "Affluent"
    HIGH_NET_WORTH = "High Net Worth"


class Region(str, Enum):
    """Geographic booking region."""

    NORTH_AMERICA = "North America"
    EMEA = "EMEA"
    APAC = "APAC"
    LATAM = "LatAm"


SegmentFilter = Union[Segment, str]
RegionFilter = Union[Region, str]


class PortfolioRecord(BaseModel):
    """Represents a single synthetic customer-account snapshot."""

    model_config = ConfigDict(frozen=True)

    customer_id: str = Field(..., description="Unique customer identifier")
    segment: Segment
    region: Region
    account_balance: int = Field(..., ge=0, description="Outstanding balance")
    credit_limit: int = Field(..., gt=0, description="Segment credit limit")
    utilization: float = Field(
        ...,
        ge=0,
        le=MAX_UTILIZATION,
        description="Balance over limit, capped at 1.2 and rounded to 2 dp",
    )
    risk_score: float = Field(..., ge=MIN_RISK_SCORE, le=MAX_RISK_SCORE)
    annual_revenue: int = Field(..., ge=0)
    default_flag: bool = False

    @field_validator("customer_id", mode="before")
    @classmethod
    def _coerce_customer_id(cls, value: Any) -> str:
        """Ensure the customer id is a trimmed, non-empty string."""
        if value is None:
            raise ValueError("customer_id cannot be null")
        text = str(value).strip()
        if not text:
            raise ValueError("customer_id cannot be blank")
        return text

    @model_validator(mode="after")
    def _check_utilization(self) -> "PortfolioRecord":
        # Balance is rounded after utilization is derived, so allow one cent of drift.
        expected = min(self.account_balance / self.credit_limit, MAX_UTILIZATION)
        if abs(expected - self.utilization) > 0.01:
            raise ValueError(
                f"utilization {self.utilization} does not match "
                f"balance/limit {expected:.4f} for {self.customer_id}"
            )
        return self

    def matches(self, segment_filter: SegmentFilter = ALL, region_filter: RegionFilter = ALL) -> bool:
        """Return True when the record passes both dimension filters."""
        segment_ok = segment_filter == ALL or self.segment == segment_filter
        region_ok = region_filter == ALL or self.region == region_filter
        return segment_ok and region_ok
