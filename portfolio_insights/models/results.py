"""Derived summary models handed to presentation and reporting."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .record import Region, Segment


class AggregateMetrics(BaseModel):
    """KPI figures over the currently filtered record set."""

    model_config = ConfigDict(frozen=True)

    record_count: int = 0
    total_balance: int = 0
    total_revenue: int = 0
    avg_risk: float = 0.0
    default_rate: float = Field(0.0, description="Percentage of defaulted records")

    @property
    def is_empty(self) -> bool:
        return self.record_count == 0


class SegmentSummary(BaseModel):
    """Running totals for one customer segment."""

    model_config = ConfigDict(frozen=True)

    segment: Segment
    balance: int = 0
    revenue: int = 0
    count: int = 0


class RegionSummary(BaseModel):
    """Running totals for one region."""

    model_config = ConfigDict(frozen=True)

    region: Region
    revenue: int = 0
    balance: int = 0
    count: int = 0


class RiskReturnPoint(BaseModel):
    """Single point of the risk versus revenue scatter."""

    model_config = ConfigDict(frozen=True)

    customer_id: str
    risk_score: float
    annual_revenue: int
    segment: Segment
    default_flag: bool


class InsightReport(BaseModel):
    """Narrative analysis attached to a portfolio view."""

    model_config = ConfigDict(frozen=True)

    insights: List[str] = Field(..., min_length=3, max_length=3)
    recommendation: str
    source: Literal["llm", "fallback"] = "llm"

    @field_validator("insights")
    @classmethod
    def _validate_insights(cls, value: List[str]) -> List[str]:
        cleaned = [str(item).strip() for item in value]
        if any(not item for item in cleaned):
            raise ValueError("insights must be non-empty strings")
        return cleaned

    @field_validator("recommendation")
    @classmethod
    def _validate_recommendation(cls, value: str) -> str:
        value = str(value).strip()
        if not value:
            raise ValueError("recommendation must not be empty")
        return value

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"
