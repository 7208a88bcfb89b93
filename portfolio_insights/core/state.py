"""Immutable dashboard state and the reducer that evolves it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union

from ..models.record import ALL, PortfolioRecord, Region, Segment
from ..models.results import InsightReport
from .aggregator import PortfolioView, aggregate
from .generator import DEFAULT_RECORD_COUNT, generate
from .validator import (
    normalize_region_filter,
    normalize_segment_filter,
    validate_chart_type,
    validate_unique_customers,
)

LOGGER = logging.getLogger(__name__)


class InvalidTransitionError(Exception):
    """Raised when the insight request lifecycle is driven out of order."""


class RequestStatus(str, Enum):
    """Lifecycle of the single insight request slot."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestStatus.SUCCEEDED, RequestStatus.FAILED)

    def transition(self, target: "RequestStatus") -> "RequestStatus":
        if target not in _TRANSITIONS[self]:
            raise InvalidTransitionError(f"Cannot move insight request from {self.value} to {target.value}")
        return target


_TRANSITIONS: Dict[RequestStatus, FrozenSet[RequestStatus]] = {
    RequestStatus.IDLE: frozenset({RequestStatus.PENDING}),
    RequestStatus.PENDING: frozenset({RequestStatus.SUCCEEDED, RequestStatus.FAILED}),
    RequestStatus.SUCCEEDED: frozenset({RequestStatus.IDLE}),
    RequestStatus.FAILED: frozenset({RequestStatus.IDLE}),
}


@dataclass(frozen=True)
class DashboardState:
    """Snapshot of everything the dashboard renders from."""

    records: Tuple[PortfolioRecord, ...] = ()
    segment_filter: Union[Segment, str] = ALL
    region_filter: Union[Region, str] = ALL
    chart_type: str = "bar"
    request_status: RequestStatus = RequestStatus.IDLE
    request_token: int = 0
    insights: Optional[InsightReport] = None

    @property
    def is_generating(self) -> bool:
        return self.request_status is RequestStatus.PENDING


# ----------------------------------------------------------------- events
@dataclass(frozen=True)
class RefreshData:
    records: Tuple[PortfolioRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SelectSegment:
    value: Union[Segment, str, None]


@dataclass(frozen=True)
class SelectRegion:
    value: Union[Region, str, None]


@dataclass(frozen=True)
class SelectChartType:
    value: str


@dataclass(frozen=True)
class InsightsRequested:
    pass


@dataclass(frozen=True)
class InsightsCompleted:
    token: int
    report: InsightReport


Event = Union[RefreshData, SelectSegment, SelectRegion, SelectChartType, InsightsRequested, InsightsCompleted]


def reduce(state: DashboardState, event: Event) -> DashboardState:
    """Return the state that results from applying ``event`` to ``state``."""
    if isinstance(event, RefreshData):
        records = tuple(event.records)
        validate_unique_customers(records)
        if state.is_generating:
            LOGGER.info("Data refresh superseded insight request %d", state.request_token)
        return replace(
            state,
            records=records,
            insights=None,
            request_status=RequestStatus.IDLE,
            request_token=state.request_token + 1,
        )
    if isinstance(event, SelectSegment):
        return replace(state, segment_filter=normalize_segment_filter(event.value))
    if isinstance(event, SelectRegion):
        return replace(state, region_filter=normalize_region_filter(event.value))
    if isinstance(event, SelectChartType):
        return replace(state, chart_type=validate_chart_type(event.value))
    if isinstance(event, InsightsRequested):
        status = state.request_status
        if status is RequestStatus.PENDING:
            LOGGER.debug("Insight request already in flight; ignoring")
            return state
        if status.is_terminal:
            status = status.transition(RequestStatus.IDLE)
        return replace(state, request_status=status.transition(RequestStatus.PENDING))
    if isinstance(event, InsightsCompleted):
        if state.request_status is not RequestStatus.PENDING or event.token != state.request_token:
            LOGGER.debug("Dropping stale insight result for token %d", event.token)
            return state
        target = RequestStatus.FAILED if event.report.is_fallback else RequestStatus.SUCCEEDED
        return replace(
            state,
            request_status=state.request_status.transition(target),
            insights=event.report,
        )
    raise TypeError(f"Unsupported dashboard event: {type(event).__name__}")


def initial_state(count: int = DEFAULT_RECORD_COUNT, seed: Optional[int] = None) -> DashboardState:
    """Build a fresh state with a newly generated portfolio."""
    return reduce(DashboardState(), RefreshData(generate(count, seed=seed)))


def view(state: DashboardState) -> PortfolioView:
    """Derive the aggregated view for the state's current selection."""
    return aggregate(state.records, state.segment_filter, state.region_filter)
