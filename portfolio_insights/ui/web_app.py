# -*- coding: utf-8 -*-
"""Streamlit web interface for the retail risk and revenue dashboard."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Dict, List

import numpy as np
import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from portfolio_insights import config
from portfolio_insights.core.aggregator import PortfolioView
from portfolio_insights.core.generator import generate, records_to_frame
from portfolio_insights.core.state import (
    DashboardState,
    Event,
    InsightsCompleted,
    InsightsRequested,
    RefreshData,
    SelectChartType,
    SelectRegion,
    SelectSegment,
    reduce,
    view,
)
from portfolio_insights.integration.insights_client import FALLBACK_INSIGHTS, InsightsClient
from portfolio_insights.models.record import ALL, Region, Segment
from portfolio_insights.reporting import ReportGenerator
from portfolio_insights.utils.numbers import format_compact, format_percent
from portfolio_insights.visualization import (
    build_region_donut,
    build_risk_return_scatter,
    build_segment_composition,
    extract_dashboard_payload,
    get_theme,
    static_insights,
)

LOGGER = logging.getLogger(__name__)

STATE_KEY = "dashboard_state"
RNG_KEY = "dashboard_rng"
THEME_KEY = "dark_theme"

# Copy API settings from Streamlit secrets into the environment when provided.
try:
    raw_secrets = getattr(st, "secrets", {})
    for key in ("GROQ_API_KEY", "GROQ_MODEL", "GROQ_API_URL"):
        if key in raw_secrets:
            os.environ.setdefault(key, str(raw_secrets[key]))
except Exception as exc:  # pragma: no cover - secrets file missing or unreadable
    LOGGER.debug("Streamlit secrets unavailable: %s", exc)


def _rng() -> np.random.Generator:
    if RNG_KEY not in st.session_state:
        st.session_state[RNG_KEY] = np.random.default_rng(config.RECORD_SEED)
    return st.session_state[RNG_KEY]


def _state() -> DashboardState:
    if STATE_KEY not in st.session_state:
        records = generate(config.RECORD_COUNT, _rng())
        st.session_state[STATE_KEY] = reduce(DashboardState(), RefreshData(records))
    return st.session_state[STATE_KEY]


def _dispatch(event: Event) -> DashboardState:
    new_state = reduce(_state(), event)
    st.session_state[STATE_KEY] = new_state
    return new_state


def _render_header() -> None:
    title_col, action_col = st.columns([4, 1])
    with title_col:
        st.title("Retail Risk & Revenue")
        st.caption("Portfolio Snapshot | Synthetic demonstration data")
    with action_col:
        if st.button("Refresh Data", key="refresh_data", width="stretch"):
            _dispatch(RefreshData(generate(config.RECORD_COUNT, _rng())))
        st.toggle("Dark charts", key=THEME_KEY)


def _render_filters(state: DashboardState) -> None:
    segment_options: List[str] = [ALL] + [segment.value for segment in Segment]
    region_options: List[str] = [ALL] + [region.value for region in Region]
    seg_col, reg_col = st.columns(2)
    with seg_col:
        segment = st.selectbox(
            "Segment",
            segment_options,
            index=segment_options.index(str(getattr(state.segment_filter, "value", state.segment_filter))),
            format_func=lambda v: "All Segments" if v == ALL else v,
            key="segment_filter_select",
        )
    with reg_col:
        region = st.selectbox(
            "Region",
            region_options,
            index=region_options.index(str(getattr(state.region_filter, "value", state.region_filter))),
            format_func=lambda v: "All Regions" if v == ALL else v,
            key="region_filter_select",
        )
    _dispatch(SelectSegment(segment))
    _dispatch(SelectRegion(region))


def _render_kpis(portfolio: PortfolioView) -> None:
    metrics = portfolio.metrics
    cols = st.columns(4)
    cols[0].metric("Portfolio Balance", format_compact(metrics.total_balance))
    cols[1].metric("Annual Revenue", format_compact(metrics.total_revenue))
    cols[2].metric(
        "Avg. Risk Score",
        "N/A" if metrics.is_empty else f"{metrics.avg_risk:.3f}",
        help="Scale 0-1",
    )
    cols[3].metric(
        "Default Rate",
        "N/A" if metrics.is_empty else format_percent(metrics.default_rate),
        help=f"Threshold {config.DEFAULT_RISK_THRESHOLD_PCT}%",
    )


def _render_charts(state: DashboardState, portfolio: PortfolioView) -> None:
    theme = get_theme("dark" if st.session_state.get(THEME_KEY) else "light")
    main_col, side_col = st.columns([2, 1])
    with main_col:
        chart_type = st.radio(
            "Chart type",
            ["bar", "line"],
            index=["bar", "line"].index(state.chart_type),
            format_func=str.title,
            horizontal=True,
            key="chart_type_radio",
        )
        state = _dispatch(SelectChartType(chart_type))
        st.plotly_chart(
            build_segment_composition(portfolio.segments, chart_type=state.chart_type, theme=theme),
            width="stretch",
        )
    with side_col:
        st.plotly_chart(build_region_donut(portfolio.regions, theme=theme), width="stretch")

    scatter_col, insight_col = st.columns(2)
    with scatter_col:
        st.plotly_chart(build_risk_return_scatter(portfolio.scatter, theme=theme), width="stretch")
    with insight_col:
        _render_insights(portfolio)


def _request_insights(portfolio: PortfolioView) -> None:
    client = InsightsClient()
    if not client.is_configured:
        st.warning(
            "Missing Groq API key. Add GROQ_API_KEY to the environment or Streamlit secrets."
        )
        return
    state = _dispatch(InsightsRequested())
    token = state.request_token
    with st.spinner("Analyzing portfolio metrics..."):
        try:
            report = client.summarize(portfolio)
        except Exception:
            LOGGER.exception("Insight request failed; using fallback guidance")
            report = FALLBACK_INSIGHTS
    # The request must always reach a terminal state.
    _dispatch(InsightsCompleted(token=token, report=report))


def _render_insights(portfolio: PortfolioView) -> None:
    state = _state()
    report = state.insights
    st.markdown("### AI Analyst Report" if report and not report.is_fallback else "### Automated Insights")

    if report is None:
        for index, text in enumerate(static_insights(portfolio), start=1):
            st.markdown(f"**{index:02d}** {text}")
        if st.button("Generate AI insights", key="generate_ai", disabled=state.is_generating):
            _request_insights(portfolio)
            st.rerun()
        return

    if report.is_fallback:
        st.error("Insight service unavailable; showing fallback guidance.")
    for index, text in enumerate(report.insights, start=1):
        st.markdown(f"**{index:02d}** {text}")
    st.success(f"Strategic Recommendation: \"{report.recommendation}\"")


def _render_tables(payload: Dict[str, object]) -> None:
    with st.expander("Segment and region breakdown"):
        seg_col, reg_col = st.columns(2)
        with seg_col:
            st.dataframe(payload["segment_table"], width="stretch", hide_index=True)
        with reg_col:
            st.dataframe(payload["region_table"], width="stretch", hide_index=True)


def _render_downloads(state: DashboardState, portfolio: PortfolioView) -> None:
    generator = ReportGenerator(config.OUTPUT_ROOT)
    html_report = generator.render_html(portfolio, state.insights)
    col_a, col_b = st.columns(2)
    with col_a:
        st.download_button(
            "Download Full Risk Report",
            data=html_report.encode("utf-8"),
            file_name="risk_revenue_report.html",
            mime="text/html",
            width="stretch",
        )
    with col_b:
        st.download_button(
            "Download Filtered Records (CSV)",
            data=records_to_frame(portfolio.filtered).to_csv(index=False).encode("utf-8"),
            file_name="filtered_records.csv",
            mime="text/csv",
            width="stretch",
        )


def main() -> None:
    st.set_page_config(page_title="Retail Risk & Revenue", layout="wide")
    _render_header()
    _render_filters(_state())

    state = _state()
    portfolio = view(state)
    payload = extract_dashboard_payload(portfolio)
    st.caption(f"Displaying {payload['displayed']} of {payload['total']} records")

    try:
        _render_kpis(portfolio)
        _render_charts(state, portfolio)
        _render_tables(payload)
        _render_downloads(_state(), portfolio)
    except Exception:
        LOGGER.exception("Failed to render dashboard")
        st.error("Something went wrong while rendering the dashboard. Try refreshing the data.")


if __name__ == "__main__":
    main()
