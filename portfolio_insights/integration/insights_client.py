"""Chat-completion client that turns portfolio metrics into analyst insights."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

import requests
from pydantic import ValidationError as PydanticValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import config
from ..core.aggregator import PortfolioView
from ..models.results import InsightReport
from ..utils.numbers import format_compact, format_currency

LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful financial analyst assistant that outputs strict JSON."

FALLBACK_INSIGHTS = InsightReport(
    insights=[
        "Service unavailable. Please check that the GROQ_API_KEY setting is valid.",
        "Ensure the insight endpoint is reachable from this environment.",
        "Check the application logs for detailed error information.",
    ],
    recommendation="Proceed with manual analysis or verify API credentials.",
    source="fallback",
)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class InsightsError(Exception):
    """Base class for insight request failures."""


class ConfigurationMissingError(InsightsError):
    """Raised before any network call when no API key is configured."""


class TransportFailureError(InsightsError):
    """Network failure or non-success HTTP status."""


class MalformedResponseError(InsightsError):
    """Response body does not carry the expected JSON payload."""


def build_prompt(view: PortfolioView) -> str:
    """Describe the portfolio snapshot and the JSON shape the model must return."""
    metrics = view.metrics
    top = view.top_region
    top_region = (
        f"{top.region.value} ({format_currency(top.revenue)})" if top is not None else "N/A (N/A)"
    )
    breakdown = ", ".join(
        f"{summary.segment.value}: {format_compact(summary.revenue)} rev"
        for summary in view.segments.values()
    ) or "N/A"
    return (
        "You are a Senior Risk Analyst. Analyze the following retail portfolio snapshot:\n"
        f"- Total Balance: {format_currency(metrics.total_balance)}\n"
        f"- Annual Revenue: {format_currency(metrics.total_revenue)}\n"
        f"- Avg Risk Score: {metrics.avg_risk:.3f} (Scale 0-1)\n"
        f"- Default Rate: {metrics.default_rate:.2f}%\n"
        f"- Accounts Analyzed: {metrics.record_count}\n"
        f"- Top Performing Region: {top_region}\n"
        f"- Segment Breakdown: {breakdown}\n\n"
        "Provide a response in VALID JSON format with exactly this structure:\n"
        "{\n"
        '  "insights": [\n'
        '    "Insight 1 (focus on revenue vs risk)",\n'
        '    "Insight 2 (focus on regional or segment trends)",\n'
        '    "Insight 3 (critical risk warning)"\n'
        "  ],\n"
        '  "recommendation": "One clear, strategic action for the Portfolio Manager."\n'
        "}\n"
        "Do not include markdown formatting. Return only the raw JSON."
    )


def parse_insight_payload(content: str) -> InsightReport:
    """Validate the model's message content against the insight schema."""
    text = _CODE_FENCE.sub("", (content or "").strip())
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Insight content is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedResponseError("Insight content must be a JSON object")
    try:
        return InsightReport(
            insights=payload.get("insights"),
            recommendation=payload.get("recommendation"),
            source="llm",
        )
    except PydanticValidationError as exc:
        raise MalformedResponseError(f"Insight content has the wrong shape: {exc}") from exc


def _extract_content(body: Dict[str, Any]) -> str:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError("Completion response has no message content") from exc
    if not isinstance(content, str):
        raise MalformedResponseError("Completion message content is not text")
    return content


class InsightsClient:
    """Request structured insights from an OpenAI-compatible completion endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout: Tuple[float, float] = (3.0, 30.0),
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = (api_key if api_key is not None else config.groq_api_key()).strip()
        self.model = model or config.GROQ_MODEL
        self.endpoint = endpoint or config.GROQ_API_URL
        self._request_timeout = timeout
        self._session = session or self._build_session()

    @staticmethod
    def _build_session() -> requests.Session:
        session = requests.Session()
        # Completions are not idempotent; only connection failures are retried.
        retries = Retry(total=2, connect=2, read=0, status=0, backoff_factor=0.5, allowed_methods=None)
        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "model": self.model,
            "response_format": {"type": "json_object"},
        }

    def request_insights(self, view: PortfolioView) -> InsightReport:
        """Call the endpoint and parse its answer, raising on any failure."""
        if not self.is_configured:
            raise ConfigurationMissingError(
                "Missing Groq API key. Set GROQ_API_KEY in the environment or Streamlit secrets."
            )
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = self._session.post(
                self.endpoint,
                headers=headers,
                json=self._payload(build_prompt(view)),
                timeout=self._request_timeout,
            )
        except requests.RequestException as exc:
            raise TransportFailureError(f"Insight request failed: {exc}") from exc

        if not response.ok:
            LOGGER.warning("Insight API response: %s", response.text[:500])
            raise TransportFailureError(
                f"Insight API error: {response.status_code} {response.reason}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Completion response body is not JSON") from exc
        return parse_insight_payload(_extract_content(body))

    def summarize(self, view: PortfolioView) -> InsightReport:
        """Return insights for ``view``, substituting the fallback on failure.

        ``ConfigurationMissingError`` is the only error that propagates, so the
        caller can tell the user before anything is sent over the network.
        """
        try:
            return self.request_insights(view)
        except (TransportFailureError, MalformedResponseError) as exc:
            LOGGER.warning("Insight generation failed, using fallback: %s", exc)
            return FALLBACK_INSIGHTS
