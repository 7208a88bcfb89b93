"""External service integrations."""

from .insights_client import (
    FALLBACK_INSIGHTS,
    ConfigurationMissingError,
    InsightsClient,
    InsightsError,
    MalformedResponseError,
    TransportFailureError,
    build_prompt,
    parse_insight_payload,
)

__all__ = [
    "FALLBACK_INSIGHTS",
    "ConfigurationMissingError",
    "InsightsClient",
    "InsightsError",
    "MalformedResponseError",
    "TransportFailureError",
    "build_prompt",
    "parse_insight_payload",
]
