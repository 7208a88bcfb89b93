import json
import unittest
from unittest import mock

import requests

from portfolio_insights.core.aggregator import aggregate
from portfolio_insights.integration.insights_client import (
    FALLBACK_INSIGHTS,
    ConfigurationMissingError,
    InsightsClient,
    MalformedResponseError,
    TransportFailureError,
    build_prompt,
    parse_insight_payload,
)

from tests.factories import three_record_portfolio

VALID_CONTENT = json.dumps(
    {
        "insights": [
            "High Net Worth drives most revenue.",
            "EMEA is the leading region.",
            "Default rate sits far above the 4.5% threshold.",
        ],
        "recommendation": "Tighten limits for high-utilization accounts.",
    }
)


def _response(*, ok=True, status_code=200, body=None, text="", reason="OK"):
    response = mock.Mock()
    response.ok = ok
    response.status_code = status_code
    response.reason = reason
    response.text = text
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class PromptTests(unittest.TestCase):
    def test_prompt_embeds_metrics(self) -> None:
        prompt = build_prompt(aggregate(three_record_portfolio()))
        self.assertIn("Total Balance: $125,000", prompt)
        self.assertIn("Annual Revenue: $6,500", prompt)
        self.assertIn("Avg Risk Score: 0.333", prompt)
        self.assertIn("Default Rate: 33.33%", prompt)
        self.assertIn("Top Performing Region: EMEA ($5,800)", prompt)
        self.assertIn("High Net Worth: $4.5K rev", prompt)
        self.assertIn('"insights"', prompt)

    def test_prompt_for_empty_view(self) -> None:
        prompt = build_prompt(aggregate((), "all", "all"))
        self.assertIn("Top Performing Region: N/A", prompt)
        self.assertIn("Default Rate: 0.00%", prompt)
        self.assertNotRegex(prompt.lower(), r"\bnan\b")


class ParsePayloadTests(unittest.TestCase):
    def test_valid_payload(self) -> None:
        report = parse_insight_payload(VALID_CONTENT)
        self.assertEqual(len(report.insights), 3)
        self.assertEqual(report.source, "llm")
        self.assertFalse(report.is_fallback)

    def test_code_fences_are_stripped(self) -> None:
        report = parse_insight_payload(f"```json\n{VALID_CONTENT}\n```")
        self.assertEqual(report.recommendation, "Tighten limits for high-utilization accounts.")

    def test_rejects_non_json(self) -> None:
        with self.assertRaises(MalformedResponseError):
            parse_insight_payload("The portfolio looks healthy.")

    def test_rejects_wrong_insight_count(self) -> None:
        content = json.dumps({"insights": ["one", "two"], "recommendation": "act"})
        with self.assertRaises(MalformedResponseError):
            parse_insight_payload(content)

    def test_rejects_missing_recommendation(self) -> None:
        content = json.dumps({"insights": ["a", "b", "c"]})
        with self.assertRaises(MalformedResponseError):
            parse_insight_payload(content)

    def test_rejects_non_object(self) -> None:
        with self.assertRaises(MalformedResponseError):
            parse_insight_payload("[1, 2, 3]")


class InsightsClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.view = aggregate(three_record_portfolio())
        self.session = mock.Mock(spec=requests.Session)
        self.client = InsightsClient(
            "test-key",
            model="test-model",
            endpoint="https://llm.example.com/v1/chat/completions",
            session=self.session,
        )

    def test_missing_key_raises_before_network(self) -> None:
        client = InsightsClient("", session=self.session)
        self.assertFalse(client.is_configured)
        with self.assertRaises(ConfigurationMissingError):
            client.summarize(self.view)
        self.session.post.assert_not_called()

    def test_successful_request(self) -> None:
        self.session.post.return_value = _response(body=_completion(VALID_CONTENT))
        report = self.client.summarize(self.view)

        self.assertEqual(report.source, "llm")
        self.assertEqual(report.insights[1], "EMEA is the leading region.")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "https://llm.example.com/v1/chat/completions")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer test-key")
        self.assertEqual(kwargs["json"]["model"], "test-model")
        self.assertEqual(kwargs["json"]["response_format"], {"type": "json_object"})
        self.assertEqual(kwargs["json"]["messages"][0]["role"], "system")
        self.assertIn("$125,000", kwargs["json"]["messages"][1]["content"])

    def test_http_error_falls_back(self) -> None:
        self.session.post.return_value = _response(
            ok=False, status_code=500, text="upstream exploded", reason="Server Error"
        )
        with self.assertRaises(TransportFailureError):
            self.client.request_insights(self.view)
        self.assertEqual(self.client.summarize(self.view), FALLBACK_INSIGHTS)

    def test_connection_error_falls_back(self) -> None:
        self.session.post.side_effect = requests.ConnectionError("network down")
        with self.assertRaises(TransportFailureError):
            self.client.request_insights(self.view)
        report = self.client.summarize(self.view)
        self.assertTrue(report.is_fallback)

    def test_non_json_body_falls_back(self) -> None:
        self.session.post.return_value = _response(body=ValueError("no json"))
        with self.assertRaises(MalformedResponseError):
            self.client.request_insights(self.view)
        self.assertTrue(self.client.summarize(self.view).is_fallback)

    def test_missing_choices_falls_back(self) -> None:
        self.session.post.return_value = _response(body={"error": "quota"})
        with self.assertRaises(MalformedResponseError):
            self.client.request_insights(self.view)

    def test_malformed_content_falls_back(self) -> None:
        self.session.post.return_value = _response(body=_completion("not json at all"))
        self.assertEqual(self.client.summarize(self.view), FALLBACK_INSIGHTS)

    def test_fallback_payload_shape(self) -> None:
        self.assertEqual(len(FALLBACK_INSIGHTS.insights), 3)
        self.assertTrue(FALLBACK_INSIGHTS.recommendation)
        self.assertTrue(FALLBACK_INSIGHTS.is_fallback)


if __name__ == "__main__":
    unittest.main()
