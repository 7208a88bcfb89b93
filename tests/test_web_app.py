import os
import unittest
from pathlib import Path
from unittest import mock

from streamlit.testing.v1 import AppTest

from portfolio_insights.core.state import RequestStatus
from portfolio_insights.integration.insights_client import InsightsClient

APP_PATH = Path(__file__).resolve().parents[1] / "portfolio_insights" / "ui" / "web_app.py"


class WebAppTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = AppTest.from_file(str(APP_PATH), default_timeout=60)

    def test_renders_dashboard(self) -> None:
        self.app.run()
        self.assertFalse(self.app.exception)
        self.assertFalse(self.app.error)
        self.assertEqual(len(self.app.metric), 4)
        self.assertEqual(len(self.app.dataframe), 2)

    def test_uses_current_width_api(self) -> None:
        source = APP_PATH.read_text(encoding="utf-8")
        self.assertNotIn("use_container_width", source)
        self.assertIn('width="stretch"', source)

    def test_dark_theme_toggle(self) -> None:
        self.app.run()
        self.app.toggle(key="dark_theme").set_value(True).run()
        self.assertFalse(self.app.exception)
        self.assertFalse(self.app.error)

    def test_client_crash_settles_on_fallback(self) -> None:
        with mock.patch.dict(os.environ, {"GROQ_API_KEY": "test-key"}), mock.patch.object(
            InsightsClient, "summarize", side_effect=RuntimeError("boom")
        ):
            self.app.run()
            self.app.button(key="generate_ai").click().run()

        state = self.app.session_state["dashboard_state"]
        self.assertIs(state.request_status, RequestStatus.FAILED)
        self.assertTrue(state.insights.is_fallback)
        self.assertFalse(state.is_generating)
        self.assertIn("Insight service unavailable", self.app.error[0].value)


if __name__ == "__main__":
    unittest.main()
