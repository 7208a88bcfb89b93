import unittest

from portfolio_insights.core.aggregator import aggregate
from portfolio_insights.core.generator import generate
from portfolio_insights.models.record import ALL, Region, Segment
from portfolio_insights.visualization import (
    build_region_donut,
    build_risk_return_scatter,
    build_segment_composition,
    extract_dashboard_payload,
    get_theme,
    region_frame,
    segment_frame,
    static_insights,
)

from tests.factories import three_record_portfolio


class ChartComponentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.view = aggregate(three_record_portfolio())

    def test_segment_bar_chart(self) -> None:
        fig = build_segment_composition(self.view.segments)
        self.assertEqual(len(fig.data), 1)
        trace = fig.data[0]
        self.assertEqual(trace.type, "bar")
        self.assertEqual(list(trace.x), ["Mass Market", "Affluent", "High Net Worth"])
        self.assertEqual(list(trace.y), [5000, 20000, 100000])

    def test_segment_line_chart(self) -> None:
        fig = build_segment_composition(self.view.segments, chart_type="line")
        self.assertEqual(fig.data[0].type, "scatter")
        self.assertEqual(fig.data[0].mode, "lines+markers")

    def test_region_donut_follows_revenue_order(self) -> None:
        fig = build_region_donut(self.view.regions)
        trace = fig.data[0]
        self.assertEqual(list(trace.labels), ["EMEA", "North America"])
        self.assertEqual(list(trace.values), [5800, 700])

    def test_scatter_splits_by_default_flag(self) -> None:
        fig = build_risk_return_scatter(self.view.scatter)
        current, defaulted = fig.data
        self.assertEqual(current.name, "Current")
        self.assertEqual(len(current.x), 2)
        self.assertEqual(list(defaulted.y), [4500])

    def test_dark_theme_is_applied(self) -> None:
        fig = build_region_donut(self.view.regions, theme=get_theme("dark"))
        self.assertEqual(fig.layout.template.layout.paper_bgcolor, "#1E293B")
        self.assertIs(get_theme("unknown"), get_theme())


class DashboardDataTests(unittest.TestCase):
    def test_tables(self) -> None:
        view = aggregate(three_record_portfolio())
        segments = segment_frame(view)
        regions = region_frame(view)
        self.assertEqual(segments["balance"].sum(), 125000)
        self.assertAlmostEqual(regions["revenue_share_pct"].sum(), 100.0, delta=0.2)

    def test_payload_counts(self) -> None:
        records = generate(60, seed=5)
        payload = extract_dashboard_payload(aggregate(records, Segment.AFFLUENT, ALL))
        self.assertEqual(payload["total"], 60)
        self.assertEqual(payload["displayed"], payload["metrics"].record_count)
        self.assertEqual(payload["segment_table"]["segment"].tolist(), ["Affluent"])

    def test_empty_tables(self) -> None:
        view = aggregate(three_record_portfolio(), Segment.AFFLUENT, Region.LATAM)
        self.assertTrue(segment_frame(view).empty)
        self.assertTrue(region_frame(view).empty)

    def test_static_insights(self) -> None:
        insights = static_insights(aggregate(three_record_portfolio()))
        self.assertEqual(len(insights), 3)
        self.assertIn("33% of customers generate 69% of total revenue", insights[0])
        self.assertIn("0 of 1 Mass Market accounts", insights[1])
        self.assertIn("EMEA leads with $5,800", insights[2])

    def test_static_insights_when_empty(self) -> None:
        view = aggregate(three_record_portfolio(), Segment.AFFLUENT, Region.LATAM)
        self.assertEqual(static_insights(view), ["No accounts match the current filters."])


if __name__ == "__main__":
    unittest.main()
