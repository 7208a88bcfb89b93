import unittest

import numpy as np

from portfolio_insights.core.generator import (
    RECORD_COLUMNS,
    SEGMENT_PROFILES,
    generate,
    records_to_frame,
)
from portfolio_insights.models.record import Segment


class GeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = generate(500, seed=7)

    def test_returns_requested_count(self) -> None:
        self.assertEqual(len(self.records), 500)
        self.assertEqual(len(generate(1, seed=1)), 1)

    def test_non_positive_count_returns_empty(self) -> None:
        self.assertEqual(generate(0), ())
        self.assertEqual(generate(-5), ())
        self.assertEqual(generate(True), ())

    def test_value_bounds_hold(self) -> None:
        for record in self.records:
            self.assertGreaterEqual(record.risk_score, 0.01)
            self.assertLessEqual(record.risk_score, 0.99)
            self.assertGreaterEqual(record.utilization, 0.0)
            self.assertLessEqual(record.utilization, 1.2)
            self.assertGreaterEqual(record.account_balance, 0)
            self.assertGreaterEqual(record.annual_revenue, 0)

    def test_segment_profile_applied(self) -> None:
        for record in self.records:
            profile = SEGMENT_PROFILES[record.segment]
            self.assertEqual(record.credit_limit, profile.credit_limit)
            self.assertGreaterEqual(record.account_balance, profile.balance_low)
            self.assertLessEqual(record.account_balance, profile.balance_high)
            expected_util = min(record.account_balance / record.credit_limit, 1.2)
            self.assertAlmostEqual(record.utilization, expected_util, delta=0.01)

    def test_mass_market_risk_includes_add_on(self) -> None:
        mass = [r for r in self.records if r.segment is Segment.MASS_MARKET]
        self.assertTrue(mass)
        self.assertTrue(all(r.risk_score >= 0.1 for r in mass))

    def test_revenue_tracks_balance(self) -> None:
        for record in self.records:
            floor = record.account_balance * 0.04 - 1
            self.assertGreaterEqual(record.annual_revenue, floor)
            self.assertLessEqual(record.annual_revenue, floor + 502)

    def test_seed_makes_output_reproducible(self) -> None:
        self.assertEqual(generate(25, seed=11), generate(25, seed=11))
        first = generate(25, np.random.default_rng(3))
        second = generate(25, np.random.default_rng(3))
        self.assertEqual(first, second)

    def test_customer_ids_are_unique(self) -> None:
        ids = [record.customer_id for record in self.records]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(ids[0], "CUST-1000")

    def test_all_segments_and_regions_appear(self) -> None:
        self.assertEqual({r.segment for r in self.records}, set(Segment))
        self.assertEqual(len({r.region for r in self.records}), 4)

    def test_records_to_frame(self) -> None:
        frame = records_to_frame(self.records[:10])
        self.assertEqual(list(frame.columns), RECORD_COLUMNS)
        self.assertEqual(len(frame), 10)
        self.assertIsInstance(frame.loc[0, "segment"], str)

    def test_records_to_frame_empty(self) -> None:
        frame = records_to_frame(())
        self.assertTrue(frame.empty)
        self.assertEqual(list(frame.columns), RECORD_COLUMNS)


if __name__ == "__main__":
    unittest.main()
