import unittest

from portfolio_insights.utils.numbers import format_compact, format_currency, format_percent


class FormattingTests(unittest.TestCase):
    def test_currency(self) -> None:
        self.assertEqual(format_currency(125000), "$125,000")
        self.assertEqual(format_currency(-1500.4), "-$1,500")
        self.assertEqual(format_currency(None), "N/A")
        self.assertEqual(format_currency(float("nan")), "N/A")

    def test_compact(self) -> None:
        self.assertEqual(format_compact(950), "$950")
        self.assertEqual(format_compact(6500), "$6.5K")
        self.assertEqual(format_compact(125000), "$125K")
        self.assertEqual(format_compact(1_200_000), "$1.2M")
        self.assertEqual(format_compact(999_950), "$1M")
        self.assertEqual(format_compact(3_000_000_000), "$3B")
        self.assertEqual(format_compact(0), "$0")
        self.assertEqual(format_compact(None), "N/A")

    def test_percent(self) -> None:
        self.assertEqual(format_percent(33.3333), "33.3%")
        self.assertEqual(format_percent(33.3333, 2), "33.33%")
        self.assertEqual(format_percent(None), "N/A")


if __name__ == "__main__":
    unittest.main()
