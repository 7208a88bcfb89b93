"""Light theme configuration for the portfolio dashboard."""

from __future__ import annotations

from typing import Dict


PRIMARY_BLUE = "#3B82F6"
PRIMARY_PURPLE = "#8B5CF6"
SECONDARY_TEAL = "#14B8A6"
POSITIVE_GREEN = "#10B981"
NEGATIVE_RED = "#EF4444"
WARNING_AMBER = "#F59E0B"
NEUTRAL_GRAY = "#64748B"
BACKGROUND = "#F8FAFC"
CARD_BACKGROUND = "#FFFFFF"
GRID_COLOR = "#E2E8F0"
TEXT_COLOR = "#0F172A"
SUBTEXT_COLOR = "#475569"


LIGHT_THEME: Dict[str, object] = {
    "name": "light",
    "background_color": BACKGROUND,
    "card_background": CARD_BACKGROUND,
    "text_color": TEXT_COLOR,
    "subtext_color": SUBTEXT_COLOR,
    "palette": {
        "primary_blue": PRIMARY_BLUE,
        "primary_purple": PRIMARY_PURPLE,
        "secondary_teal": SECONDARY_TEAL,
        "positive": POSITIVE_GREEN,
        "negative": NEGATIVE_RED,
        "warning": WARNING_AMBER,
        "neutral": NEUTRAL_GRAY,
    },
    "segment_colors": {
        "Mass Market": "#8B5CF6",
        "Affluent": "#EC4899",
        "High Net Worth": "#F59E0B",
    },
    "region_colors": ["#3B82F6", "#10B981", "#F59E0B", "#EF4444"],
    "plotly_template": {
        "layout": {
            "font": {"family": "Inter, Arial, sans-serif", "color": TEXT_COLOR},
            "paper_bgcolor": CARD_BACKGROUND,
            "plot_bgcolor": CARD_BACKGROUND,
            "title": {"font": {"size": 18, "color": TEXT_COLOR}},
            "legend": {"bgcolor": CARD_BACKGROUND, "bordercolor": GRID_COLOR},
            "xaxis": {
                "gridcolor": GRID_COLOR,
                "linecolor": "#CBD5E1",
                "zerolinecolor": GRID_COLOR,
            },
            "yaxis": {
                "gridcolor": GRID_COLOR,
                "linecolor": "#CBD5E1",
                "zerolinecolor": GRID_COLOR,
            },
        }
    },
}
