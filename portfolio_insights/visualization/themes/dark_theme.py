"""Dark theme configuration for the portfolio dashboard."""

from __future__ import annotations

from typing import Dict


BACKGROUND = "#0F172A"
CARD_BACKGROUND = "#1E293B"
GRID_COLOR = "#334155"
TEXT_COLOR = "#F1F5F9"
SUBTEXT_COLOR = "#94A3B8"


DARK_THEME: Dict[str, object] = {
    "name": "dark",
    "background_color": BACKGROUND,
    "card_background": CARD_BACKGROUND,
    "text_color": TEXT_COLOR,
    "subtext_color": SUBTEXT_COLOR,
    "palette": {
        "primary_blue": "#60A5FA",
        "primary_purple": "#A78BFA",
        "secondary_teal": "#2DD4BF",
        "positive": "#34D399",
        "negative": "#F87171",
        "warning": "#FBBF24",
        "neutral": SUBTEXT_COLOR,
    },
    "segment_colors": {
        "Mass Market": "#A78BFA",
        "Affluent": "#F472B6",
        "High Net Worth": "#FBBF24",
    },
    "region_colors": ["#60A5FA", "#34D399", "#FBBF24", "#F87171"],
    "plotly_template": {
        "layout": {
            "font": {"family": "Inter, Arial, sans-serif", "color": TEXT_COLOR},
            "paper_bgcolor": CARD_BACKGROUND,
            "plot_bgcolor": CARD_BACKGROUND,
            "title": {"font": {"size": 18, "color": TEXT_COLOR}},
            "legend": {"bgcolor": CARD_BACKGROUND, "bordercolor": GRID_COLOR},
            "xaxis": {"gridcolor": GRID_COLOR, "linecolor": GRID_COLOR, "zerolinecolor": GRID_COLOR},
            "yaxis": {"gridcolor": GRID_COLOR, "linecolor": GRID_COLOR, "zerolinecolor": GRID_COLOR},
        }
    },
}
