"""Shared helpers for formatting matplotlib figures used in printed reports."""

from __future__ import annotations

import base64
import io
from typing import Callable, Dict, Iterable, Mapping, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.ticker import FuncFormatter  # noqa: E402

from ..models.record import Segment  # noqa: E402
from ..models.results import SegmentSummary  # noqa: E402
from ..utils.numbers import format_compact  # noqa: E402
from .themes import DEFAULT_THEME  # noqa: E402

NumberFormatter = Callable[[float], str]


def label_vertical_bars(
    ax: plt.Axes,
    bars: Iterable[plt.Rectangle],
    *,
    formatter: Optional[NumberFormatter] = None,
    margin_ratio: float = 0.12,
    padding_ratio: float = 0.02,
    text_kwargs: Optional[Dict[str, object]] = None,
) -> None:
    """Annotate vertical bars with value labels above each bar."""
    formatter = formatter or format_compact
    text_kwargs = text_kwargs.copy() if text_kwargs else {"fontsize": 10, "fontweight": "bold", "color": "#1E293B"}

    bars = list(bars)
    values = [float(bar.get_height()) for bar in bars]
    max_value = max(values, default=0.0)

    y_min, y_max = ax.get_ylim()
    target_max = max(y_max, max_value * (1.0 + margin_ratio)) or 1.0
    ax.set_ylim(y_min, target_max)
    pad = target_max * padding_ratio

    for bar, value in zip(bars, values):
        ax.text(
            bar.get_x() + bar.get_width() / 2.0,
            value + pad,
            formatter(value),
            ha="center",
            va="bottom",
            clip_on=True,
            **text_kwargs,
        )


def plot_segment_balances(
    segments: Mapping[Segment, SegmentSummary],
    *,
    theme: Optional[dict] = None,
) -> plt.Figure:
    """Static bar chart of balance per segment for the printable report."""
    theme = theme or DEFAULT_THEME
    colors = theme["segment_colors"]
    ordered = [segments[segment] for segment in Segment if segment in segments]

    fig, ax = plt.subplots(figsize=(7.5, 3.6))
    bars = ax.bar(
        [summary.segment.value for summary in ordered],
        [summary.balance for summary in ordered],
        color=[colors.get(summary.segment.value) for summary in ordered],
        width=0.55,
    )
    label_vertical_bars(ax, bars)
    ax.set_ylabel("Outstanding Balance")
    ax.yaxis.set_major_formatter(FuncFormatter(lambda value, _pos: format_compact(value)))
    ax.spines[["top", "right"]].set_visible(False)
    ax.grid(axis="y", color="#E2E8F0", linestyle="--", linewidth=0.8)
    ax.set_axisbelow(True)
    ax.set_title("Portfolio Composition by Segment", fontsize=12, fontweight="bold")
    fig.tight_layout()
    return fig


def figure_to_base64(fig: plt.Figure, *, dpi: int = 150) -> str:
    """Encode a figure as a base64 PNG and release it."""
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    return base64.b64encode(buffer.getvalue()).decode("ascii")
