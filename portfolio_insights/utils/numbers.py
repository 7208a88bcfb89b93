"""Numeric formatting helpers shared across the application."""

from __future__ import annotations

import math
from typing import Optional

_COMPACT_SUFFIXES = ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K"))


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_currency(value: Optional[float]) -> str:
    """Whole-dollar currency, e.g. ``$125,000``."""
    if _is_missing(value):
        return "N/A"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_compact(value: Optional[float]) -> str:
    """Short currency notation, e.g. ``$1.2M`` or ``$850K``."""
    if _is_missing(value):
        return "N/A"
    sign = "-" if value < 0 else ""
    magnitude = abs(float(value))
    for threshold, suffix in _COMPACT_SUFFIXES:
        scaled_value = round(magnitude / threshold, 1)
        if scaled_value >= 1:
            scaled = f"{scaled_value:.1f}".rstrip("0").rstrip(".")
            return f"{sign}${scaled}{suffix}"
    return f"{sign}${magnitude:,.0f}"


def format_percent(value: Optional[float], digits: int = 1) -> str:
    if _is_missing(value):
        return "N/A"
    return f"{value:.{digits}f}%"


__all__ = ["format_compact", "format_currency", "format_percent"]
