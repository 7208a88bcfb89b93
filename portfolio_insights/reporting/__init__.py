"""Reporting utilities for the portfolio dashboard."""

from .report_generator import ReportGenerator

__all__ = ["ReportGenerator"]
