"""Report generation utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from html import escape
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from ..config import DEFAULT_RISK_THRESHOLD_PCT
from ..core.aggregator import PortfolioView
from ..core.generator import records_to_frame
from ..models.record import Segment
from ..models.results import InsightReport
from ..utils.numbers import format_compact, format_currency, format_percent
from ..visualization.dashboard_data import region_frame, segment_frame
from ..visualization.figure_utils import figure_to_base64, plot_segment_balances

LOGGER = logging.getLogger(__name__)

REPORT_TITLE = "Retail Risk & Revenue Analysis"

_STYLES = """
  @media print { body { margin: 0; padding: 20px; } .no-print { display: none; } }
  body { font-family: Arial, sans-serif; color: #1e293b; line-height: 1.6; }
  .header { background: linear-gradient(135deg, #2563eb, #7c3aed); color: white; padding: 30px; margin-bottom: 30px; }
  .header h1 { margin: 0; font-size: 32px; }
  .header p { margin: 5px 0 0 0; opacity: 0.9; }
  .kpi-grid { display: grid; grid-template-columns: repeat(2, 1fr); gap: 20px; margin-bottom: 30px; }
  .kpi-box { border: 2px solid #e2e8f0; border-radius: 8px; padding: 20px; background: #f8fafc; }
  .kpi-title { font-size: 12px; color: #64748b; text-transform: uppercase; font-weight: 600; margin-bottom: 8px; }
  .kpi-value { font-size: 28px; font-weight: bold; color: #0f172a; }
  .section { margin-bottom: 30px; page-break-inside: avoid; }
  .section-title { font-size: 20px; font-weight: bold; border-bottom: 3px solid #3b82f6; padding-bottom: 8px; margin-bottom: 15px; }
  .data-table { width: 100%; border-collapse: collapse; margin-top: 15px; }
  .data-table th { background: #f1f5f9; padding: 12px; text-align: left; font-weight: 600; border-bottom: 2px solid #cbd5e1; }
  .data-table td { padding: 10px 12px; border-bottom: 1px solid #e2e8f0; }
  .insight-box { background: #eff6ff; border-left: 4px solid #3b82f6; padding: 15px; margin: 10px 0; }
  .recommendation-box { background: #f0fdf4; border: 2px solid #86efac; border-radius: 8px; padding: 20px; margin-top: 20px; }
  .chart img { max-width: 100%; }
  .footer { margin-top: 40px; padding-top: 20px; border-top: 2px solid #e2e8f0; text-align: center; color: #64748b; font-size: 12px; }
"""


def _json_default(obj: object) -> object:
    """JSON serializer that handles numpy/enum/path objects gracefully."""
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class ReportGenerator:
    """Render and persist the printable portfolio report and its data tables."""

    def __init__(
        self,
        output_dir: str | Path = "output",
        *,
        timestamped: bool = False,
        run_label: Optional[str] = None,
        include_chart: bool = True,
    ) -> None:
        base_dir = Path(output_dir)
        if timestamped:
            run_label = run_label or datetime.utcnow().strftime("run_%Y%m%d_%H%M%S")
            self.output_dir = base_dir / run_label
        else:
            self.output_dir = base_dir
        self.include_chart = include_chart

    # ------------------------------------------------------------------ helpers
    def _write_json(self, payload: Dict[str, object], filename: str) -> Path:
        path = self.output_dir / filename
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, default=_json_default)
        return path

    def _export_tables(self, tables: Dict[str, pd.DataFrame]) -> Dict[str, Path]:
        output: Dict[str, Path] = {}
        for key, table in tables.items():
            path = self.output_dir / f"{key}.csv"
            table.to_csv(path, index=False)
            output[key] = path
        return output

    def _chart_html(self, view: PortfolioView) -> str:
        if not self.include_chart or not view.segments:
            return ""
        try:
            encoded = figure_to_base64(plot_segment_balances(view.segments))
        except Exception as exc:  # pragma: no cover - rendering backend issues
            LOGGER.warning("Unable to render segment chart for report: %s", exc)
            return ""
        return (
            '<div class="chart"><img alt="Portfolio composition by segment" '
            f'src="data:image/png;base64,{encoded}"></div>'
        )

    @staticmethod
    def _kpi_grid(view: PortfolioView) -> str:
        metrics = view.metrics
        empty = metrics.is_empty
        boxes = [
            ("Portfolio Balance", format_compact(metrics.total_balance)),
            ("Annual Revenue", format_compact(metrics.total_revenue)),
            ("Average Risk Score", "N/A" if empty else f"{metrics.avg_risk:.3f}"),
            ("Default Rate", "N/A" if empty else format_percent(metrics.default_rate)),
        ]
        cells = "".join(
            f'<div class="kpi-box"><div class="kpi-title">{escape(title)}</div>'
            f'<div class="kpi-value">{escape(value)}</div></div>'
            for title, value in boxes
        )
        return f'<div class="kpi-grid">{cells}</div>'

    @staticmethod
    def _segment_table(view: PortfolioView) -> str:
        rows = "".join(
            "<tr>"
            f"<td><strong>{escape(summary.segment.value)}</strong></td>"
            f"<td>{format_currency(summary.balance)}</td>"
            f"<td>{format_currency(summary.revenue)}</td>"
            f"<td>{summary.count}</td>"
            "</tr>"
            for summary in (view.segments[s] for s in Segment if s in view.segments)
        ) or '<tr><td colspan="4">No accounts match the current filters.</td></tr>'
        return (
            '<table class="data-table"><thead><tr><th>Segment</th><th>Total Balance</th>'
            "<th>Annual Revenue</th><th>Customer Count</th></tr></thead>"
            f"<tbody>{rows}</tbody></table>"
        )

    @staticmethod
    def _region_table(view: PortfolioView) -> str:
        total = view.metrics.total_revenue
        rows = "".join(
            "<tr>"
            f"<td><strong>{escape(summary.region.value)}</strong></td>"
            f"<td>{format_currency(summary.revenue)}</td>"
            f"<td>{format_percent(summary.revenue / total * 100.0 if total else 0.0)}</td>"
            "</tr>"
            for summary in view.regions
        ) or '<tr><td colspan="3">No accounts match the current filters.</td></tr>'
        return (
            '<table class="data-table"><thead><tr><th>Region</th><th>Annual Revenue</th>'
            "<th>% of Total</th></tr></thead>"
            f"<tbody>{rows}</tbody></table>"
        )

    @staticmethod
    def _insight_section(insights: Optional[InsightReport]) -> str:
        if insights is None:
            return ""
        boxes = "".join(
            f'<div class="insight-box"><strong>Insight {index}:</strong> {escape(text)}</div>'
            for index, text in enumerate(insights.insights, start=1)
        )
        heading = "AI-Generated Insights" if not insights.is_fallback else "Automated Insights"
        return (
            f'<div class="section"><h2 class="section-title">{heading}</h2>{boxes}'
            '<div class="recommendation-box"><strong style="color: #166534;">'
            "Strategic Recommendation</strong>"
            f'<p style="margin: 10px 0 0 0; color: #15803d;">{escape(insights.recommendation)}</p>'
            "</div></div>"
        )

    @staticmethod
    def _risk_summary(view: PortfolioView, threshold: float) -> str:
        metrics = view.metrics
        top = view.top_region
        if metrics.is_empty:
            narrative = "<p>No accounts match the current filters; risk metrics are unavailable.</p>"
        else:
            position = "above" if metrics.default_rate > threshold else "below"
            narrative = (
                f"<p>The current portfolio demonstrates a default rate of "
                f"<strong>{metrics.default_rate:.2f}%</strong>, which is {position} the acceptable "
                f"threshold of {threshold}%. The average risk score across all accounts is "
                f"<strong>{metrics.avg_risk:.3f}</strong>.</p>"
            )
        observations: List[str] = [
            f"Total accounts analyzed: <strong>{metrics.record_count}</strong>",
            "High Net Worth segment contributes approximately "
            f"<strong>{view.segment_share(Segment.HIGH_NET_WORTH):.0f}%</strong> of total revenue",
        ]
        if top is not None:
            observations.append(
                f"Leading region: <strong>{escape(top.region.value)}</strong> with "
                f"{format_currency(top.revenue)} in annual revenue"
            )
        else:
            observations.append("Leading region: <strong>N/A</strong>")
        items = "".join(f"<li>{item}</li>" for item in observations)
        return (
            '<div class="section"><h2 class="section-title">Risk Assessment Summary</h2>'
            f"{narrative}<p>Key observations:</p><ul>{items}</ul></div>"
        )

    # ------------------------------------------------------------------ public
    def render_html(
        self,
        view: PortfolioView,
        insights: Optional[InsightReport] = None,
        *,
        generated_at: Optional[datetime] = None,
        threshold: float = DEFAULT_RISK_THRESHOLD_PCT,
        auto_print: bool = True,
    ) -> str:
        """Build a self-contained printable HTML report."""
        generated_at = generated_at or datetime.now()
        stamp = generated_at.strftime("%B %d, %Y %I:%M %p")
        print_script = "<script>window.onload = function() { window.print(); };</script>" if auto_print else ""
        return (
            "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
            f"<title>{escape(REPORT_TITLE)}</title><style>{_STYLES}</style></head><body>"
            f'<div class="header"><h1>{escape(REPORT_TITLE)}</h1>'
            f"<p>Portfolio Report | Generated {escape(stamp)}</p></div>"
            f"{self._kpi_grid(view)}"
            '<div class="section"><h2 class="section-title">Segment Performance Analysis</h2>'
            f"{self._chart_html(view)}{self._segment_table(view)}</div>"
            '<div class="section"><h2 class="section-title">Regional Revenue Distribution</h2>'
            f"{self._region_table(view)}</div>"
            f"{self._insight_section(insights)}"
            f"{self._risk_summary(view, threshold)}"
            '<div class="footer"><p>Retail Risk Analytics | Synthetic demonstration data</p>'
            '<p style="margin-top: 10px; font-style: italic;">Confidential - For Internal Use Only</p>'
            f"</div>{print_script}</body></html>"
        )

    def metrics_payload(self, view: PortfolioView, insights: Optional[InsightReport] = None) -> Dict[str, object]:
        return {
            "segment_filter": view.segment_filter,
            "region_filter": view.region_filter,
            "displayed_records": len(view.filtered),
            "total_records": view.total_records,
            "metrics": view.metrics.model_dump(),
            "segments": [view.segments[s].model_dump() for s in Segment if s in view.segments],
            "regions": [summary.model_dump() for summary in view.regions],
            "insights": insights.model_dump() if insights is not None else None,
        }

    def export(self, view: PortfolioView, insights: Optional[InsightReport] = None) -> Dict[str, Path]:
        """Write the HTML report, CSV tables and a metrics JSON summary."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        outputs = self._export_tables(
            {
                "filtered_records": records_to_frame(view.filtered),
                "segment_summary": segment_frame(view),
                "region_summary": region_frame(view),
            }
        )
        report_path = self.output_dir / "report.html"
        report_path.write_text(self.render_html(view, insights, auto_print=False), encoding="utf-8")
        outputs["report"] = report_path
        outputs["metrics"] = self._write_json(self.metrics_payload(view, insights), "metrics.json")
        LOGGER.info("Wrote %d report artifacts to %s", len(outputs), self.output_dir)
        return outputs
