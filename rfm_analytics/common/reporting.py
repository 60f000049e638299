"""
Reporting Module
================

Writes RFM segmentation results as CSV, JSON and HTML reports.

Usage:
    from rfm_analytics.common import Reporter

    reporter = Reporter(output_dir="outputs/reports")
    paths = reporter.generate_segmentation_report(result, "customer_segments")
"""

import json
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from ..customer_segmentation import SegmentAnalyzer, SegmentationResult
from ..customer_segmentation.segmenter import dataframe_to_records


class Reporter:
    """
    Report generation for segmentation results.

    Example:
        >>> reporter = Reporter(output_dir="outputs/reports")
        >>> reporter.generate_segmentation_report(result, "customer_segments")
    """

    def __init__(self, output_dir: str = "outputs/reports"):
        """
        Initialize Reporter.

        Args:
            output_dir: Directory for saving reports
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Reporter initialized. Output: {self.output_dir}")

    def generate_segmentation_report(
        self,
        result: SegmentationResult,
        report_name: str,
        formats: Optional[List[str]] = None,
        customers: Optional[pd.DataFrame] = None
    ) -> Dict[str, Path]:
        """
        Generate customer segmentation report.

        Args:
            result: Segmentation result to report on
            report_name: Base name for report files
            formats: Output formats ('csv', 'json', 'html'; default: all)
            customers: Customer rows to export instead of all customers
                (e.g. a single segment)

        Returns:
            Dictionary of format -> file path
        """
        formats = formats if formats is not None else ['csv', 'json', 'html']
        output_paths = {}
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        customers = customers if customers is not None else result.customers
        shares = SegmentAnalyzer().calculate_segment_share(result.segment_stats)

        # CSV Export
        if 'csv' in formats:
            csv_path = self.output_dir / f"{report_name}_{timestamp}.csv"
            customers.to_csv(csv_path, index=False)
            output_paths['csv'] = csv_path
            logger.info(f"Saved CSV report: {csv_path}")

        # JSON Export
        if 'json' in formats:
            json_path = self.output_dir / f"{report_name}_{timestamp}.json"

            json_data = {
                'generated_at': timestamp,
                **result.to_dict(),
            }
            json_data['customers'] = dataframe_to_records(customers)

            with open(json_path, 'w') as f:
                json.dump(json_data, f, indent=2)
            output_paths['json'] = json_path
            logger.info(f"Saved JSON report: {json_path}")

        # HTML Report
        if 'html' in formats:
            html_path = self.output_dir / f"{report_name}_{timestamp}.html"
            html_content = self._generate_segmentation_html(result, shares, report_name)

            with open(html_path, 'w') as f:
                f.write(html_content)
            output_paths['html'] = html_path
            logger.info(f"Saved HTML report: {html_path}")

        logger.info(f"Generated segmentation report: {report_name}")
        return output_paths

    def _generate_segmentation_html(
        self,
        result: SegmentationResult,
        shares: pd.DataFrame,
        report_name: str
    ) -> str:
        """Generate HTML report for segmentation results."""
        avg = result.avg_metrics

        segment_rows = ""
        for _, row in shares.iterrows():
            segment_rows += f"""
            <tr>
                <td><span class="swatch" style="background: {row['color']};"></span>{escape(row['segment'])}</td>
                <td class="num">{row['count']:,}</td>
                <td class="num">{row['customer_pct']:.1f}%</td>
                <td class="num">${row['avg_monetary']:,}</td>
                <td class="num">${row['total_revenue']:,}</td>
                <td class="num">{row['revenue_share']:.1f}%</td>
            </tr>
            """

        return f"""
<!DOCTYPE html>
<html>
<head>
    <title>{escape(report_name)} - Segmentation Report</title>
    <style>
        body {{ font-family: Helvetica, Arial, sans-serif; margin: 32px; background: #f3f4f6; color: #1f2937; }}
        .container {{ max-width: 1000px; margin: 0 auto; background: #fff; padding: 28px; border-radius: 8px; }}
        h1 {{ color: #1e3a8a; border-bottom: 2px solid #3b82f6; padding-bottom: 8px; }}
        h2 {{ color: #374151; margin-top: 28px; }}
        .metrics {{ display: grid; grid-template-columns: repeat(4, 1fr); gap: 16px; margin: 16px 0; }}
        .metric-card {{ background: #eff6ff; padding: 16px; border-radius: 6px; text-align: center; }}
        .metric-value {{ font-size: 1.8em; font-weight: bold; color: #1d4ed8; }}
        .metric-label {{ color: #6b7280; margin-top: 4px; }}
        table {{ width: 100%; border-collapse: collapse; margin: 16px 0; }}
        th, td {{ padding: 10px; text-align: left; border-bottom: 1px solid #e5e7eb; }}
        th {{ background: #1e3a8a; color: #fff; }}
        td.num {{ text-align: right; }}
        .swatch {{ display: inline-block; width: 12px; height: 12px; border-radius: 2px; margin-right: 8px; }}
        .generated {{ color: #9ca3af; font-size: 0.9em; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Customer Segmentation Report</h1>
        <p class="generated">Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}
            &middot; Reference date: {result.reference_time.strftime("%Y-%m-%d")}</p>

        <h2>Overview</h2>
        <div class="metrics">
            <div class="metric-card">
                <div class="metric-value">{result.total_customers:,}</div>
                <div class="metric-label">Total Customers</div>
            </div>
            <div class="metric-card">
                <div class="metric-value">{avg['recency']}</div>
                <div class="metric-label">Avg Recency (days)</div>
            </div>
            <div class="metric-card">
                <div class="metric-value">{avg['frequency']}</div>
                <div class="metric-label">Avg Frequency</div>
            </div>
            <div class="metric-card">
                <div class="metric-value">${avg['monetary']:,}</div>
                <div class="metric-label">Avg Customer Value</div>
            </div>
        </div>

        <h2>Segments</h2>
        <table>
            <tr>
                <th>Segment</th>
                <th>Customers</th>
                <th>Share</th>
                <th>Avg Value</th>
                <th>Total Revenue</th>
                <th>Revenue Share</th>
            </tr>
            {segment_rows}
        </table>
    </div>
</body>
</html>
"""
