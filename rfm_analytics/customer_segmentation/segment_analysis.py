"""
Segment Analysis Module
=======================

Segment-level aggregation of classified customers: member counts,
average and total revenue per segment, plus dataset-wide RFM averages.

Usage:
    from rfm_analytics.customer_segmentation import SegmentAnalyzer

    analyzer = SegmentAnalyzer()
    stats = analyzer.summarize_segments(customers)
    averages = analyzer.calculate_average_metrics(customers)
"""

from typing import Any, Dict

import pandas as pd
from loguru import logger

from ._utils import round_half_up
from .segment_rules import segment_color

SEGMENT_STAT_COLUMNS = ['segment', 'count', 'avg_monetary', 'total_revenue', 'color']

ALL_SEGMENTS = 'all'


class SegmentAnalyzer:
    """
    Reporting aggregates over segmented customers.

    Example:
        >>> analyzer = SegmentAnalyzer()
        >>> stats = analyzer.summarize_segments(segmented)
        >>> print(stats[['segment', 'count', 'total_revenue']])
    """

    def __init__(self):
        """Initialize SegmentAnalyzer."""
        logger.info("SegmentAnalyzer initialized")

    def summarize_segments(
        self,
        df: pd.DataFrame,
        segment_column: str = 'segment',
        monetary_column: str = 'monetary'
    ) -> pd.DataFrame:
        """
        Calculate count, average and total revenue per segment.

        Only segments with at least one member appear. Rows are ordered by
        total revenue, highest first; ties keep the order in which the
        segments first appear among the customers.

        Args:
            df: DataFrame with segment assignments and monetary values
            segment_column: Segment label column
            monetary_column: Monetary value column

        Returns:
            DataFrame with segment, count, avg_monetary, total_revenue, color
        """
        if df.empty:
            return pd.DataFrame({
                'segment': pd.Series(dtype=object),
                'count': pd.Series(dtype=int),
                'avg_monetary': pd.Series(dtype=int),
                'total_revenue': pd.Series(dtype=int),
                'color': pd.Series(dtype=object),
            })

        stats = df.groupby(segment_column, sort=False)[monetary_column].agg(
            ['size', 'mean', 'sum']
        ).reset_index()
        stats.columns = ['segment', 'count', 'avg_monetary', 'total_revenue']

        stats['count'] = stats['count'].astype(int)
        stats['avg_monetary'] = round_half_up(stats['avg_monetary']).astype(int)
        stats['total_revenue'] = round_half_up(stats['total_revenue']).astype(int)
        stats['color'] = stats['segment'].map(segment_color)

        stats = stats.sort_values(
            'total_revenue', ascending=False, kind='mergesort'
        ).reset_index(drop=True)

        return stats[SEGMENT_STAT_COLUMNS]

    def calculate_average_metrics(self, df: pd.DataFrame) -> Dict[str, Any]:
        """
        Dataset-wide RFM averages.

        Recency and monetary are rounded to whole units, frequency to one
        decimal place. An empty dataset yields zeros.

        Args:
            df: DataFrame with recency, frequency and monetary columns

        Returns:
            Dictionary with recency, frequency and monetary means
        """
        if df.empty:
            return {'recency': 0, 'frequency': 0.0, 'monetary': 0}

        return {
            'recency': int(round_half_up(df['recency'].mean())),
            'frequency': float(round_half_up(df['frequency'].mean(), decimals=1)),
            'monetary': int(round_half_up(df['monetary'].mean()))
        }

    def calculate_segment_share(self, stats: pd.DataFrame) -> pd.DataFrame:
        """
        Add customer and revenue percentages to segment statistics.

        Args:
            stats: Output of :meth:`summarize_segments`

        Returns:
            Copy with ``customer_pct`` and ``revenue_share`` columns
        """
        stats = stats.copy()

        total_customers = stats['count'].sum()
        total_revenue = stats['total_revenue'].sum()

        stats['customer_pct'] = (
            stats['count'] / total_customers * 100 if total_customers else 0.0
        )
        stats['revenue_share'] = (
            stats['total_revenue'] / total_revenue * 100 if total_revenue else 0.0
        )

        return stats

    def filter_customers(
        self,
        df: pd.DataFrame,
        segment: str = ALL_SEGMENTS,
        segment_column: str = 'segment'
    ) -> pd.DataFrame:
        """
        Select the customers of one segment.

        Args:
            df: DataFrame with segment assignments
            segment: Segment label, or 'all' for every customer
            segment_column: Segment label column

        Returns:
            Filtered DataFrame (a copy), original order preserved
        """
        if segment == ALL_SEGMENTS:
            return df.copy()
        return df[df[segment_column] == segment].copy()
