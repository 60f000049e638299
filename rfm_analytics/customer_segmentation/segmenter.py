"""
RFM Segmentation Pipeline
=========================

Runs the full segmentation over one dataset:
raw records -> RFM metrics -> quintile scores -> segments -> segment stats.

Usage:
    from rfm_analytics.customer_segmentation import RFMSegmenter

    segmenter = RFMSegmenter()
    result = segmenter.analyze(records, reference_time='2024-07-01')
    print(result.segment_stats)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
from loguru import logger

from ._utils import to_reference_timestamp
from .rfm_features import RFMFeatureEngineer
from .segment_analysis import SegmentAnalyzer

CUSTOMER_COLUMNS = [
    'customer_id', 'last_purchase', 'recency', 'frequency', 'monetary',
    'r_score', 'f_score', 'm_score', 'rfm_score', 'segment'
]


def _to_builtin(value: Any) -> Any:
    """Convert numpy/pandas scalars to JSON-serializable builtins."""
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    return value


def dataframe_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows of a result frame as JSON-serializable dictionaries."""
    return [
        {key: _to_builtin(value) for key, value in row.items()}
        for row in df.to_dict('records')
    ]


@dataclass
class SegmentationResult:
    """Output of one segmentation run."""

    customers: pd.DataFrame
    segment_stats: pd.DataFrame
    avg_metrics: Dict[str, Any]
    total_customers: int
    reference_time: pd.Timestamp

    def to_dict(self) -> Dict[str, Any]:
        """Plain-python representation for JSON responses and reports."""
        return {
            'reference_time': self.reference_time.isoformat(),
            'total_customers': int(self.total_customers),
            'avg_metrics': {k: _to_builtin(v) for k, v in self.avg_metrics.items()},
            'segment_stats': dataframe_to_records(self.segment_stats),
            'customers': dataframe_to_records(self.customers),
        }


class RFMSegmenter:
    """
    Rule-based RFM customer segmentation.

    Each call to :meth:`analyze` is independent: nothing is cached between
    datasets.

    Example:
        >>> segmenter = RFMSegmenter()
        >>> result = segmenter.analyze(records, reference_time='2024-07-01')
        >>> result.total_customers
        2
    """

    def __init__(self, tie_method: str = 'min'):
        """
        Initialize RFM Segmenter.

        Args:
            tie_method: Rank tie handling passed to the quintile scorer
        """
        self.engineer = RFMFeatureEngineer(tie_method=tie_method)
        self.analyzer = SegmentAnalyzer()

        logger.info("RFMSegmenter initialized")

    def analyze(
        self,
        records: Union[pd.DataFrame, Iterable[Mapping[str, Any]]],
        reference_time: Optional[Any] = None
    ) -> SegmentationResult:
        """
        Segment the customers found in a set of transactions.

        Args:
            records: Raw transaction records (mappings or a DataFrame)
            reference_time: Timestamp recency is measured against
                (default: now)

        Returns:
            SegmentationResult
        """
        if reference_time is None:
            reference_time = pd.Timestamp.now()
        reference = to_reference_timestamp(reference_time)

        rfm = self.engineer.calculate_rfm(records, reference)
        rfm = self.engineer.calculate_rfm_scores(rfm)
        customers = self.engineer.segment_customers(rfm)[CUSTOMER_COLUMNS]

        segment_stats = self.analyzer.summarize_segments(customers)
        avg_metrics = self.analyzer.calculate_average_metrics(customers)

        result = SegmentationResult(
            customers=customers.reset_index(drop=True),
            segment_stats=segment_stats,
            avg_metrics=avg_metrics,
            total_customers=len(customers),
            reference_time=reference
        )

        logger.info(
            f"Segmented {result.total_customers} customers into "
            f"{len(segment_stats)} segments"
        )
        return result
