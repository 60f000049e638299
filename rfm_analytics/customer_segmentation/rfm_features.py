"""
RFM Feature Engineering Module
==============================

Aggregates raw transactions into per-customer Recency, Frequency and
Monetary metrics, scores each metric on a population-relative 1-5
quintile scale and assigns the fixed RFM segments.

Usage:
    from rfm_analytics.customer_segmentation import RFMFeatureEngineer

    engineer = RFMFeatureEngineer()
    rfm = engineer.calculate_rfm(records, reference_time='2024-07-01')
    rfm = engineer.calculate_rfm_scores(rfm)
    rfm = engineer.segment_customers(rfm)
"""

from typing import Any, Iterable, Mapping, Union

import numpy as np
import pandas as pd
from scipy.stats import rankdata
from loguru import logger

from ._utils import round_half_up, to_reference_timestamp
from .segment_rules import classify_segment
from .transactions import normalize_transactions

N_SCORES = 5

RFM_COLUMNS = ['customer_id', 'last_purchase', 'recency', 'frequency', 'monetary']
SCORE_COLUMNS = ['r_score', 'f_score', 'm_score']

TIE_METHODS = ('min', 'average')


def quintile_scores(
    values: Union[pd.Series, np.ndarray, list],
    tie_method: str = 'min'
) -> np.ndarray:
    """
    Score values 1-5 by their rank within the population.

    ``score = ceil(rank * 5 / n)`` where ``rank`` is the 1-based position of
    the value in the ascending sort. With ``tie_method='min'`` equal values
    share the rank of their first occurrence; ``'average'`` uses the mean
    rank of the tied block instead.

    Args:
        values: Metric values, one per customer
        tie_method: 'min' or 'average'

    Returns:
        Integer array of scores in [1, 5]
    """
    if tie_method not in TIE_METHODS:
        raise ValueError(f"Unknown tie method: {tie_method}")

    values = np.asarray(values, dtype=float)
    n = len(values)
    if n == 0:
        return np.array([], dtype=int)

    ranks = np.asarray(rankdata(values, method=tie_method), dtype=float)
    scores = np.ceil(ranks * N_SCORES / n).astype(int)
    return np.clip(scores, 1, N_SCORES)


class RFMFeatureEngineer:
    """
    RFM metric aggregation and rule-based scoring.

    Scoring is population-relative: the same customer can receive
    different scores in different datasets.

    Example:
        >>> engineer = RFMFeatureEngineer()
        >>> rfm = engineer.calculate_rfm(records, reference_time='2024-07-01')
        >>> scored = engineer.calculate_rfm_scores(rfm)
        >>> segmented = engineer.segment_customers(scored)
    """

    def __init__(self, tie_method: str = 'min'):
        """
        Initialize RFM Feature Engineer.

        Args:
            tie_method: How tied metric values are ranked when scoring
                ('min' keeps first-occurrence ranks, 'average' uses the
                mean rank of the tied values)
        """
        if tie_method not in TIE_METHODS:
            raise ValueError(f"Unknown tie method: {tie_method}")
        self.tie_method = tie_method

        logger.info("RFMFeatureEngineer initialized")

    def calculate_rfm(
        self,
        records: Union[pd.DataFrame, Iterable[Mapping[str, Any]]],
        reference_time: Any
    ) -> pd.DataFrame:
        """
        Calculate RFM metrics for each customer.

        Args:
            records: Raw transaction records (mappings or a DataFrame)
            reference_time: Timestamp recency is measured against

        Returns:
            DataFrame with one row per customer, in order of first
            appearance: customer_id, last_purchase, recency, frequency,
            monetary

        Example:
            >>> rfm = engineer.calculate_rfm(records, pd.Timestamp('2024-07-01'))
        """
        reference = to_reference_timestamp(reference_time)

        if isinstance(records, pd.DataFrame):
            records = records.to_dict('records')

        txns = normalize_transactions(records)

        if txns.empty:
            logger.warning("No usable transactions; RFM is empty")
            return self._empty_rfm()

        rfm = txns.groupby('customer_id', sort=False).agg(
            last_purchase=('date', 'max'),
            frequency=('amount', 'size'),
            monetary=('amount', 'sum')
        ).reset_index()

        # Customers without any parseable date are treated as purchasing now
        rfm['last_purchase'] = rfm['last_purchase'].fillna(reference)
        rfm['recency'] = (reference - rfm['last_purchase']).dt.days.astype(int)
        rfm['frequency'] = rfm['frequency'].astype(int)
        rfm['monetary'] = round_half_up(rfm['monetary']).astype(int)

        rfm = rfm[RFM_COLUMNS]

        logger.info(f"Calculated RFM for {len(rfm)} customers from {len(txns)} transactions")
        return rfm

    def calculate_rfm_scores(self, rfm: pd.DataFrame) -> pd.DataFrame:
        """
        Calculate RFM scores (1-5) for each customer.

        Recency is inverted so the most recent buyers score highest.

        Args:
            rfm: DataFrame with RFM metrics

        Returns:
            Copy of ``rfm`` with r_score, f_score, m_score and the
            three-digit rfm_score code
        """
        rfm = rfm.copy()

        rfm['r_score'] = (N_SCORES + 1) - quintile_scores(rfm['recency'], self.tie_method)
        rfm['f_score'] = quintile_scores(rfm['frequency'], self.tie_method)
        rfm['m_score'] = quintile_scores(rfm['monetary'], self.tie_method)

        for col in SCORE_COLUMNS:
            rfm[col] = rfm[col].astype(int)

        rfm['rfm_score'] = (
            rfm['r_score'].astype(str) +
            rfm['f_score'].astype(str) +
            rfm['m_score'].astype(str)
        )

        logger.info("Calculated RFM scores")
        return rfm

    def segment_customers(self, rfm: pd.DataFrame) -> pd.DataFrame:
        """
        Assign each customer to one of the fixed RFM segments.

        Args:
            rfm: DataFrame with RFM scores

        Returns:
            Copy of ``rfm`` with a ``segment`` column
        """
        rfm = rfm.copy()

        rfm['segment'] = pd.Series(
            [
                classify_segment(int(r), int(f), int(m))
                for r, f, m in zip(rfm['r_score'], rfm['f_score'], rfm['m_score'])
            ],
            index=rfm.index,
            dtype=object
        )

        segment_counts = rfm['segment'].value_counts()
        logger.info(f"Segment distribution:\n{segment_counts}")

        return rfm

    def _empty_rfm(self) -> pd.DataFrame:
        return pd.DataFrame({
            'customer_id': pd.Series(dtype=object),
            'last_purchase': pd.Series(dtype='datetime64[ns]'),
            'recency': pd.Series(dtype=int),
            'frequency': pd.Series(dtype=int),
            'monetary': pd.Series(dtype=int),
        })
