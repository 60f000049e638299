"""
RFM Segment Rules
=================

Fixed rule table mapping (R, F, M) quintile scores to one of six named
segments. Rules are evaluated top to bottom and the first match wins;
``Lost`` catches everything else.

Usage:
    from rfm_analytics.customer_segmentation.segment_rules import classify_segment

    classify_segment(5, 5, 5)   # 'Champions'
    classify_segment(1, 1, 1)   # 'Need Attention'
    classify_segment(1, 2, 4)   # 'Lost'
"""

from typing import Callable, Dict, List, Tuple

SegmentPredicate = Callable[[int, int, int], bool]

CHAMPIONS = 'Champions'
LOYAL_CUSTOMERS = 'Loyal Customers'
POTENTIAL_LOYALISTS = 'Potential Loyalists'
AT_RISK = 'At Risk'
NEED_ATTENTION = 'Need Attention'
LOST = 'Lost'

# Order matters: the score ranges overlap.
SEGMENT_RULES: List[Tuple[SegmentPredicate, str]] = [
    (lambda r, f, m: r >= 4 and f >= 4 and m >= 4, CHAMPIONS),
    (lambda r, f, m: r >= 3 and f >= 3 and m >= 3, LOYAL_CUSTOMERS),
    (lambda r, f, m: r >= 3 and f <= 3 and m >= 2, POTENTIAL_LOYALISTS),
    (lambda r, f, m: r <= 2 and f >= 3 and m >= 3, AT_RISK),
    (lambda r, f, m: r <= 3 and f <= 2 and m <= 3, NEED_ATTENTION),
]

DEFAULT_SEGMENT = LOST

SEGMENTS: List[str] = [label for _, label in SEGMENT_RULES] + [DEFAULT_SEGMENT]

SEGMENT_COLORS: Dict[str, str] = {
    CHAMPIONS: '#10b981',
    LOYAL_CUSTOMERS: '#3b82f6',
    POTENTIAL_LOYALISTS: '#8b5cf6',
    AT_RISK: '#f59e0b',
    NEED_ATTENTION: '#ef4444',
    LOST: '#64748b',
}


def classify_segment(r_score: int, f_score: int, m_score: int) -> str:
    """
    Assign a segment label from RFM scores.

    Args:
        r_score: Recency score (1-5, higher is more recent)
        f_score: Frequency score (1-5)
        m_score: Monetary score (1-5)

    Returns:
        Label of the first matching rule, or ``Lost``
    """
    for predicate, label in SEGMENT_RULES:
        if predicate(r_score, f_score, m_score):
            return label
    return DEFAULT_SEGMENT


def segment_color(segment: str) -> str:
    """Display color for a segment label."""
    return SEGMENT_COLORS[segment]
