"""
Customer Segmentation Module
============================

Rule-based RFM scoring and segmentation of customers from raw transactions.
"""

from .rfm_features import RFMFeatureEngineer, quintile_scores
from .segment_rules import SEGMENTS, SEGMENT_COLORS, classify_segment
from .segment_analysis import SegmentAnalyzer
from .segmenter import RFMSegmenter, SegmentationResult

__all__ = [
    "RFMFeatureEngineer",
    "SegmentAnalyzer",
    "RFMSegmenter",
    "SegmentationResult",
    "SEGMENTS",
    "SEGMENT_COLORS",
    "classify_segment",
    "quintile_scores",
]
