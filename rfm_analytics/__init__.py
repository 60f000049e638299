"""
RFM Customer Segmentation Suite
===============================

Rule-based customer segmentation from raw purchase transactions:
- Recency, Frequency and Monetary aggregation per customer
- Population-relative 1-5 quintile scoring
- Six fixed segments (Champions ... Lost) with segment revenue statistics
- CSV/JSON/HTML reports and segment charts

Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Retail Analytics Team"

from .customer_segmentation import RFMFeatureEngineer, RFMSegmenter, SegmentAnalyzer, SegmentationResult
from .common import DataLoader, Reporter, Visualizer

__all__ = [
    "DataLoader",
    "Reporter",
    "Visualizer",
    "RFMFeatureEngineer",
    "RFMSegmenter",
    "SegmentAnalyzer",
    "SegmentationResult",
]
