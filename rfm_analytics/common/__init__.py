"""
Common utilities for the RFM analytics suite.
"""

from .data_loader import DataLoader, load_settings
from .reporting import Reporter
from .sample_data import generate_customer_data
from .visualization import Visualizer

__all__ = ["DataLoader", "Reporter", "Visualizer", "generate_customer_data", "load_settings"]
