"""
Sample Data Generator
=====================

Synthetic customer transactions for trying out the segmentation without
a real dataset.

Usage:
    from rfm_analytics.common.sample_data import generate_customer_data

    df = generate_customer_data(seed=42)
"""

from datetime import timedelta
from typing import List, Optional

import numpy as np
import pandas as pd

DEFAULT_CUSTOMERS = [f'C{i:03d}' for i in range(1, 9)]


def generate_customer_data(
    customer_ids: Optional[List[str]] = None,
    max_transactions: int = 8,
    max_days_ago: int = 365,
    min_revenue: int = 50,
    max_revenue: int = 550,
    reference_date=None,
    seed: Optional[int] = None
) -> pd.DataFrame:
    """
    Generate synthetic customer transaction data for RFM analysis.

    Every customer gets between 1 and ``max_transactions`` purchases,
    dated 0 to ``max_days_ago - 1`` days before the reference date, each
    with an integer revenue in ``[min_revenue, max_revenue)``.

    Args:
        customer_ids: Customer identifiers (default: C001-C008)
        max_transactions: Upper bound of purchases per customer
        max_days_ago: Purchases fall within this many days
        min_revenue: Smallest revenue per purchase
        max_revenue: Exclusive upper bound of revenue per purchase
        reference_date: Date the purchases are counted back from (default: today)
        seed: Random seed for reproducibility

    Returns:
        DataFrame with CustomerID, Date (YYYY-MM-DD) and Revenue columns
    """
    rng = np.random.default_rng(seed)
    customer_ids = customer_ids if customer_ids is not None else DEFAULT_CUSTOMERS
    end = pd.Timestamp(reference_date) if reference_date is not None else pd.Timestamp.now()
    end = end.normalize()

    records = []
    for customer_id in customer_ids:
        n_transactions = int(rng.integers(1, max_transactions + 1))

        for _ in range(n_transactions):
            days_ago = int(rng.integers(0, max_days_ago))
            txn_date = end - timedelta(days=days_ago)

            records.append({
                'CustomerID': customer_id,
                'Date': txn_date.strftime('%Y-%m-%d'),
                'Revenue': int(rng.integers(min_revenue, max_revenue))
            })

    return pd.DataFrame(records, columns=['CustomerID', 'Date', 'Revenue'])
