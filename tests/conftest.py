"""Shared fixtures for the RFM segmentation tests."""

import pandas as pd
import pytest


@pytest.fixture
def reference_time():
    return pd.Timestamp("2024-07-01")


@pytest.fixture
def two_customer_records():
    """C1 buys twice, C2 once; both last bought 30 days before 2024-07-01."""
    return [
        {"CustomerID": "C1", "Date": "2024-01-01", "Revenue": 100},
        {"CustomerID": "C1", "Date": "2024-06-01", "Revenue": 200},
        {"CustomerID": "C2", "Date": "2024-06-01", "Revenue": 50},
    ]


@pytest.fixture
def ten_customer_records():
    """Ten customers with distinct recency, frequency and spend.

    Customer Ck last bought k*10 days before 2024-07-01, made k purchases
    and spent 100*k in total.
    """
    records = []
    reference = pd.Timestamp("2024-07-01")
    for k in range(1, 11):
        last = reference - pd.Timedelta(days=k * 10)
        for i in range(k):
            records.append({
                "CustomerID": f"C{k:02d}",
                "Date": (last - pd.Timedelta(days=i)).strftime("%Y-%m-%d"),
                "Revenue": 100,
            })
    return records
