"""Tests for the synthetic transaction generator."""

import pandas as pd

from rfm_analytics.common.sample_data import DEFAULT_CUSTOMERS, generate_customer_data


class TestGenerateCustomerData:
    """Test generate_customer_data."""

    def test_default_shape(self):
        """Eight customers with 1-8 purchases each."""
        df = generate_customer_data(reference_date="2024-07-01", seed=1)

        assert list(df.columns) == ["CustomerID", "Date", "Revenue"]
        assert sorted(df["CustomerID"].unique()) == DEFAULT_CUSTOMERS
        counts = df["CustomerID"].value_counts()
        assert counts.min() >= 1
        assert counts.max() <= 8

    def test_value_ranges(self):
        """Revenue in [50, 549], dates within the past year."""
        reference = pd.Timestamp("2024-07-01")
        df = generate_customer_data(reference_date=reference, seed=2)

        assert df["Revenue"].between(50, 549).all()
        dates = pd.to_datetime(df["Date"], format="%Y-%m-%d")
        days_ago = (reference - dates).dt.days
        assert days_ago.between(0, 364).all()

    def test_seed_reproducible(self):
        """Same seed, same data."""
        a = generate_customer_data(reference_date="2024-07-01", seed=5)
        b = generate_customer_data(reference_date="2024-07-01", seed=5)
        pd.testing.assert_frame_equal(a, b)

    def test_custom_customers(self):
        """Custom IDs and transaction cap are honored."""
        df = generate_customer_data(customer_ids=["X", "Y"], max_transactions=1, seed=3)
        assert list(df["CustomerID"]) == ["X", "Y"]
