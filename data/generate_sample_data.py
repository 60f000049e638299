#!/usr/bin/env python3
"""
Sample Data Generator
=====================

Generates a synthetic transaction dataset for trying out the RFM
segmentation.

Usage:
    python data/generate_sample_data.py

This will create:
    - sample_customers.csv: 8 customers with 1-8 purchases each
    - test_customers_small.csv: 3 customers, fixed seed
"""

import os

from rfm_analytics.common.sample_data import generate_customer_data


def main():
    """Generate all sample datasets."""
    script_dir = os.path.dirname(os.path.abspath(__file__))

    print("Generating sample datasets...")

    print("  - Generating customer data...")
    customers_df = generate_customer_data(seed=42)
    customers_path = os.path.join(script_dir, 'sample_customers.csv')
    customers_df.to_csv(customers_path, index=False)
    print(f"    Saved {len(customers_df)} records to {customers_path}")

    print("  - Generating small test dataset...")
    small_customers = generate_customer_data(
        customer_ids=['C001', 'C002', 'C003'],
        max_transactions=3,
        seed=7
    )
    small_customers.to_csv(os.path.join(script_dir, 'test_customers_small.csv'), index=False)

    print("\nSample data generation complete!")
    print(f"  Customers: {len(customers_df)} transactions, {customers_df['CustomerID'].nunique()} customers")


if __name__ == '__main__':
    main()
