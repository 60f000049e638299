#!/usr/bin/env python3
"""
RFM Segmentation - Main Runner
==============================

Command-line interface for running the RFM customer segmentation.

Usage:
    python run_analytics.py --task segment --data data/sample_customers.csv
    python run_analytics.py --task sample --seed 42

Examples:
    # Segment a transaction file against a fixed reference date
    python run_analytics.py --task segment --data transactions.csv --reference-date 2024-07-01

    # Export only the Champions segment
    python run_analytics.py --task segment --data transactions.csv --segment Champions

    # Try the segmentation on generated sample data
    python run_analytics.py --task sample --no-plots
"""

import argparse
import sys
from pathlib import Path

import pandas as pd
from loguru import logger

from rfm_analytics.common import DataLoader, Reporter, Visualizer, generate_customer_data, load_settings
from rfm_analytics.customer_segmentation import SEGMENTS, RFMSegmenter, SegmentAnalyzer
from rfm_analytics.customer_segmentation.segment_analysis import ALL_SEGMENTS


def setup_logging(log_level: str = "INFO"):
    """Configure logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>"
    )


def report_results(result, args, config, report_name):
    """Write reports and plots for a segmentation result."""
    output_dir = Path(args.output or config['output']['directory'])

    customers = SegmentAnalyzer().filter_customers(result.customers, args.segment)
    if args.segment != ALL_SEGMENTS:
        logger.info(f"Exporting {len(customers)} customers in segment '{args.segment}'")

    reporter = Reporter(output_dir=str(output_dir / 'reports'))
    paths = reporter.generate_segmentation_report(
        result,
        report_name,
        formats=config['output'].get('formats'),
        customers=customers
    )

    if not args.no_plots:
        viz = Visualizer(output_dir=str(output_dir / 'plots'))
        viz.plot_segment_revenue(result.segment_stats, save_name=f'{report_name}_revenue')
        viz.plot_customer_distribution(customers, save_name=f'{report_name}_distribution')

    for _, row in result.segment_stats.iterrows():
        logger.info(
            f"{row['segment']}: {row['count']} customers, "
            f"avg value {row['avg_monetary']}, total revenue {row['total_revenue']}"
        )
    avg = result.avg_metrics
    logger.info(
        f"Averages: recency {avg['recency']} days, "
        f"frequency {avg['frequency']}, monetary {avg['monetary']}"
    )

    return paths


def run_segmentation(args, config):
    """Run customer segmentation on a transaction file."""
    logger.info("Starting RFM Segmentation Pipeline")

    loader = DataLoader(config_path=args.config)
    df = loader.load(args.data)

    is_valid, report = loader.validate_data(df)
    if not is_valid:
        for error in report['errors']:
            logger.error(error)

    segmenter = RFMSegmenter()
    result = segmenter.analyze(loader.to_records(df), reference_time=args.reference_date)

    report_results(result, args, config, 'customer_segments')

    logger.info(f"Segmentation complete. {result.total_customers} customers segmented.")
    return result


def run_sample(args, config):
    """Run customer segmentation on generated sample data."""
    logger.info("Running RFM Segmentation on sample data")

    df = generate_customer_data(reference_date=args.reference_date, seed=args.seed)
    logger.info(f"Generated {len(df)} sample transactions")

    segmenter = RFMSegmenter()
    result = segmenter.analyze(df.to_dict('records'), reference_time=args.reference_date)

    report_results(result, args, config, 'sample_customer_segments')

    logger.info(f"Sample segmentation complete. {result.total_customers} customers segmented.")
    return result


def build_parser():
    parser = argparse.ArgumentParser(
        description='RFM Customer Segmentation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--task',
        choices=['segment', 'sample'],
        required=True,
        help='Analytics task to run'
    )

    parser.add_argument(
        '--data',
        type=str,
        help='Path to transaction file (CSV or JSON)'
    )

    parser.add_argument(
        '--reference-date',
        type=str,
        default=None,
        help='Date recency is measured against (default: now)'
    )

    parser.add_argument(
        '--segment',
        type=str,
        choices=[ALL_SEGMENTS] + SEGMENTS,
        default=ALL_SEGMENTS,
        help='Restrict the customer export and scatter plot to one segment'
    )

    parser.add_argument(
        '--config',
        type=str,
        default='config/settings.yaml',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory for results (default: from config)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for sample data'
    )

    parser.add_argument(
        '--no-plots',
        action='store_true',
        help='Skip chart generation'
    )

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.reference_date is not None:
        try:
            args.reference_date = pd.Timestamp(args.reference_date)
        except ValueError:
            args.reference_date = pd.NaT
        if pd.isna(args.reference_date):
            parser.error("--reference-date must be a date such as 2024-07-01")

    # Setup
    setup_logging(args.log_level)
    config = load_settings(args.config)

    # Run task
    if args.task == 'segment':
        if not args.data:
            parser.error("--data required for segment task")
        return run_segmentation(args, config)

    elif args.task == 'sample':
        return run_sample(args, config)


def cli():
    """Console script entry point."""
    main()


if __name__ == '__main__':
    cli()
