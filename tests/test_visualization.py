"""Tests for segmentation charts."""

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from rfm_analytics.common import Visualizer  # noqa: E402
from rfm_analytics.customer_segmentation import RFMSegmenter  # noqa: E402


@pytest.fixture
def result(ten_customer_records, reference_time):
    return RFMSegmenter().analyze(ten_customer_records, reference_time=reference_time)


class TestVisualizer:
    """Test Visualizer plots."""

    def test_segment_revenue_saved(self, tmp_path, result):
        """The revenue bar chart is written as PNG."""
        viz = Visualizer(output_dir=str(tmp_path))
        fig = viz.plot_segment_revenue(result.segment_stats, save_name="revenue")

        assert (tmp_path / "revenue.png").exists()
        assert fig.axes[0].get_title() == "Revenue by Segment"

    def test_customer_distribution_saved(self, tmp_path, result):
        """The scatter plot has one series per present segment."""
        viz = Visualizer(output_dir=str(tmp_path))
        fig = viz.plot_customer_distribution(result.customers, save_name="distribution")

        assert (tmp_path / "distribution.png").exists()
        n_segments = result.customers["segment"].nunique()
        assert len(fig.axes[0].collections) == n_segments

    def test_empty_inputs(self, tmp_path, reference_time):
        """Empty results draw empty charts."""
        empty = RFMSegmenter().analyze([], reference_time=reference_time)
        viz = Visualizer(output_dir=str(tmp_path))
        viz.plot_segment_revenue(empty.segment_stats, save_name="empty_revenue")
        viz.plot_customer_distribution(empty.customers, save_name="empty_distribution")

        assert (tmp_path / "empty_revenue.png").exists()
        assert (tmp_path / "empty_distribution.png").exists()
