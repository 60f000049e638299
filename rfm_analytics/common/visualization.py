"""
Visualization Module
====================

Static charts for RFM segmentation results.

Usage:
    from rfm_analytics.common import Visualizer

    viz = Visualizer(output_dir="outputs/plots")
    viz.plot_segment_revenue(result.segment_stats, save_name='segment_revenue')
    viz.plot_customer_distribution(result.customers, save_name='customers')
"""

from pathlib import Path
from typing import Optional, Tuple

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from loguru import logger

from ..customer_segmentation import SEGMENT_COLORS


class Visualizer:
    """
    Segmentation charts rendered with matplotlib/seaborn.

    Every plot returns its figure; it is saved as PNG when ``save_name``
    is given and shown only when ``show=True``.

    Example:
        >>> viz = Visualizer(output_dir="outputs/plots")
        >>> viz.plot_segment_revenue(stats, save_name='segment_revenue')
    """

    def __init__(
        self,
        output_dir: str = "outputs/plots",
        style: str = "seaborn-v0_8-whitegrid",
        figsize: Tuple[int, int] = (12, 8),
        dpi: int = 100,
        show: bool = False
    ):
        """
        Initialize Visualizer.

        Args:
            output_dir: Directory for saving plots
            style: Matplotlib style
            figsize: Default figure size
            dpi: Resolution for saved figures
            show: Display figures interactively after drawing
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.figsize = figsize
        self.dpi = dpi
        self.show = show

        if not show:
            matplotlib.use('Agg')

        try:
            plt.style.use(style)
        except OSError:
            plt.style.use('default')

        logger.info(f"Visualizer initialized. Output: {self.output_dir}")

    def plot_segment_revenue(
        self,
        segment_stats: pd.DataFrame,
        title: str = "Revenue by Segment",
        save_name: Optional[str] = None
    ) -> plt.Figure:
        """
        Bar chart of total revenue per segment with member counts.

        Args:
            segment_stats: Segment statistics (segment, count, total_revenue)
            title: Plot title
            save_name: Filename for saving

        Returns:
            The matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        if not segment_stats.empty:
            sns.barplot(
                data=segment_stats,
                x='segment',
                y='total_revenue',
                hue='segment',
                palette=SEGMENT_COLORS,
                dodge=False,
                legend=False,
                ax=ax
            )

            for i, row in enumerate(segment_stats.itertuples()):
                ax.annotate(
                    f"{row.count} customers",
                    (i, row.total_revenue),
                    ha='center',
                    va='bottom',
                    fontsize=10
                )

        ax.set_xlabel('Segment', fontsize=12)
        ax.set_ylabel('Total Revenue', fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.tick_params(axis='x', rotation=15)
        ax.grid(True, axis='y', alpha=0.3)

        plt.tight_layout()
        self._finish(fig, save_name, "segment revenue plot")
        return fig

    def plot_customer_distribution(
        self,
        customers: pd.DataFrame,
        x_column: str = 'frequency',
        y_column: str = 'monetary',
        title: str = "Customer Distribution (Frequency vs Monetary)",
        save_name: Optional[str] = None
    ) -> plt.Figure:
        """
        Scatter plot of customers colored by segment.

        Args:
            customers: Customer rows with segment assignments
            x_column: X-axis column name
            y_column: Y-axis column name
            title: Plot title
            save_name: Filename for saving

        Returns:
            The matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        for segment, color in SEGMENT_COLORS.items():
            mask = customers['segment'] == segment
            if not mask.any():
                continue
            ax.scatter(
                customers.loc[mask, x_column],
                customers.loc[mask, y_column],
                c=color,
                label=segment,
                alpha=0.7,
                s=60
            )

        ax.set_xlabel(x_column.replace('_', ' ').title(), fontsize=12)
        ax.set_ylabel(y_column.replace('_', ' ').title(), fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        if not customers.empty:
            ax.legend()
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        self._finish(fig, save_name, "customer distribution plot")
        return fig

    def _finish(self, fig: plt.Figure, save_name: Optional[str], label: str) -> None:
        if save_name:
            save_path = self.output_dir / f"{save_name}.png"
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight')
            logger.info(f"Saved {label}: {save_path}")

        if self.show:
            plt.show()
        else:
            plt.close(fig)
