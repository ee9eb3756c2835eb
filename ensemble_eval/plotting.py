"""
Forecast Evaluation Plotting - Summary metrics and truth against forecast date.

This module provides the manuscript figures:
- plot_scores_by_forecast_date: one line per model for a summary metric at a
  single horizon, optionally with the averaged truth on a secondary axis
- plot_truth: averaged truth series alone
"""

from typing import Dict, Iterable, Optional, Sequence, Union
import logging
import os

import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
import matplotlib.dates as mdates
import seaborn as sns

from .config import Config
from .evaluation import Metric, MetricRegistry
from .truth import align_truth, rescale_truth
from . import validation

logger = logging.getLogger(__name__)


def model_palette(
    model_order: Sequence[str],
    model_colors: Sequence[str],
    models_present: Iterable[str] = (),
) -> Dict[str, str]:
    """
    Pair model names with colors by position.

    model_order and model_colors are expected to have the same length; extra
    entries in the longer one are ignored. Models present in the data but not
    listed get Config.UNLISTED_MODEL_COLOR.
    """
    palette = dict(zip(model_order, model_colors))
    for model in models_present:
        if model not in palette:
            logger.debug(f"Model '{model}' has no assigned color")
            palette[model] = Config.UNLISTED_MODEL_COLOR
    return palette


def _format_date_axis(ax) -> None:
    ax.xaxis.set_major_locator(mdates.MonthLocator(interval=Config.DATE_TICK_MONTHS))
    ax.xaxis.set_major_formatter(mdates.DateFormatter(Config.DATE_TICK_FORMAT))
    ax.set_xlabel("forecast date")


def _save(fig, save_path: Optional[str]) -> None:
    if save_path is None:
        return
    save_dir = os.path.dirname(save_path)
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)
    fig.savefig(save_path, dpi=Config.FIGURE_DPI, bbox_inches='tight')
    logger.info(f"Saved figure to {save_path}")


def plot_scores_by_forecast_date(
    summary: pd.DataFrame,
    model_order: Sequence[str],
    model_colors: Sequence[str],
    metric: Union[str, Metric] = Metric.WIS,
    horizon: int = 1,
    title: Optional[str] = None,
    truth: Optional[pd.DataFrame] = None,
    truth_scale: float = Config.DEFAULT_TRUTH_SCALE,
    date_col: str = "forecast_date",
    save_path: Optional[str] = None,
):
    """
    Plot a summarized metric against forecast date for one horizon.

    Args:
        summary: Summarized scores with one row per model and forecast date,
            a horizon column and the metric column (see evaluate_scores)
        model_order: Ordered model names
        model_colors: Colors paired by position with model_order
        metric: One of wis, mae, cov50, cov95
        horizon: Horizon to plot
        title: Plot title
        truth: Optional truth data (target_end_date, value) averaged and drawn
            in black; ignored for coverage metrics
        truth_scale: Multiplier putting truth on the metric's axis; the
            secondary axis undoes it
        date_col: Column holding forecast dates in summary
        save_path: Optional output file

    Returns:
        matplotlib Figure
    """
    spec = MetricRegistry.get(metric)
    validation.validate_summary_table(summary, spec.column, date_col)
    if truth_scale <= 0:
        raise validation.ValidationError(f"truth_scale must be positive, got {truth_scale}")

    data = summary[summary["horizon"] == horizon].copy()
    data[date_col] = pd.to_datetime(data[date_col])
    if data.empty:
        logger.warning(f"No summary rows for horizon {horizon}; plot will be empty")

    truth_to_plot = None
    if truth is not None:
        if not spec.shows_truth:
            logger.info(f"Truth overlay suppressed for {spec.column}")
        elif data.empty:
            logger.warning("No forecast dates to align truth with; truth overlay skipped")
        else:
            date_range = (data[date_col].min(), data[date_col].max())
            truth_to_plot = rescale_truth(align_truth(truth, date_range), spec.metric, truth_scale)

    present = set(data["model"])
    palette = model_palette(model_order, model_colors, sorted(present))
    hue_order = [m for m in palette if m in present]

    with sns.axes_style("whitegrid"):
        fig, ax = plt.subplots(figsize=Config.FIGURE_SIZE)

    if truth_to_plot is not None:
        ax.plot(truth_to_plot["forecast_date"], truth_to_plot["value"],
                color="black", marker="o", markersize=4, linewidth=1)

    if not data.empty:
        sns.lineplot(
            data=data, x=date_col, y=spec.column,
            hue="model", hue_order=hue_order, palette=palette,
            style="model", style_order=hue_order, markers=True, dashes=False,
            errorbar=None, alpha=1.0 if truth_to_plot is not None else 0.8,
            ax=ax,
        )

    if spec.is_coverage:
        ax.axhline(y=spec.coverage_target, color='black', linewidth=1)
        ax.set_ylim(*Config.COVERAGE_YLIM)
    elif not data.empty:
        upper = np.nanquantile(data[spec.column], [0.5, 0.99]).sum()
        if upper > 0:
            ax.set_ylim(0, upper)

    if truth_to_plot is not None:
        secax = ax.secondary_yaxis(
            "right", functions=(lambda y: y / truth_scale, lambda y: y * truth_scale)
        )
        secax.set_ylabel("average target data")

    _format_date_axis(ax)
    ax.set_ylabel(spec.y_label)
    if title is not None:
        ax.set_title(title)

    _save(fig, save_path)
    return fig


def plot_truth(
    truth: pd.DataFrame,
    date_range: Optional[Sequence] = None,
    title: str = "truth data",
    color: str = "black",
    save_path: Optional[str] = None,
):
    """
    Plot averaged truth against forecast date.

    Args:
        truth: Truth data with target_end_date and value columns
        date_range: Optional (start, end) forecast dates to keep, inclusive
        title: Plot title
        color: Line and marker color
        save_path: Optional output file

    Returns:
        matplotlib Figure
    """
    aligned = align_truth(truth, date_range)
    if aligned.empty:
        logger.warning("No truth rows in the requested date range; plot will be empty")

    with sns.axes_style("whitegrid"):
        fig, ax = plt.subplots(figsize=Config.FIGURE_SIZE)

    ax.plot(aligned["forecast_date"], aligned["value"], color=color, marker="o", alpha=0.8)

    vmax = aligned["value"].max()
    if not aligned.empty and vmax > 0:
        ax.set_ylim(0, vmax * 1.1)
    else:
        ax.set_ylim(bottom=0)

    _format_date_axis(ax)
    ax.set_ylabel("average value")
    ax.set_title(title)

    _save(fig, save_path)
    return fig
