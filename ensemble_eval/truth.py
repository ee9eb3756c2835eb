"""
Truth series helpers shared by the forecast-date and truth-only plots.
"""

from typing import Optional, Sequence, Union
import logging

import pandas as pd
import numpy as np

from .config import Config
from .evaluation import Metric, MetricRegistry
from . import validation

logger = logging.getLogger(__name__)


def align_truth(truth: pd.DataFrame, date_range: Optional[Sequence] = None) -> pd.DataFrame:
    """
    Align ground truth to forecast dates and average it per date.

    Each target_end_date is moved back Config.TRUTH_LAG_DAYS days (the
    reporting lag between a forecast date and the end of the target week).
    Rows outside the inclusive [start, end] date_range are dropped, then
    values sharing a date (several locations or sources) are averaged.

    Args:
        truth: DataFrame with target_end_date and value columns
        date_range: Optional (start, end) pair of dates or date strings

    Returns:
        DataFrame with columns forecast_date, value sorted by forecast_date
    """
    validation.validate_truth_table(truth)

    aligned = pd.DataFrame({
        "forecast_date": pd.to_datetime(truth["target_end_date"]) - pd.Timedelta(days=Config.TRUTH_LAG_DAYS),
        "value": truth["value"].to_numpy(),
    })

    if date_range is not None:
        start, end = (pd.Timestamp(d) for d in date_range)
        aligned = aligned[aligned["forecast_date"].between(start, end)]

    return (
        aligned.groupby("forecast_date", as_index=False)["value"]
        .mean()
        .sort_values("forecast_date")
        .reset_index(drop=True)
    )


def rescale_truth(
    truth: pd.DataFrame,
    metric: Union[str, Metric],
    truth_scale: float = Config.DEFAULT_TRUTH_SCALE,
) -> pd.DataFrame:
    """
    Put an aligned truth series on the scale of a plotted metric.

    Error metrics (wis, mae) multiply the truth by truth_scale. Coverage
    metrics invert and normalize by the maximum of the whole series, with a
    steeper slope from Config.SEASON_CUTOFF onwards, so the curve sits just
    under the nominal coverage lines:

        before cutoff:  -0.15 * value / max(value) + 1
        from cutoff:    -0.5  * value / max(value) + 1

    An all-zero series cannot be normalized for coverage metrics and is
    returned unchanged.
    """
    spec = MetricRegistry.get(metric)
    out = truth.copy()

    if not spec.is_coverage:
        out["value"] = out["value"] * truth_scale
        return out

    vmax = out["value"].max()
    if pd.isna(vmax) or vmax == 0:
        logger.warning(f"Truth maximum is {vmax}; skipping {spec.column} rescaling")
        return out

    before = pd.to_datetime(out["forecast_date"]) < pd.Timestamp(Config.SEASON_CUTOFF)
    slope = np.where(before, Config.COVERAGE_TRUTH_SLOPE_BEFORE, Config.COVERAGE_TRUTH_SLOPE_AFTER)
    out["value"] = slope * out["value"] / vmax + 1
    return out
