"""
Evaluation Module - Score summaries relative to a baseline model.

This module provides a clean interface for:
- Grouping dimensions (GroupKey) and summary metrics (Metric, MetricSpec)
- Relative skill against a baseline with explicit zero handling (RelativeScore)
- Aggregating per-forecast scores by season, horizon, forecast week and location
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union
import logging

import pandas as pd
import numpy as np

from .config import Config
from . import validation

logger = logging.getLogger(__name__)


class GroupKey(str, Enum):
    """Supported grouping dimensions; values are the column names."""
    SEASON = "season"
    HORIZON = "horizon"
    FORECAST_WEEK = "forecast_week"
    LOCATION = "location"


class Metric(str, Enum):
    """Summary metrics that can be reported and plotted."""
    WIS = "wis"
    MAE = "mae"
    COV50 = "cov50"
    COV95 = "cov95"


@dataclass(frozen=True)
class MetricSpec:
    """Specification for a summary metric with plotting metadata."""
    metric: Metric
    source_column: str                       # Per-forecast column averaged into it
    y_label: str                             # Axis label in forecast-date plots
    coverage_target: Optional[float] = None  # Nominal level for interval coverage
    relative_column: Optional[str] = None    # Baseline-relative counterpart, if any

    @property
    def column(self) -> str:
        """Column holding the metric in summary tables."""
        return self.metric.value

    @property
    def is_coverage(self) -> bool:
        return self.coverage_target is not None

    @property
    def shows_truth(self) -> bool:
        # Truth overlays only make sense on the scale of the error metrics
        return not self.is_coverage


class MetricRegistry:
    """Registry of summary metrics, keyed by Metric."""

    WIS = MetricSpec(
        metric=Metric.WIS,
        source_column="wis",
        y_label="average wis",
        relative_column="rwis",
    )

    MAE = MetricSpec(
        metric=Metric.MAE,
        source_column="abs_error",
        y_label="mae",
        relative_column="rmae",
    )

    COV50 = MetricSpec(
        metric=Metric.COV50,
        source_column="coverage_50",
        y_label="average PI coverage",
        coverage_target=0.50,
    )

    COV95 = MetricSpec(
        metric=Metric.COV95,
        source_column="coverage_95",
        y_label="average PI coverage",
        coverage_target=0.95,
    )

    ALL = [WIS, MAE, COV50, COV95]
    ERROR_METRICS = [WIS, MAE]

    @classmethod
    def get(cls, metric: Union[str, Metric]) -> MetricSpec:
        try:
            metric = Metric(metric)
        except ValueError:
            raise validation.ValidationError(
                f"Unsupported metric '{metric}'. Options are: {[m.value for m in Metric]}"
            )
        return {spec.metric: spec for spec in cls.ALL}[metric]


class RatioKind(str, Enum):
    RATIO = "ratio"                # baseline non-zero: plain quotient
    MATCHED_ZERO = "matched_zero"  # baseline and model both zero
    UNBOUNDED = "unbounded"        # baseline zero, model non-zero
    UNDEFINED = "undefined"        # no baseline partition to compare with


@dataclass(frozen=True)
class RelativeScore:
    """Tagged result of comparing a model score to the baseline score."""
    kind: RatioKind
    value: float

    @classmethod
    def from_values(cls, value: float, baseline: float) -> "RelativeScore":
        if pd.isna(baseline) or pd.isna(value):
            return cls(RatioKind.UNDEFINED, np.nan)
        if baseline != 0:
            return cls(RatioKind.RATIO, value / baseline)
        if value == 0:
            return cls(RatioKind.MATCHED_ZERO, 1.0)
        return cls(RatioKind.UNBOUNDED, np.inf)


def relative_to_baseline(values: pd.Series, baseline: pd.Series, return_kind: bool = False):
    """
    Element-wise RelativeScore values, aligned on the index of `values`.

    With return_kind, also returns the RatioKind of every element as a
    second Series.
    """
    rel = [RelativeScore.from_values(v, b) for v, b in zip(values, baseline)]
    out = pd.Series([r.value for r in rel], index=values.index, dtype=float)
    if return_kind:
        return out, pd.Series([r.kind for r in rel], index=values.index, dtype=object)
    return out


def parse_group_keys(tokens) -> List[GroupKey]:
    """
    Convert grouping tokens into an ordered list of GroupKey members.

    Accepts GroupKey members or their string values. Duplicates are dropped
    keeping the first occurrence; ``None`` means no grouping.

    Raises:
        ValidationError: If a token is not a supported grouping dimension
    """
    if tokens is None:
        return []
    if isinstance(tokens, str):
        tokens = [tokens]

    keys: List[GroupKey] = []
    for token in tokens:
        try:
            key = GroupKey(token)
        except ValueError:
            raise validation.ValidationError(
                f"Unsupported grouping variable '{token}'. "
                f"Options are: {[k.value for k in GroupKey]}"
            )
        if key not in keys:
            keys.append(key)
    return keys


def season_for_dates(dates) -> pd.Series:
    """
    Label forecast dates with their flu season.

    Dates strictly before Config.SEASON_CUTOFF belong to the first season,
    everything else to the second. Only the two manuscript seasons exist.
    """
    dates = pd.to_datetime(pd.Series(dates))
    cutoff = pd.Timestamp(Config.SEASON_CUTOFF)
    labels = np.where(dates < cutoff, Config.SEASON_BEFORE_CUTOFF, Config.SEASON_AFTER_CUTOFF)
    return pd.Series(labels, index=dates.index, dtype=object).where(dates.notna(), None)


def filter_location_scope(scores: pd.DataFrame, us_only: bool) -> pd.DataFrame:
    """Keep national rows only, or state-level rows only."""
    if us_only:
        return scores[scores["location"] == Config.US_LOCATION]
    return scores[scores["location"] != Config.US_LOCATION]


def _required_columns(keys: Sequence[GroupKey], scores: pd.DataFrame) -> List[str]:
    extra = []
    for key in keys:
        if key is GroupKey.SEASON and "season" not in scores.columns:
            extra.append("forecast_date")
        else:
            extra.append(key.value)
    return extra


def evaluate_scores(
    scores: pd.DataFrame,
    group_by,
    baseline_model: str,
    us_only: bool = False,
) -> pd.DataFrame:
    """
    Summarize forecast scores across evaluation groupings.

    Args:
        scores: Per-forecast scores with columns model, location, wis,
            abs_error, coverage_50, coverage_95 (plus forecast_date when the
            season has to be derived, and any requested grouping columns)
        group_by: Grouping dimensions, any of season, horizon, forecast_week,
            location (GroupKey members or strings). None or [] for no grouping.
        baseline_model: Model the relative metrics rwis and rmae are computed against
        us_only: When location is not a grouping dimension, summarize the US
            national level only (True) or the states only (False)

    Returns:
        DataFrame with columns model, <group columns>, wis, mae, cov50, cov95,
        rwis, rmae; numeric columns rounded, rows ordered by group then wis.

    Raises:
        ValidationError: On empty input, unknown grouping, missing columns or
            a baseline model with no rows in scope.
    """
    keys = parse_group_keys(group_by)
    validation.validate_score_table(scores, _required_columns(keys, scores))
    group_cols = [key.value for key in keys]

    if GroupKey.LOCATION not in keys:
        scores = filter_location_scope(scores, us_only)
        logger.debug(f"Location scope {'US' if us_only else 'states'}: {len(scores)} rows kept")
        if scores.empty:
            raise validation.ValidationError(
                f"No score rows left after filtering to {'US' if us_only else 'non-US'} locations"
            )

    if GroupKey.SEASON in keys and "season" not in scores.columns:
        scores = scores.assign(season=season_for_dates(scores["forecast_date"]).values)

    validation.validate_baseline_present(scores, baseline_model)

    summarized = (
        scores.groupby(["model"] + group_cols, as_index=False, sort=True, dropna=False)
        .agg(**{spec.column: (spec.source_column, "mean") for spec in MetricRegistry.ALL})
    )

    baseline = scores[scores["model"] == baseline_model]
    if group_cols:
        baseline = (
            baseline.groupby(group_cols, as_index=False, sort=True, dropna=False)
            .agg(base_wis=("wis", "mean"), base_mae=("abs_error", "mean"))
        )
        summarized = pd.merge(summarized, baseline, on=group_cols, how="left")
        missing = summarized["base_wis"].isna()
        if missing.any():
            logger.warning(
                f"{missing.sum()} summary rows have no baseline partition; "
                f"relative metrics left undefined"
            )
    else:
        summarized["base_wis"] = baseline["wis"].mean()
        summarized["base_mae"] = baseline["abs_error"].mean()

    for spec, base_col in [(MetricRegistry.WIS, "base_wis"), (MetricRegistry.MAE, "base_mae")]:
        rel, kinds = relative_to_baseline(summarized[spec.column], summarized[base_col], return_kind=True)
        summarized[spec.relative_column] = rel
        zero_base = kinds.isin([RatioKind.MATCHED_ZERO, RatioKind.UNBOUNDED])
        if zero_base.any():
            logger.info(
                f"{zero_base.sum()} rows have a zero baseline {spec.column}: "
                f"{(kinds == RatioKind.MATCHED_ZERO).sum()} matched, "
                f"{(kinds == RatioKind.UNBOUNDED).sum()} unbounded"
            )
    summarized = summarized.drop(columns=["base_wis", "base_mae"])

    numeric_cols = summarized.select_dtypes(include="number").columns
    summarized[numeric_cols] = summarized[numeric_cols].round(Config.ROUND_DIGITS)

    summarized = summarized.sort_values(group_cols + ["wis"], kind="mergesort").reset_index(drop=True)

    logger.info(
        f"Summarized {len(scores)} score rows into {len(summarized)} rows "
        f"grouped by {group_cols or 'nothing'} against baseline '{baseline_model}'"
    )
    return summarized

