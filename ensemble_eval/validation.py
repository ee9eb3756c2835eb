"""
Validation Module - Data format and consistency checks.

This module provides validation functions to catch malformed score, summary
and truth tables before they cause silent failures in aggregation or plotting.
"""

from typing import Iterable, Sequence

import pandas as pd


class ValidationError(Exception):
    """Custom exception for validation failures."""
    pass


SCORE_COLUMNS = ['model', 'location', 'wis', 'abs_error', 'coverage_50', 'coverage_95']
SUMMARY_COLUMNS = ['model', 'wis', 'mae', 'cov50', 'cov95']
TRUTH_COLUMNS = ['target_end_date', 'value']


def validate_columns(df: pd.DataFrame, required: Iterable[str], context: str) -> None:
    """
    Validate that a DataFrame carries every required column.

    Args:
        df: DataFrame to validate
        required: Column names that must be present
        context: Description for error messages (e.g., "scores", "truth")

    Raises:
        ValidationError: If any column is missing
    """
    missing_cols = [col for col in required if col not in df.columns]
    if missing_cols:
        raise ValidationError(
            f"{context} missing required columns: {missing_cols}"
        )


def validate_score_table(scores: pd.DataFrame, extra_columns: Sequence[str] = ()) -> None:
    """
    Validate a per-forecast score table before aggregation.

    Args:
        scores: Score rows (one per model/date/location/horizon)
        extra_columns: Additional columns required by the requested grouping

    Raises:
        ValidationError: If the table is empty or columns are missing
    """
    if scores is None or scores.empty:
        raise ValidationError("Score table contains no rows")
    validate_columns(scores, SCORE_COLUMNS + list(extra_columns), "Score table")


def validate_summary_table(summary: pd.DataFrame, metric_column: str, date_col: str) -> None:
    """Validate a summarized score table before plotting."""
    validate_columns(summary, ['model', 'horizon', date_col, metric_column], "Summary table")


def validate_truth_table(truth: pd.DataFrame) -> None:
    """
    Validate ground truth DataFrame format.

    Raises:
        ValidationError: If format requirements are not met
    """
    validate_columns(truth, TRUTH_COLUMNS, "Truth data")
    if not pd.api.types.is_numeric_dtype(truth['value']):
        raise ValidationError(
            f"Truth data 'value' column must be numeric, got {truth['value'].dtype}"
        )


def validate_baseline_present(scores: pd.DataFrame, baseline_model: str) -> None:
    """
    Validate that the baseline model has score rows to average over.

    Raises:
        ValidationError: If baseline model is absent
    """
    if baseline_model not in set(scores['model'].unique()):
        available = sorted(scores['model'].astype(str).unique())
        raise ValidationError(
            f"Baseline model '{baseline_model}' not found in scores. "
            f"Available models: {available[:10]}"
        )

