"""
CSV loaders for score, summary and truth tables.
"""

import logging

import pandas as pd

from . import validation

logger = logging.getLogger(__name__)


def read_scores(path) -> pd.DataFrame:
    """
    Load per-forecast scores written by the scoring step.

    Location codes are kept as strings so FIPS codes like "06" survive.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If required columns are missing
    """
    scores = pd.read_csv(path, dtype={"location": str})
    validation.validate_columns(scores, validation.SCORE_COLUMNS, f"Scores file {path}")
    for col in ("forecast_date", "forecast_week"):
        if col in scores.columns:
            scores[col] = pd.to_datetime(scores[col])
    logger.info(f"Loaded {len(scores)} score rows for {scores['model'].nunique()} models from {path}")
    return scores


def read_summary(path) -> pd.DataFrame:
    """Load a summary table written by the evaluate command."""
    summary = pd.read_csv(path, dtype={"location": str})
    validation.validate_columns(summary, validation.SUMMARY_COLUMNS, f"Summary file {path}")
    for col in ("forecast_date", "forecast_week"):
        if col in summary.columns:
            summary[col] = pd.to_datetime(summary[col])
    return summary


def read_truth(path) -> pd.DataFrame:
    """
    Load ground truth observations.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If required columns are missing
    """
    truth = pd.read_csv(path, dtype={"location": str})
    validation.validate_truth_table(truth)
    truth["target_end_date"] = pd.to_datetime(truth["target_end_date"])
    logger.info(f"Loaded {len(truth)} truth rows from {path}")
    return truth
