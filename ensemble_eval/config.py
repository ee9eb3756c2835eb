"""
Configuration constants for ensemble forecast evaluation.
"""

import datetime as dt


class Config:
    """Configuration settings for evaluation and plotting."""

    # Location scope
    US_LOCATION = "US"

    # Season labelling (two-season manuscript cutoff)
    SEASON_CUTOFF = dt.date(2022, 8, 1)
    SEASON_BEFORE_CUTOFF = "2021-2022"
    SEASON_AFTER_CUTOFF = "2022-2023"

    # Truth alignment: target_end_date (Saturday) back to forecast_date (Monday)
    TRUTH_LAG_DAYS = 5
    DEFAULT_TRUTH_SCALE = 0.125

    # Truth rescaling for coverage plots, split at SEASON_CUTOFF
    COVERAGE_TRUTH_SLOPE_BEFORE = -0.15
    COVERAGE_TRUTH_SLOPE_AFTER = -0.5

    # Summary tables
    ROUND_DIGITS = 3

    # Figures
    DATE_TICK_MONTHS = 2
    DATE_TICK_FORMAT = "%b '%y"
    FIGURE_SIZE = (10, 6)
    FIGURE_DPI = 200
    COVERAGE_YLIM = (0, 1.05)
    UNLISTED_MODEL_COLOR = "gray"
