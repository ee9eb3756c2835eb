"""
Pytest fixtures for ensemble evaluation tests.
"""

import pytest
import pandas as pd
from pathlib import Path
import sys

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def scores_df():
    """Small score table: two models, US plus two states, two seasons, two horizons."""
    rows = []
    dates = ["2022-01-10", "2022-01-17", "2022-10-17", "2022-10-24"]
    wis_by_model = {"FluSight-baseline": 10.0, "FluSight-ensemble": 6.0, "median-ensemble": 8.0}
    for model, base_wis in wis_by_model.items():
        for i, date in enumerate(dates):
            for horizon in [1, 2]:
                for location, loc_scale in [("US", 10.0), ("06", 1.0), ("36", 2.0)]:
                    wis = base_wis * loc_scale * horizon + i
                    rows.append({
                        "model": model,
                        "forecast_date": pd.Timestamp(date),
                        "horizon": horizon,
                        "location": location,
                        "wis": wis,
                        "abs_error": wis * 1.5,
                        "coverage_50": 0.5 if model != "FluSight-baseline" else 0.25,
                        "coverage_95": 1.0 if i % 2 == 0 else 0.0,
                    })
    return pd.DataFrame(rows)


@pytest.fixture
def truth_df():
    """Weekly truth (Saturdays) for US and two states spanning the season cutoff."""
    saturdays = pd.date_range("2022-01-15", "2022-10-29", freq="W-SAT")
    rows = []
    for k, date in enumerate(saturdays):
        for location, value in [("US", 1000.0 + 10 * k), ("06", 100.0 + k), ("36", 50.0)]:
            rows.append({"target_end_date": date, "location": location, "value": value})
    return pd.DataFrame(rows)


@pytest.fixture
def summary_df():
    """Summary table with one row per model, forecast date and horizon."""
    dates = pd.date_range("2022-01-10", periods=6, freq="W-MON")
    rows = []
    for model, level in [("FluSight-baseline", 20.0), ("FluSight-ensemble", 12.0)]:
        for horizon in [1, 2]:
            for k, date in enumerate(dates):
                rows.append({
                    "model": model,
                    "forecast_date": date,
                    "horizon": horizon,
                    "wis": level * horizon + k,
                    "mae": 1.5 * (level * horizon + k),
                    "cov50": 0.4,
                    "cov95": 0.9,
                    "rwis": 1.0,
                    "rmae": 1.0,
                })
    return pd.DataFrame(rows)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
