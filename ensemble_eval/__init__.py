"""
Ensemble Eval - Forecast score summaries and comparison plots.

This package provides modular components for evaluating ensemble forecasts
on epidemic-forecast hub outputs:

- ensemble_eval.evaluation: Grouped, baseline-relative score summaries
  - GroupKey, Metric, MetricRegistry: Closed sets of groupings and metrics
  - RelativeScore: Relative skill with explicit zero-baseline handling
  - evaluate_scores(): Summarize scores by season/horizon/forecast week/location

- ensemble_eval.truth: Truth series alignment shared by the plots
  - align_truth(): Lag-shift to forecast dates and average per date
  - rescale_truth(): Put truth on the scale of a plotted metric

- ensemble_eval.plotting: Manuscript figures
  - plot_scores_by_forecast_date(): Metric vs forecast date, with truth overlay
  - plot_truth(): Averaged truth vs forecast date

- ensemble_eval.validation: Data format validation functions
  - ValidationError: Custom exception for validation failures

Usage:
    import ensemble_eval.evaluation as evaluation
    import ensemble_eval.plotting as plotting

    summary = evaluation.evaluate_scores(scores, ["horizon", "forecast_week"], "FluSight-baseline")
    fig = plotting.plot_scores_by_forecast_date(summary, models, colors, metric="wis", horizon=1,
                                                date_col="forecast_week")
"""

__version__ = "0.1.0"

from . import config
from . import validation
from . import evaluation
from . import truth
from . import plotting
from . import loaders

__all__ = ['config', 'validation', 'evaluation', 'truth', 'plotting', 'loaders']
