"""
Command-line entry points for summarizing scores and drawing figures.

Usage:
    ensemble-eval evaluate scores.csv --baseline FluSight-baseline -g season -g horizon -o summary.csv
    ensemble-eval plot-scores summary.csv -m FluSight-ensemble=blue -m FluSight-baseline=gray \
        --metric wis --horizon 1 --truth truth.csv -o figures/wis_h1.png
    ensemble-eval plot-truth truth.csv --start 2021-10-01 --end 2023-05-31 -o figures/truth.png
"""

import logging

import click
import matplotlib
matplotlib.use("Agg")
import matplotlib.colors as mcolors
import matplotlib.pyplot as plt

from .config import Config
from .evaluation import GroupKey, Metric, evaluate_scores
from . import loaders, plotting, validation


def _parse_model_colors(pairs):
    names, colors = [], []
    for pair in pairs:
        name, sep, color = pair.rpartition("=")
        if not sep or not name or not color:
            raise click.BadParameter(f"expected NAME=COLOR, got '{pair}'", param_hint="--model")
        if not mcolors.is_color_like(color):
            raise click.BadParameter(f"unknown color '{color}' for model '{name}'", param_hint="--model")
        names.append(name)
        colors.append(color)
    return names, colors


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages")
def main(verbose):
    """Evaluate ensemble forecasts against a baseline and plot the results"""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')


@main.command()
@click.argument("scores_csv", type=click.Path(exists=True, dir_okay=False))
@click.option("-b", "--baseline", required=True, help="Baseline model for relative WIS and MAE")
@click.option("-g", "--group-by", "group_by", multiple=True,
              type=click.Choice([k.value for k in GroupKey]),
              help="Grouping dimension (repeatable, order kept)")
@click.option("--us-only", is_flag=True, help="Without location grouping, summarize the US level instead of states")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False), help="Output CSV (default: print)")
def evaluate(scores_csv, baseline, group_by, us_only, output):
    """Summarize per-forecast scores relative to a baseline model"""
    try:
        scores = loaders.read_scores(scores_csv)
        summary = evaluate_scores(scores, list(group_by), baseline, us_only=us_only)
    except validation.ValidationError as e:
        raise click.ClickException(str(e))

    if output is None:
        click.echo(summary.to_string(index=False))
    else:
        summary.to_csv(output, index=False)
        click.echo(f"Summary written to {output}")


@main.command("plot-scores")
@click.argument("summary_csv", type=click.Path(exists=True, dir_okay=False))
@click.option("-m", "--model", "models", multiple=True, required=True,
              help="NAME=COLOR pair, repeat in legend order")
@click.option("--metric", default=Metric.WIS.value, type=click.Choice([m.value for m in Metric]))
@click.option("--horizon", default=1, type=int, show_default=True)
@click.option("--title", default=None)
@click.option("--truth", "truth_csv", default=None, type=click.Path(exists=True, dir_okay=False),
              help="Truth CSV to overlay (wis and mae only)")
@click.option("--truth-scale", default=Config.DEFAULT_TRUTH_SCALE, type=float, show_default=True)
@click.option("--date-col", default="forecast_date", show_default=True)
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False))
def plot_scores(summary_csv, models, metric, horizon, title, truth_csv, truth_scale, date_col, output):
    """Plot a summary metric against forecast date for one horizon"""
    model_order, model_colors = _parse_model_colors(models)
    try:
        summary = loaders.read_summary(summary_csv)
        truth = loaders.read_truth(truth_csv) if truth_csv else None
        fig = plotting.plot_scores_by_forecast_date(
            summary, model_order, model_colors, metric=metric, horizon=horizon,
            title=title, truth=truth, truth_scale=truth_scale, date_col=date_col,
            save_path=output,
        )
    except validation.ValidationError as e:
        raise click.ClickException(str(e))
    plt.close(fig)
    click.echo(f"Figure written to {output}")


@main.command("plot-truth")
@click.argument("truth_csv", type=click.Path(exists=True, dir_okay=False))
@click.option("--start", default=None, help="First forecast date to plot (YYYY-MM-DD)")
@click.option("--end", default=None, help="Last forecast date to plot (YYYY-MM-DD)")
@click.option("--title", default="truth data", show_default=True)
@click.option("--color", default="black", show_default=True)
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False))
def plot_truth(truth_csv, start, end, title, color, output):
    """Plot averaged truth against forecast date"""
    if (start is None) != (end is None):
        raise click.UsageError("--start and --end must be given together")
    date_range = (start, end) if start is not None else None
    try:
        truth = loaders.read_truth(truth_csv)
        fig = plotting.plot_truth(truth, date_range=date_range, title=title,
                                  color=color, save_path=output)
    except validation.ValidationError as e:
        raise click.ClickException(str(e))
    plt.close(fig)
    click.echo(f"Figure written to {output}")

