"""Report pipeline from the web-features dataset to the report files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import pandas as pd

from baseline_stats.analysis.classify import GroupBuckets, aggregate_features
from baseline_stats.analysis.hierarchy import ALL_ID, GroupHierarchy, build_hierarchy
from baseline_stats.analysis.implementation import DateAxis, resolve_first_implementation_dates
from baseline_stats.analysis.normalize import strip_approximations
from baseline_stats.analysis.rollup import GroupStats, compute_merged_stats, compute_specific_stats
from baseline_stats.charts.datawrapper import DatawrapperClient, load_api_token, publish_reports
from baseline_stats.config import Config, load_config
from baseline_stats.ingest.dataset import load_dataset
from baseline_stats.ingest.records import Dataset, Feature
from baseline_stats.reporting.plots import plot_group_availability, plot_timeline
from baseline_stats.reporting.tables import build_report_tables
from baseline_stats.reporting.writer import render_table, write_reports

LOGGER = logging.getLogger(__name__)

_CHARTS_SUBDIR = "charts"
_PLOTS_SUBDIR = "plots"
_GROUP_PLOT_TITLES = {
    "groups-features": "Groups sorted by total number of features",
    "groups-percent": "Groups sorted by percentage of widely available features",
    "groups-low": "Groups sorted by number of newly available features",
    "groups-limited": "Groups sorted by number of features with limited availability",
}


@dataclass(slots=True)
class Statistics:
    """Everything derived from one dataset, in pipeline order."""

    features: Mapping[str, Feature]
    approximate_count: int
    axis: DateAxis
    hierarchy: GroupHierarchy
    buckets: Mapping[str, GroupBuckets]
    specific: Mapping[str, GroupStats]
    merged: Mapping[str, GroupStats]


@dataclass(slots=True)
class ReportRunResult:
    """Summary of a report run and the files it produced."""

    statistics: Statistics
    tables: dict[str, pd.DataFrame]
    report_paths: dict[str, Path]
    plot_paths: dict[str, Path] = field(default_factory=dict)
    chart_images: dict[str, Path] = field(default_factory=dict)
    published: bool = False


def compute_statistics(dataset: Dataset) -> Statistics:
    """Run the analysis stages over ``dataset``.

    Raises :class:`~baseline_stats.errors.DatasetIntegrityError` (or one of
    its subclasses) when the dataset is inconsistent.
    """

    normalized = strip_approximations(dataset.features)
    resolved = resolve_first_implementation_dates(normalized.features, dataset.browsers)
    hierarchy = build_hierarchy(dataset.groups)
    buckets = aggregate_features(resolved.features, hierarchy, resolved.axis)
    specific = compute_specific_stats(buckets, resolved.axis, resolved.features)
    merged = compute_merged_stats(hierarchy, specific)

    totals = merged[ALL_ID].baseline
    LOGGER.info("%d features in total", totals.total)
    LOGGER.info("%d widely available", totals.high)
    LOGGER.info("%d newly available", totals.low)
    LOGGER.info("%d with limited availability", totals.limited)
    LOGGER.info("%d discouraged", totals.discouraged)

    return Statistics(
        features=resolved.features,
        approximate_count=normalized.approximate_count,
        axis=resolved.axis,
        hierarchy=hierarchy,
        buckets=buckets,
        specific=specific,
        merged=merged,
    )


def run_report_pipeline(
    *,
    config: Config | None = None,
    config_path: str | Path | None = None,
    dataset_path: str | Path | None = None,
    output_dir: str | Path | None = None,
    plots: bool = False,
    publish: bool = False,
    best_effort: bool = False,
    client: DatawrapperClient | None = None,
) -> ReportRunResult:
    """Compute the statistics, write the reports and optionally publish them.

    Explicit ``dataset_path``/``output_dir`` arguments take precedence over
    the configured paths. Publishing is skipped with a warning when no API
    token is available.
    """

    cfg = config or load_config(config_path)
    source = Path(dataset_path) if dataset_path is not None else Path(cfg.paths.dataset_path)
    destination = Path(output_dir) if output_dir is not None else Path(cfg.paths.output_dir)

    dataset = load_dataset(source)
    statistics = compute_statistics(dataset)

    tables = build_report_tables(statistics.hierarchy, statistics.specific, statistics.merged)
    report_paths = write_reports(tables, destination)
    result = ReportRunResult(statistics=statistics, tables=tables, report_paths=report_paths)

    if plots:
        result.plot_paths = _render_plots(tables, destination / _PLOTS_SUBDIR)

    if publish:
        active_client = client or _build_client(cfg)
        if active_client is None:
            LOGGER.warning(
                "No Datawrapper API token found in $%s or %s; skipping chart publishing",
                cfg.datawrapper.token_env,
                cfg.datawrapper.token_path,
            )
        else:
            result.chart_images = publish_reports(
                active_client,
                {name: render_table(table) for name, table in tables.items()},
                cfg.datawrapper.charts,
                image_dir=destination / _CHARTS_SUBDIR,
                best_effort=best_effort,
            )
            result.published = True

    return result


def _build_client(config: Config) -> DatawrapperClient | None:
    token = load_api_token(config.datawrapper.token_path, env_var=config.datawrapper.token_env)
    if token is None:
        return None
    return DatawrapperClient(
        token,
        base_url=config.datawrapper.base_url,
        timeout=config.datawrapper.timeout,
    )


def _render_plots(tables: Mapping[str, pd.DataFrame], plots_dir: Path) -> dict[str, Path]:
    paths = {
        "timeline-number": plot_timeline(
            tables["timeline-number"], path=plots_dir / "timeline-number.png"
        )
    }
    for name, title in _GROUP_PLOT_TITLES.items():
        paths[name] = plot_group_availability(
            tables[name], path=plots_dir / f"{name}.png", title=title
        )
    return paths


__all__ = ["ReportRunResult", "Statistics", "compute_statistics", "run_report_pipeline"]
