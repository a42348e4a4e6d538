"""Command-line interface for web-features baseline statistics."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from baseline_stats.charts.datawrapper import ChartPublishError
from baseline_stats.config import DEFAULT_CONFIG_PATH, Config, ConfigError, load_config
from baseline_stats.errors import DatasetIntegrityError
from baseline_stats.ingest.dataset import DatasetDownloadError, download_dataset
from baseline_stats.logging_setup import setup_logging
from baseline_stats.pipeline.run import run_report_pipeline


LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Derive baseline statistics tables from the web-features dataset.")


def _resolve_config_path(config: Optional[Path]) -> Path:
    return Path(config) if config is not None else DEFAULT_CONFIG_PATH


def _load_cli_config(config: Optional[Path]) -> Config:
    try:
        return load_config(_resolve_config_path(config))
    except ConfigError as exc:
        LOGGER.error("%s", exc)
        raise typer.Exit(code=1) from exc


@app.command()
def download(
    config: Optional[Path] = typer.Option(
        None, "--config", help="Path to configuration YAML.", exists=True, dir_okay=False
    ),
    dataset: Optional[Path] = typer.Option(
        None, "--dataset", help="Where to write data.json (defaults to paths.dataset_path)."
    ),
    url: Optional[str] = typer.Option(None, "--url", help="Override the dataset URL."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
) -> None:
    """Download the latest web-features data.json."""

    setup_logging(log_level)
    config_obj = _load_cli_config(config)
    destination = dataset if dataset is not None else Path(config_obj.paths.dataset_path)

    try:
        path = download_dataset(destination, url=url or config_obj.dataset.url)
    except (DatasetDownloadError, ValueError) as exc:
        LOGGER.error("%s", exc)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Dataset written to {path}")


@app.command()
def build(
    config: Optional[Path] = typer.Option(
        None, "--config", help="Path to configuration YAML.", exists=True, dir_okay=False
    ),
    dataset: Optional[Path] = typer.Option(
        None, "--dataset", help="Path to data.json (defaults to paths.dataset_path)."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", help="Directory for the report files (defaults to paths.output_dir)."
    ),
    plots: bool = typer.Option(False, "--plots", help="Also render PNG previews of the reports."),
    publish: bool = typer.Option(
        False, "--publish", help="Publish the reports to the configured Datawrapper charts."
    ),
    best_effort: bool = typer.Option(
        False,
        "--best-effort",
        help="Log chart publishing failures instead of aborting the run.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
) -> None:
    """Compute the statistics and write the report tables."""

    setup_logging(log_level)
    config_obj = _load_cli_config(config)

    try:
        result = run_report_pipeline(
            config=config_obj,
            dataset_path=dataset,
            output_dir=output_dir,
            plots=plots,
            publish=publish,
            best_effort=best_effort,
        )
    except (DatasetIntegrityError, ChartPublishError, FileNotFoundError, ValueError) as exc:
        LOGGER.error("%s", exc)
        raise typer.Exit(code=1) from exc

    for path in result.report_paths.values():
        typer.echo(f"Wrote {path}")
    for path in result.plot_paths.values():
        typer.echo(f"Rendered {path}")
    for path in result.chart_images.values():
        typer.echo(f"Exported {path}")


def main() -> None:
    """Entry point for console scripts."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()


__all__ = ["app", "main"]
