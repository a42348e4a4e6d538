"""Pipeline entrypoints for baseline statistics reports."""

from .run import ReportRunResult, Statistics, compute_statistics, run_report_pipeline

__all__ = ["ReportRunResult", "Statistics", "compute_statistics", "run_report_pipeline"]
