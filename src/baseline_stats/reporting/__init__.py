"""Report tables, their serialization and chart previews."""

from .plots import plot_group_availability, plot_timeline
from .tables import (
    DURATION_COLUMNS,
    GROUP_COLUMNS,
    GROUP_REPORTS,
    TIMELINE_NUMBER_COLUMNS,
    build_report_tables,
    duration_table,
    group_table,
    timeline_number_table,
    widely_available_percent,
)
from .writer import render_table, write_report, write_reports

__all__ = [
    "DURATION_COLUMNS",
    "GROUP_COLUMNS",
    "GROUP_REPORTS",
    "TIMELINE_NUMBER_COLUMNS",
    "build_report_tables",
    "duration_table",
    "group_table",
    "plot_group_availability",
    "plot_timeline",
    "render_table",
    "timeline_number_table",
    "widely_available_percent",
    "write_report",
    "write_reports",
]
