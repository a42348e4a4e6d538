"""Report tables built from group statistics."""

from __future__ import annotations

import math
from typing import Callable, Mapping, Sequence

import pandas as pd

from baseline_stats.analysis.durations import YearDurations, average, median
from baseline_stats.analysis.hierarchy import ALL_ID, GroupHierarchy, GroupNode
from baseline_stats.analysis.rollup import BaselineCounts, GroupStats


TIMELINE_NUMBER_COLUMNS: tuple[str, ...] = (
    "Date",
    "Widely available",
    "Newly available",
    "Implemented somewhere",
)
DURATION_COLUMNS: tuple[str, ...] = (
    "Year",
    "Maximum duration",
    "Average duration",
    "Median duration",
    "Minimum duration",
    "Number of features",
)
GROUP_COLUMNS: tuple[str, ...] = (
    "Group",
    "Widely available",
    "Newly available",
    "Limited availability",
    "Discouraged",
)

GroupSortKey = Callable[[BaselineCounts], tuple[int, ...]]


def widely_available_percent(counts: BaselineCounts) -> int:
    """Return the share of widely available features, rounded half up."""

    if counts.total == 0:
        return 0
    return math.floor(counts.high / counts.total * 100 + 0.5)


def _by_total(counts: BaselineCounts) -> tuple[int, ...]:
    return (-counts.total,)


def _by_percent(counts: BaselineCounts) -> tuple[int, ...]:
    return (-widely_available_percent(counts), -counts.total)


def _by_low(counts: BaselineCounts) -> tuple[int, ...]:
    return (-counts.low,)


def _by_limited(counts: BaselineCounts) -> tuple[int, ...]:
    return (-counts.limited,)


# Report name -> (sort key, whether the "All features" group is listed).
GROUP_REPORTS: dict[str, tuple[GroupSortKey, bool]] = {
    "groups-features": (_by_total, False),
    "groups-percent": (_by_percent, True),
    "groups-low": (_by_low, False),
    "groups-limited": (_by_limited, False),
}


def timeline_number_table(stats: GroupStats) -> pd.DataFrame:
    """Return per-date counts of widely, newly and somewhere available features.

    The cumulative counts overlap (a widely available feature is also newly
    available and implemented somewhere), so each column holds the
    difference with the next stricter class.
    """

    timeline = stats.timeline
    table = pd.DataFrame(
        {
            "Date": list(timeline.index),
            "Widely available": timeline["high"].to_list(),
            "Newly available": (timeline["low"] - timeline["high"]).to_list(),
            "Implemented somewhere": (timeline["first"] - timeline["low"]).to_list(),
        },
        columns=list(TIMELINE_NUMBER_COLUMNS),
    )
    return table


def duration_table(
    durations: Sequence[YearDurations], *, samples: str = "first2low"
) -> pd.DataFrame:
    """Summarize the ``samples`` durations of each year that has any."""

    if samples not in {"first2low", "low2high"}:
        raise ValueError(f"Unknown duration samples '{samples}'.")

    records: list[dict[str, object]] = []
    for entry in durations:
        values = getattr(entry, samples)
        if not values:
            continue
        records.append(
            {
                "Year": entry.year,
                "Maximum duration": values[-1],
                "Average duration": average(values),
                "Median duration": median(values),
                "Minimum duration": values[0],
                "Number of features": len(values),
            }
        )
    return pd.DataFrame.from_records(records, columns=list(DURATION_COLUMNS))


def group_table(
    hierarchy: GroupHierarchy,
    merged: Mapping[str, GroupStats],
    *,
    sort_key: GroupSortKey,
    include_all: bool = False,
) -> pd.DataFrame:
    """Return merged baseline counts of top-level groups, sorted by ``sort_key``."""

    nodes: list[GroupNode] = [
        node
        for node in hierarchy.top_level()
        if include_all or node.group_id != ALL_ID
    ]
    ordered = sorted(nodes, key=lambda node: sort_key(merged[node.group_id].baseline))

    records = [
        {
            "Group": node.fullname,
            "Widely available": merged[node.group_id].baseline.high,
            "Newly available": merged[node.group_id].baseline.low,
            "Limited availability": merged[node.group_id].baseline.limited,
            "Discouraged": merged[node.group_id].baseline.discouraged,
        }
        for node in ordered
    ]
    return pd.DataFrame.from_records(records, columns=list(GROUP_COLUMNS))


def build_report_tables(
    hierarchy: GroupHierarchy,
    specific: Mapping[str, GroupStats],
    merged: Mapping[str, GroupStats],
) -> dict[str, pd.DataFrame]:
    """Return every report table keyed by report name."""

    all_stats = specific[ALL_ID]
    tables: dict[str, pd.DataFrame] = {
        "timeline-number": timeline_number_table(all_stats),
        "timeline-durations": duration_table(all_stats.durations, samples="first2low"),
        "timeline-durations-high": duration_table(all_stats.durations, samples="low2high"),
    }
    for name, (sort_key, include_all) in GROUP_REPORTS.items():
        tables[name] = group_table(
            hierarchy, merged, sort_key=sort_key, include_all=include_all
        )
    return tables


__all__ = [
    "DURATION_COLUMNS",
    "GROUP_COLUMNS",
    "GROUP_REPORTS",
    "TIMELINE_NUMBER_COLUMNS",
    "build_report_tables",
    "duration_table",
    "group_table",
    "timeline_number_table",
    "widely_available_percent",
]
