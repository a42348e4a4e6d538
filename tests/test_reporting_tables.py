from __future__ import annotations

import pandas as pd
import pytest

from baseline_stats.analysis.durations import YearDurations
from baseline_stats.analysis.rollup import BaselineCounts
from baseline_stats.ingest.records import Dataset
from baseline_stats.pipeline.run import compute_statistics
from baseline_stats.reporting.tables import (
    DURATION_COLUMNS,
    GROUP_COLUMNS,
    TIMELINE_NUMBER_COLUMNS,
    build_report_tables,
    duration_table,
    widely_available_percent,
)


@pytest.fixture()
def tables(sample_dataset: Dataset) -> dict[str, pd.DataFrame]:
    statistics = compute_statistics(sample_dataset)
    return build_report_tables(statistics.hierarchy, statistics.specific, statistics.merged)


def _rows(table: pd.DataFrame) -> list[list[object]]:
    return [list(row) for row in table.itertuples(index=False, name=None)]


def test_report_names(tables: dict[str, pd.DataFrame]) -> None:
    assert list(tables) == [
        "timeline-number",
        "timeline-durations",
        "timeline-durations-high",
        "groups-features",
        "groups-percent",
        "groups-low",
        "groups-limited",
    ]


def test_timeline_number_reports_deltas(tables: dict[str, pd.DataFrame]) -> None:
    table = tables["timeline-number"]

    assert list(table.columns) == list(TIMELINE_NUMBER_COLUMNS)
    assert _rows(table) == [
        ["2019-06-01", 0, 0, 2],
        ["2019-09-01", 0, 0, 4],
        ["2020-01-01", 0, 2, 2],
        ["2020-03-01", 0, 2, 3],
        ["2021-01-01", 1, 1, 3],
        ["2021-02-01", 1, 3, 1],
        ["2022-07-01", 2, 2, 1],
    ]


def test_timeline_durations_skip_empty_years(tables: dict[str, pd.DataFrame]) -> None:
    table = tables["timeline-durations"]

    assert list(table.columns) == list(DURATION_COLUMNS)
    assert _rows(table) == [
        ["2020", 214, 168, 214, 122, 2],
        ["2021", 611, 474, 611, 337, 2],
    ]


def test_timeline_durations_high(tables: dict[str, pd.DataFrame]) -> None:
    assert _rows(tables["timeline-durations-high"]) == [
        ["2021", 366, 366, 366, 366, 1],
        ["2022", 912, 912, 912, 912, 1],
    ]


def test_groups_sorted_by_total(tables: dict[str, pd.DataFrame]) -> None:
    table = tables["groups-features"]

    assert list(table.columns) == list(GROUP_COLUMNS)
    assert _rows(table) == [
        ["CSS", 2, 1, 0, 0],
        ["JavaScript", 1, 0, 0, 1],
        ["Ungrouped features", 0, 0, 2, 0],
    ]


def test_groups_sorted_by_percent_include_all_features(tables: dict[str, pd.DataFrame]) -> None:
    assert [row[0] for row in _rows(tables["groups-percent"])] == [
        "CSS",
        "JavaScript",
        "All features",
        "Ungrouped features",
    ]


def test_groups_sorted_by_low_and_limited(tables: dict[str, pd.DataFrame]) -> None:
    assert [row[0] for row in _rows(tables["groups-low"])] == [
        "CSS",
        "JavaScript",
        "Ungrouped features",
    ]
    assert [row[0] for row in _rows(tables["groups-limited"])] == [
        "Ungrouped features",
        "CSS",
        "JavaScript",
    ]


def test_subgroups_are_not_listed(tables: dict[str, pd.DataFrame]) -> None:
    for name in ("groups-features", "groups-percent", "groups-low", "groups-limited"):
        assert not any(" > " in row[0] for row in _rows(tables[name]))


@pytest.mark.parametrize(
    ("counts", "expected"),
    [
        (BaselineCounts(high=2, low=1), 67),
        (BaselineCounts(high=1, low=1), 50),
        (BaselineCounts(high=1, low=7), 13),
        (BaselineCounts(high=1, low=199), 1),
        (BaselineCounts(), 0),
    ],
)
def test_widely_available_percent(counts: BaselineCounts, expected: int) -> None:
    assert widely_available_percent(counts) == expected


def test_duration_table_empty_when_no_samples() -> None:
    table = duration_table([YearDurations(year="2020")])

    assert table.empty
    assert list(table.columns) == list(DURATION_COLUMNS)


def test_duration_table_rejects_unknown_samples() -> None:
    with pytest.raises(ValueError):
        duration_table([], samples="first2high")
