"""Specific and merged statistics per group."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import pandas as pd

from baseline_stats.ingest.records import Feature

from .classify import BaselineStatus, GroupBuckets
from .durations import YearDurations, compile_durations
from .hierarchy import GroupHierarchy
from .implementation import DateAxis


TIMELINE_COLUMNS: tuple[str, ...] = ("high", "low", "first", "total")


@dataclass(frozen=True, slots=True)
class BaselineCounts:
    """Number of features per availability class."""

    high: int = 0
    low: int = 0
    limited: int = 0
    discouraged: int = 0

    @property
    def total(self) -> int:
        return self.high + self.low + self.limited + self.discouraged

    def __getitem__(self, status: BaselineStatus | str) -> int:
        return getattr(self, BaselineStatus(status).value)

    def __add__(self, other: "BaselineCounts") -> "BaselineCounts":
        return BaselineCounts(
            high=self.high + other.high,
            low=self.low + other.low,
            limited=self.limited + other.limited,
            discouraged=self.discouraged + other.discouraged,
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "high": self.high,
            "low": self.low,
            "limited": self.limited,
            "discouraged": self.discouraged,
            "total": self.total,
        }


@dataclass(frozen=True, eq=False)
class GroupStats:
    """Counts for a group.

    ``timeline`` is indexed by date and holds running totals of the
    ``high``, ``low`` and ``first`` transitions up to and including each
    date, plus their ``total``.
    """

    timeline: pd.DataFrame
    baseline: BaselineCounts
    durations: tuple[YearDurations, ...]

    def combine(self, other: "GroupStats") -> "GroupStats":
        """Return the sum of two groups' stats over the same date axis."""

        timeline = self.timeline.add(other.timeline, fill_value=0).astype("int64")
        other_years = {entry.year: entry for entry in other.durations}
        durations = []
        for entry in self.durations:
            extra = other_years.get(entry.year, YearDurations(year=entry.year))
            durations.append(
                YearDurations(
                    year=entry.year,
                    first2low=tuple(sorted(entry.first2low + extra.first2low)),
                    low2high=tuple(sorted(entry.low2high + extra.low2high)),
                )
            )
        return GroupStats(
            timeline=timeline[list(TIMELINE_COLUMNS)],
            baseline=self.baseline + other.baseline,
            durations=tuple(durations),
        )


def cumulative_timeline(buckets: GroupBuckets, axis: DateAxis) -> pd.DataFrame:
    """Return running totals of the timeline buckets along ``axis``."""

    entries = [buckets.timeline[date] for date in axis.dates]
    counts = pd.DataFrame(
        {
            "high": [len(entry.high) for entry in entries],
            "low": [len(entry.low) for entry in entries],
            "first": [len(entry.first) for entry in entries],
        },
        index=pd.Index(list(axis.dates), name="date", dtype="object"),
    ).astype("int64")

    cumulative = counts.cumsum()
    cumulative["total"] = cumulative["high"] + cumulative["low"] + cumulative["first"]
    return cumulative[list(TIMELINE_COLUMNS)].astype("int64")


def baseline_counts(buckets: GroupBuckets) -> BaselineCounts:
    return BaselineCounts(
        high=len(buckets.baseline[BaselineStatus.HIGH]),
        low=len(buckets.baseline[BaselineStatus.LOW]),
        limited=len(buckets.baseline[BaselineStatus.LIMITED]),
        discouraged=len(buckets.baseline[BaselineStatus.DISCOURAGED]),
    )


def compute_specific_stats(
    buckets: Mapping[str, GroupBuckets],
    axis: DateAxis,
    features: Mapping[str, Feature],
) -> dict[str, GroupStats]:
    """Compute each group's own stats, ignoring its subgroups."""

    return {
        group_id: GroupStats(
            timeline=cumulative_timeline(group_buckets, axis),
            baseline=baseline_counts(group_buckets),
            durations=compile_durations(group_buckets.features, features, axis.years),
        )
        for group_id, group_buckets in buckets.items()
    }


def compute_merged_stats(
    hierarchy: GroupHierarchy, specific: Mapping[str, GroupStats]
) -> dict[str, GroupStats]:
    """Add every group's descendants' specific stats to its own.

    The traversal follows direct children only and memoizes each group's
    merged stats, so every descendant is counted exactly once.
    """

    merged: dict[str, GroupStats] = {}

    def visit(group_id: str) -> GroupStats:
        if group_id in merged:
            return merged[group_id]
        stats = specific[group_id]
        for child_id in hierarchy[group_id].children:
            stats = stats.combine(visit(child_id))
        merged[group_id] = stats
        return stats

    for node in hierarchy:
        visit(node.group_id)
    return merged


__all__ = [
    "BaselineCounts",
    "GroupStats",
    "TIMELINE_COLUMNS",
    "baseline_counts",
    "compute_merged_stats",
    "compute_specific_stats",
    "cumulative_timeline",
]
