"""Durations between availability milestones, bucketed per year."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Sequence

from baseline_stats.ingest.records import Feature


@dataclass(frozen=True, slots=True)
class YearDurations:
    """Day counts for one calendar year, sorted ascending.

    ``first2low`` holds the days from first implementation to newly
    available, ``low2high`` the days from newly to widely available.
    """

    year: str
    first2low: tuple[int, ...] = ()
    low2high: tuple[int, ...] = ()


def days_between(start: str, end: str) -> int:
    """Return the number of whole days from ISO date ``start`` to ``end``."""

    return (date.fromisoformat(end) - date.fromisoformat(start)).days


def compile_durations(
    member_names: Iterable[str],
    features: Mapping[str, Feature],
    years: Sequence[str],
) -> tuple[YearDurations, ...]:
    """Collect per-year duration samples for the given group members.

    A ``first2low`` sample is bucketed by the year of ``baseline_low_date``
    and a ``low2high`` sample by the year of ``baseline_high_date``. Samples
    whose start date is unknown are skipped.
    """

    first2low: dict[str, list[int]] = {year: [] for year in years}
    low2high: dict[str, list[int]] = {year: [] for year in years}

    for name in member_names:
        feature = features[name]
        low_date = feature.baseline_low_date
        high_date = feature.baseline_high_date
        if low_date and feature.first_implementation_date:
            first2low[low_date[:4]].append(
                days_between(feature.first_implementation_date, low_date)
            )
        if high_date and low_date:
            low2high[high_date[:4]].append(days_between(low_date, high_date))

    return tuple(
        YearDurations(
            year=year,
            first2low=tuple(sorted(first2low[year])),
            low2high=tuple(sorted(low2high[year])),
        )
        for year in years
    )


def median(values: Sequence[int]) -> int:
    """Return the element at index ``len(values) // 2`` of a sorted sequence.

    For an even number of samples this picks the upper middle element rather
    than averaging the two middle ones.
    """

    if not values:
        raise ValueError("Cannot compute the median of an empty sequence.")
    return values[len(values) // 2]


def average(values: Sequence[int]) -> int:
    """Return the arithmetic mean rounded down to an integer."""

    if not values:
        raise ValueError("Cannot compute the average of an empty sequence.")
    return sum(values) // len(values)


__all__ = ["YearDurations", "average", "compile_durations", "days_between", "median"]
