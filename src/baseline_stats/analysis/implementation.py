"""First implementation dates and the global date axis."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from baseline_stats.errors import DatasetIntegrityError
from baseline_stats.ingest.records import Browser, Feature


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateAxis:
    """Sorted distinct dates and years every timeline is bucketed on."""

    dates: tuple[str, ...]
    years: tuple[str, ...]

    @classmethod
    def from_dates(cls, dates: Iterable[str]) -> "DateAxis":
        ordered = tuple(sorted(set(dates)))
        years = tuple(sorted({date[:4] for date in ordered}))
        return cls(dates=ordered, years=years)

    def __contains__(self, date: object) -> bool:
        return date in self.dates


@dataclass(frozen=True)
class ResolutionResult:
    features: Mapping[str, Feature]
    axis: DateAxis


def first_implementation_date(
    feature: Feature, browsers: Mapping[str, Browser]
) -> str | None:
    """Return the earliest release date among the feature's support entries.

    Features that do not ship anywhere have no support entries and get no
    date. A support entry that points at an unknown browser or version is a
    data integrity problem and raises :class:`DatasetIntegrityError`.
    """

    dates: list[str] = []
    for browser_id, version in feature.support.items():
        browser = browsers.get(browser_id)
        if browser is None:
            raise DatasetIntegrityError(
                f"{feature.name} references unknown browser '{browser_id}'."
            )
        release_date = browser.release_date(version)
        if release_date is None:
            raise DatasetIntegrityError(
                f"{feature.name} references unknown {browser_id} version '{version}'."
            )
        dates.append(release_date)

    return min(dates) if dates else None


def resolve_first_implementation_dates(
    features: Mapping[str, Feature], browsers: Mapping[str, Browser]
) -> ResolutionResult:
    """Compute ``first_implementation_date`` per feature and the date axis."""

    LOGGER.info("Computing first implementation dates")
    resolved: dict[str, Feature] = {}
    dates: set[str] = set()
    for name, feature in features.items():
        first = first_implementation_date(feature, browsers)
        resolved[name] = dataclasses.replace(feature, first_implementation_date=first)
        for date in (feature.baseline_high_date, feature.baseline_low_date, first):
            if date:
                dates.add(date)

    axis = DateAxis.from_dates(dates)
    if axis.dates:
        LOGGER.info(
            "%d dates from %s to %s", len(axis.dates), axis.dates[0], axis.dates[-1]
        )
    else:
        LOGGER.warning("No dates found in dataset")
    return ResolutionResult(features=resolved, axis=axis)


__all__ = [
    "DateAxis",
    "ResolutionResult",
    "first_implementation_date",
    "resolve_first_implementation_dates",
]
