"""Removal of uncertainty markers from recorded dates and versions."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Mapping

from baseline_stats.ingest.records import Feature


LOGGER = logging.getLogger(__name__)

APPROXIMATION_MARKER = "≤"


@dataclass(frozen=True)
class NormalizationResult:
    """Features with exact dates and the number that carried a marker."""

    features: Mapping[str, Feature]
    approximate_count: int


def _strip(value: str | None) -> tuple[str | None, bool]:
    if value is not None and value.startswith(APPROXIMATION_MARKER):
        return value[len(APPROXIMATION_MARKER) :], True
    return value, False


def strip_approximation(feature: Feature) -> tuple[Feature, bool]:
    """Return ``feature`` without ``≤`` markers and whether any was dropped."""

    low_date, low_changed = _strip(feature.baseline_low_date)
    high_date, high_changed = _strip(feature.baseline_high_date)

    support: dict[str, str] = {}
    support_changed = False
    for browser, version in feature.support.items():
        exact, changed = _strip(version)
        support[browser] = exact
        support_changed = support_changed or changed

    if not (low_changed or high_changed or support_changed):
        return feature, False

    updated = dataclasses.replace(
        feature,
        baseline_low_date=low_date,
        baseline_high_date=high_date,
        support=support,
    )
    return updated, True


def strip_approximations(features: Mapping[str, Feature]) -> NormalizationResult:
    """Drop ``≤`` markers from dates and versions of every feature.

    Approximate dates are treated as exact so that the date axis and the
    duration arithmetic only ever deal with comparable ISO dates.
    """

    LOGGER.info("Dropping approximation markers from dates and versions")
    normalized: dict[str, Feature] = {}
    approximate = 0
    for name, feature in features.items():
        normalized[name], changed = strip_approximation(feature)
        if changed:
            approximate += 1

    LOGGER.info("%d features found with a %s somewhere", approximate, APPROXIMATION_MARKER)
    return NormalizationResult(features=normalized, approximate_count=approximate)


__all__ = [
    "APPROXIMATION_MARKER",
    "NormalizationResult",
    "strip_approximation",
    "strip_approximations",
]
