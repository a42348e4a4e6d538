"""Baseline classification of features and bucketing into groups."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Mapping

from baseline_stats.errors import DatasetIntegrityError, UndefinedBaselineError
from baseline_stats.ingest.records import Feature

from .hierarchy import ALL_ID, UNGROUPED_ID, GroupHierarchy
from .implementation import DateAxis


LOGGER = logging.getLogger(__name__)


class BaselineStatus(str, Enum):
    """Availability classes a feature can fall in."""

    HIGH = "high"
    LOW = "low"
    LIMITED = "limited"
    DISCOURAGED = "discouraged"


_BASELINE_VALUES: Final[dict[object, BaselineStatus]] = {
    "high": BaselineStatus.HIGH,
    "low": BaselineStatus.LOW,
}


def classify_feature(feature: Feature) -> BaselineStatus:
    """Return the availability class of ``feature``.

    Raises
    ------
    UndefinedBaselineError
        When the feature is not discouraged and has no baseline status.
    DatasetIntegrityError
        When the baseline value is not one the dataset defines.
    """

    if feature.discouraged:
        return BaselineStatus.DISCOURAGED
    if feature.baseline is None:
        raise UndefinedBaselineError(feature.name)
    if feature.baseline is False:
        return BaselineStatus.LIMITED
    try:
        return _BASELINE_VALUES[feature.baseline]
    except (KeyError, TypeError) as exc:
        raise DatasetIntegrityError(
            f"{feature.name} has an unexpected baseline status {feature.baseline!r}."
        ) from exc


@dataclass(slots=True)
class TimelineBucket:
    """Features that transitioned on a given date."""

    date: str
    high: list[str] = field(default_factory=list)
    low: list[str] = field(default_factory=list)
    first: list[str] = field(default_factory=list)


@dataclass(slots=True)
class GroupBuckets:
    """Feature names collected for one group."""

    group_id: str
    features: list[str] = field(default_factory=list)
    baseline: dict[BaselineStatus, list[str]] = field(
        default_factory=lambda: {status: [] for status in BaselineStatus}
    )
    timeline: dict[str, TimelineBucket] = field(default_factory=dict)

    @classmethod
    def empty(cls, group_id: str, axis: DateAxis) -> "GroupBuckets":
        return cls(
            group_id=group_id,
            timeline={date: TimelineBucket(date=date) for date in axis.dates},
        )

    def add(self, feature: Feature, status: BaselineStatus) -> None:
        self.features.append(feature.name)
        self.baseline[status].append(feature.name)
        if feature.baseline_high_date:
            self._bucket(feature, feature.baseline_high_date).high.append(feature.name)
        if feature.baseline_low_date:
            self._bucket(feature, feature.baseline_low_date).low.append(feature.name)
        if feature.first_implementation_date:
            self._bucket(feature, feature.first_implementation_date).first.append(feature.name)

    def _bucket(self, feature: Feature, date: str) -> TimelineBucket:
        try:
            return self.timeline[date]
        except KeyError as exc:
            raise DatasetIntegrityError(
                f"{feature.name} has date {date} which is not on the timeline of group "
                f"'{self.group_id}'."
            ) from exc


def feature_group_ids(feature: Feature) -> tuple[str, ...]:
    """Return the explicit groups of ``feature``, or ``ungrouped``."""

    return feature.groups or (UNGROUPED_ID,)


def aggregate_features(
    features: Mapping[str, Feature],
    hierarchy: GroupHierarchy,
    axis: DateAxis,
) -> dict[str, GroupBuckets]:
    """Bucket every feature into its groups and into the ``all`` group.

    Every feature is classified before any bucket is filled so that an
    undefined baseline status aborts the run without partial results.
    """

    LOGGER.info("Compiling stats")
    statuses = {name: classify_feature(feature) for name, feature in features.items()}

    buckets = {node.group_id: GroupBuckets.empty(node.group_id, axis) for node in hierarchy}
    for name, feature in features.items():
        status = statuses[name]
        for group_id in feature_group_ids(feature):
            if group_id not in buckets:
                raise DatasetIntegrityError(f"{name} references unknown group '{group_id}'.")
            buckets[group_id].add(feature, status)
        buckets[ALL_ID].add(feature, status)

    return buckets


__all__ = [
    "BaselineStatus",
    "GroupBuckets",
    "TimelineBucket",
    "aggregate_features",
    "classify_feature",
    "feature_group_ids",
]
