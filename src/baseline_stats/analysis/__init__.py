"""Analytical stages turning web-features records into group statistics."""

from .classify import (
    BaselineStatus,
    GroupBuckets,
    TimelineBucket,
    aggregate_features,
    classify_feature,
)
from .durations import YearDurations, average, compile_durations, median
from .hierarchy import (
    ALL_ID,
    FULLNAME_SEPARATOR,
    UNGROUPED_ID,
    GroupHierarchy,
    GroupNode,
    build_hierarchy,
)
from .implementation import DateAxis, first_implementation_date, resolve_first_implementation_dates
from .normalize import NormalizationResult, strip_approximations
from .rollup import (
    BaselineCounts,
    GroupStats,
    compute_merged_stats,
    compute_specific_stats,
)

__all__ = [
    "ALL_ID",
    "BaselineCounts",
    "BaselineStatus",
    "DateAxis",
    "FULLNAME_SEPARATOR",
    "GroupBuckets",
    "GroupHierarchy",
    "GroupNode",
    "GroupStats",
    "NormalizationResult",
    "TimelineBucket",
    "UNGROUPED_ID",
    "YearDurations",
    "aggregate_features",
    "average",
    "build_hierarchy",
    "classify_feature",
    "compile_durations",
    "compute_merged_stats",
    "compute_specific_stats",
    "first_implementation_date",
    "median",
    "resolve_first_implementation_dates",
    "strip_approximations",
]
