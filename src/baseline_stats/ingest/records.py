"""Typed records for the web-features dataset."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


BaselineValue = str | bool | None


@dataclass(frozen=True, slots=True)
class Release:
    """A single browser release."""

    version: str
    date: str


@dataclass(frozen=True, slots=True)
class Browser:
    """A browser and its ordered release history."""

    browser_id: str
    name: str
    releases: tuple[Release, ...]

    def release_date(self, version: str) -> str | None:
        """Return the release date for ``version`` or ``None`` when unknown."""

        for release in self.releases:
            if release.version == version:
                return release.date
        return None


@dataclass(frozen=True, slots=True)
class Feature:
    """A web platform feature and its baseline status.

    ``baseline`` is ``"high"``, ``"low"``, ``False`` (limited availability) or
    ``None`` when the dataset leaves the status undefined.
    """

    name: str
    baseline: BaselineValue
    discouraged: bool = False
    groups: tuple[str, ...] = ()
    support: Mapping[str, str] = field(default_factory=dict)
    baseline_low_date: str | None = None
    baseline_high_date: str | None = None
    first_implementation_date: str | None = None


@dataclass(frozen=True, slots=True)
class GroupDefinition:
    """A feature group as declared in the dataset."""

    group_id: str
    name: str
    parent: str | None = None


@dataclass(frozen=True, slots=True)
class Dataset:
    """All collections exposed by a web-features release."""

    browsers: Mapping[str, Browser]
    features: Mapping[str, Feature]
    groups: Mapping[str, GroupDefinition]
    snapshots: Mapping[str, Any] = field(default_factory=dict)


__all__ = [
    "BaselineValue",
    "Browser",
    "Dataset",
    "Feature",
    "GroupDefinition",
    "Release",
]
