"""Payload contract helpers for the web-features ``data.json`` file.

The dataset is produced upstream and its schema evolves between releases.
These assertions guard the pipeline against drift by checking the minimum
structure the loaders rely on before any record is converted.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


DATASET_REQUIRED_KEYS: frozenset[str] = frozenset(
    {"browsers", "features", "groups", "snapshots"}
)
BROWSER_REQUIRED_KEYS: frozenset[str] = frozenset({"releases"})
FEATURE_REQUIRED_KEYS: frozenset[str] = frozenset({"status"})
STATUS_REQUIRED_KEYS: frozenset[str] = frozenset({"support"})

_MAX_REPORTED_ENTRIES = 5


def _missing_keys(entry: Any, required: Iterable[str]) -> set[str]:
    if not isinstance(entry, Mapping):
        return set(required)
    return set(required) - set(entry)


def _format_offenders(offenders: list[str]) -> str:
    shown = ", ".join(offenders[:_MAX_REPORTED_ENTRIES])
    if len(offenders) > _MAX_REPORTED_ENTRIES:
        shown += f" and {len(offenders) - _MAX_REPORTED_ENTRIES} more"
    return shown


def is_feature_entry(entry: Mapping[str, Any]) -> bool:
    """Return ``True`` for real features, ``False`` for moved/split redirects."""

    kind = entry.get("kind")
    return kind is None or kind == "feature"


def assert_dataset_contract(payload: Any) -> None:
    """Raise ``ValueError`` if ``payload`` does not look like a web-features dataset.

    Args:
        payload: Decoded ``data.json`` content.

    Raises:
        ValueError: When a top-level collection is missing, or when browser
            or feature entries lack the keys the loaders read.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("Dataset must be a JSON object at the root.")

    missing = _missing_keys(payload, DATASET_REQUIRED_KEYS)
    if missing:
        raise ValueError(
            f"Dataset missing required collections: {', '.join(sorted(missing))}."
        )

    for key in DATASET_REQUIRED_KEYS:
        if not isinstance(payload[key], Mapping):
            raise ValueError(f"Dataset collection '{key}' must be an object.")

    broken_browsers = sorted(
        browser_id
        for browser_id, browser in payload["browsers"].items()
        if _missing_keys(browser, BROWSER_REQUIRED_KEYS)
    )
    if broken_browsers:
        raise ValueError(
            "Browsers missing 'releases': " f"{_format_offenders(broken_browsers)}."
        )

    broken_features: list[str] = []
    for name, feature in payload["features"].items():
        if not isinstance(feature, Mapping):
            broken_features.append(name)
            continue
        if not is_feature_entry(feature):
            continue
        if _missing_keys(feature, FEATURE_REQUIRED_KEYS) or _missing_keys(
            feature["status"], STATUS_REQUIRED_KEYS
        ):
            broken_features.append(name)
    if broken_features:
        raise ValueError(
            "Features missing 'status.support': "
            f"{_format_offenders(sorted(broken_features))}."
        )


__all__ = [
    "BROWSER_REQUIRED_KEYS",
    "DATASET_REQUIRED_KEYS",
    "FEATURE_REQUIRED_KEYS",
    "STATUS_REQUIRED_KEYS",
    "assert_dataset_contract",
    "is_feature_entry",
]
