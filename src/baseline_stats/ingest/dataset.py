"""Loading and downloading of the web-features dataset.

The dataset ships as a single ``data.json`` asset with every web-features
release. This module downloads that asset, validates its structure and
converts the raw JSON into the typed records used by the analysis stages.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import requests

from baseline_stats.config import DEFAULT_DATASET_URL

from .contracts import assert_dataset_contract, is_feature_entry
from .records import Browser, Dataset, Feature, GroupDefinition, Release


LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = 60.0


class DatasetDownloadError(RuntimeError):
    """Raised when the dataset cannot be downloaded."""


def load_dataset(path: str | Path) -> Dataset:
    """Read ``data.json`` from ``path`` and return the typed dataset."""

    dataset_path = Path(path)
    if not dataset_path.exists():
        raise FileNotFoundError(
            f"Dataset '{dataset_path}' not found. Run 'download' first or pass --dataset."
        )

    LOGGER.info("Loading web-features dataset from %s", dataset_path)
    with dataset_path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)

    return parse_dataset(payload)


def parse_dataset(payload: Mapping[str, Any]) -> Dataset:
    """Convert a decoded ``data.json`` payload into a :class:`Dataset`."""

    assert_dataset_contract(payload)

    browsers = {
        browser_id: _parse_browser(browser_id, entry)
        for browser_id, entry in payload["browsers"].items()
    }

    features: dict[str, Feature] = {}
    skipped = 0
    for name, entry in payload["features"].items():
        if not is_feature_entry(entry):
            skipped += 1
            continue
        features[name] = _parse_feature(name, entry)
    if skipped:
        LOGGER.debug("Skipped %d moved or split feature entries", skipped)

    groups = {
        group_id: GroupDefinition(
            group_id=group_id,
            name=str(entry.get("name", group_id)),
            parent=entry.get("parent"),
        )
        for group_id, entry in payload["groups"].items()
    }

    LOGGER.info(
        "Loaded %d browsers, %d features and %d groups",
        len(browsers),
        len(features),
        len(groups),
    )
    return Dataset(
        browsers=browsers,
        features=features,
        groups=groups,
        snapshots=dict(payload["snapshots"]),
    )


def download_dataset(
    destination: str | Path,
    *,
    url: str = DEFAULT_DATASET_URL,
    timeout: float = _DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> Path:
    """Download ``data.json`` from ``url`` and write it to ``destination``."""

    destination_path = Path(destination)
    http = session or requests.Session()

    LOGGER.info("Downloading web-features dataset from %s", url)
    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise DatasetDownloadError(f"Could not download dataset from '{url}': {exc}") from exc

    if response.status_code >= 400:
        raise DatasetDownloadError(
            f"Dataset download from '{url}' failed with status {response.status_code}."
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise DatasetDownloadError(f"Dataset at '{url}' is not valid JSON.") from exc
    assert_dataset_contract(payload)

    destination_path.parent.mkdir(parents=True, exist_ok=True)
    destination_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    LOGGER.info("Dataset written to %s", destination_path)
    return destination_path


def _parse_browser(browser_id: str, entry: Mapping[str, Any]) -> Browser:
    releases = tuple(
        Release(version=str(release["version"]), date=str(release["date"]))
        for release in entry["releases"]
    )
    return Browser(browser_id=browser_id, name=str(entry.get("name", browser_id)), releases=releases)


def _parse_feature(name: str, entry: Mapping[str, Any]) -> Feature:
    status = entry["status"]

    raw_group = entry.get("group")
    if raw_group is None:
        groups: tuple[str, ...] = ()
    elif isinstance(raw_group, str):
        groups = (raw_group,)
    else:
        groups = tuple(str(group_id) for group_id in raw_group)

    return Feature(
        name=name,
        baseline=status.get("baseline"),
        discouraged=bool(entry.get("discouraged")),
        groups=groups,
        support={str(browser): str(version) for browser, version in status["support"].items()},
        baseline_low_date=status.get("baseline_low_date"),
        baseline_high_date=status.get("baseline_high_date"),
    )


__all__ = ["DatasetDownloadError", "download_dataset", "load_dataset", "parse_dataset"]
