"""Shared fixtures: a small web-features dataset with known statistics."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from baseline_stats.ingest.dataset import parse_dataset
from baseline_stats.ingest.records import Dataset


def build_payload() -> dict[str, Any]:
    return {
        "browsers": {
            "chrome": {
                "name": "Chrome",
                "releases": [
                    {"version": "1", "date": "2019-06-01"},
                    {"version": "2", "date": "2020-03-01"},
                    {"version": "3", "date": "2021-05-01"},
                ],
            },
            "firefox": {
                "name": "Firefox",
                "releases": [
                    {"version": "10", "date": "2019-09-01"},
                    {"version": "20", "date": "2020-01-01"},
                    {"version": "30", "date": "2021-02-01"},
                ],
            },
        },
        "groups": {
            "css": {"name": "CSS"},
            "css-grid": {"name": "Grid", "parent": "css"},
            "css-subgrid": {"name": "Subgrid", "parent": "css-grid"},
            "js": {"name": "JavaScript"},
        },
        "features": {
            "grid": {
                "kind": "feature",
                "name": "Grid",
                "group": "css-grid",
                "status": {
                    "baseline": "high",
                    "baseline_low_date": "2020-01-01",
                    "baseline_high_date": "2021-01-01",
                    "support": {"chrome": "1", "firefox": "20"},
                },
            },
            "subgrid": {
                "kind": "feature",
                "name": "Subgrid",
                "group": "css-subgrid",
                "status": {
                    "baseline": "low",
                    "baseline_low_date": "≤2021-02-01",
                    "support": {"chrome": "≤2", "firefox": "30"},
                },
            },
            "promises": {
                "kind": "feature",
                "name": "Promises",
                "group": ["js", "css"],
                "status": {
                    "baseline": "high",
                    "baseline_low_date": "2020-01-01",
                    "baseline_high_date": "2022-07-01",
                    "support": {"firefox": "10"},
                },
            },
            "marquee": {
                "kind": "feature",
                "name": "Marquee",
                "status": {
                    "baseline": False,
                    "support": {"firefox": "≤10"},
                },
            },
            "mutation-events": {
                "kind": "feature",
                "name": "Mutation events",
                "group": "js",
                "discouraged": {"according_to": ["https://example.org/"]},
                "status": {
                    "baseline": "low",
                    "baseline_low_date": "2021-02-01",
                    "support": {"chrome": "1"},
                },
            },
            "nowhere": {
                "kind": "feature",
                "name": "Not shipped",
                "status": {"baseline": False, "support": {}},
            },
            "old-grid-name": {"kind": "moved", "redirect_target": "grid"},
        },
        "snapshots": {"ecmascript-2020": {"name": "ECMAScript 2020"}},
    }


@pytest.fixture()
def sample_payload() -> dict[str, Any]:
    return build_payload()


@pytest.fixture()
def sample_dataset(sample_payload: dict[str, Any]) -> Dataset:
    return parse_dataset(sample_payload)


@pytest.fixture()
def dataset_file(tmp_path: Path, sample_payload: dict[str, Any]) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture()
def config_file(tmp_path: Path, dataset_file: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "paths:",
                f"  dataset_path: {dataset_file.as_posix()}",
                f"  output_dir: {(tmp_path / 'output').as_posix()}",
                "datawrapper:",
                f"  token_path: {(tmp_path / 'missing-token').as_posix()}",
                "  token_env: BASELINESTATS_TEST_TOKEN",
                "  charts:",
                "    timeline-number: abc12",
                "    groups-features: def34",
            ]
        ),
        encoding="utf-8",
    )
    return path
