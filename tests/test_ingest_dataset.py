from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from baseline_stats.ingest import (
    DatasetDownloadError,
    assert_dataset_contract,
    download_dataset,
    load_dataset,
    parse_dataset,
)


def test_parse_dataset_builds_typed_records(sample_payload: dict[str, Any]) -> None:
    dataset = parse_dataset(sample_payload)

    assert set(dataset.browsers) == {"chrome", "firefox"}
    assert dataset.browsers["chrome"].release_date("2") == "2020-03-01"
    assert dataset.browsers["chrome"].release_date("99") is None

    assert "old-grid-name" not in dataset.features
    assert len(dataset.features) == 6

    promises = dataset.features["promises"]
    assert promises.groups == ("js", "css")
    assert promises.baseline == "high"
    assert promises.first_implementation_date is None

    assert dataset.features["grid"].groups == ("css-grid",)
    assert dataset.features["marquee"].groups == ()
    assert dataset.features["marquee"].baseline is False
    assert dataset.features["mutation-events"].discouraged is True
    assert dataset.features["grid"].discouraged is False

    assert dataset.groups["css-subgrid"].parent == "css-grid"
    assert dataset.groups["css"].parent is None
    assert "ecmascript-2020" in dataset.snapshots


def test_parse_dataset_keeps_missing_baseline_undefined(sample_payload: dict[str, Any]) -> None:
    del sample_payload["features"]["grid"]["status"]["baseline"]

    dataset = parse_dataset(sample_payload)

    assert dataset.features["grid"].baseline is None


def test_load_dataset_reads_file(dataset_file: Path) -> None:
    dataset = load_dataset(dataset_file)
    assert dataset.features["subgrid"].baseline_low_date == "≤2021-02-01"


def test_load_dataset_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "nope.json")


def test_contract_reports_missing_collections() -> None:
    with pytest.raises(ValueError, match="groups, snapshots"):
        assert_dataset_contract({"browsers": {}, "features": {}})


def test_contract_reports_broken_features(sample_payload: dict[str, Any]) -> None:
    del sample_payload["features"]["grid"]["status"]["support"]

    with pytest.raises(ValueError, match="grid"):
        assert_dataset_contract(sample_payload)


def test_contract_reports_broken_browsers(sample_payload: dict[str, Any]) -> None:
    sample_payload["browsers"]["safari"] = {"name": "Safari"}

    with pytest.raises(ValueError, match="safari"):
        assert_dataset_contract(sample_payload)


@dataclass
class _StubResponse:
    payload: Any
    status_code: int = 200

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


@dataclass
class _StubSession:
    response: _StubResponse
    calls: list[tuple[str, float]] = field(default_factory=list)

    def get(self, url: str, *, timeout: float) -> _StubResponse:
        self.calls.append((url, timeout))
        return self.response


def test_download_dataset_writes_payload(tmp_path: Path, sample_payload: dict[str, Any]) -> None:
    session = _StubSession(_StubResponse(sample_payload))
    destination = tmp_path / "nested" / "data.json"

    path = download_dataset(
        destination, url="https://example.org/data.json", timeout=5.0, session=session
    )

    assert path == destination
    assert session.calls == [("https://example.org/data.json", 5.0)]
    written = json.loads(destination.read_text(encoding="utf-8"))
    assert written["features"]["subgrid"]["status"]["baseline_low_date"] == "≤2021-02-01"


def test_download_dataset_rejects_error_status(tmp_path: Path) -> None:
    session = _StubSession(_StubResponse({}, status_code=404))

    with pytest.raises(DatasetDownloadError, match="404"):
        download_dataset(tmp_path / "data.json", session=session)

    assert not (tmp_path / "data.json").exists()


def test_download_dataset_rejects_invalid_json(tmp_path: Path) -> None:
    session = _StubSession(_StubResponse(ValueError("not json")))

    with pytest.raises(DatasetDownloadError):
        download_dataset(tmp_path / "data.json", session=session)
