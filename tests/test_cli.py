from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from baseline_stats import cli


runner = CliRunner()


def test_build_writes_reports(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["build", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "output" / "timeline-durations.csv").exists()
    assert "groups-limited.csv" in result.output


def test_build_publish_without_token_succeeds(
    config_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("BASELINESTATS_TEST_TOKEN", raising=False)

    result = runner.invoke(cli.app, ["build", "--config", str(config_file), "--publish"])

    assert result.exit_code == 0, result.output


def test_build_fails_on_undefined_baseline(
    config_file: Path, tmp_path: Path, sample_payload: dict[str, Any]
) -> None:
    sample_payload["features"]["grid"]["status"].pop("baseline")
    broken = tmp_path / "broken.json"
    broken.write_text(json.dumps(sample_payload), encoding="utf-8")

    result = runner.invoke(
        cli.app, ["build", "--config", str(config_file), "--dataset", str(broken)]
    )

    assert result.exit_code == 1
    assert not (tmp_path / "output").exists()


def test_build_fails_on_missing_dataset(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["build", "--config", str(config_file), "--dataset", str(tmp_path / "nope.json")],
    )

    assert result.exit_code == 1


def test_download_uses_configured_url(
    config_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[tuple[Path, str]] = []

    def fake_download(destination: Path, *, url: str) -> Path:
        calls.append((destination, url))
        return destination

    monkeypatch.setattr(cli, "download_dataset", fake_download)
    target = tmp_path / "fresh.json"

    result = runner.invoke(
        cli.app,
        ["download", "--config", str(config_file), "--dataset", str(target), "--url", "https://x/d.json"],
    )

    assert result.exit_code == 0, result.output
    assert calls == [(target, "https://x/d.json")]
