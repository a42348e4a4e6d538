from __future__ import annotations

import pytest

from baseline_stats.analysis.implementation import (
    DateAxis,
    first_implementation_date,
    resolve_first_implementation_dates,
)
from baseline_stats.analysis.normalize import strip_approximations
from baseline_stats.errors import DatasetIntegrityError
from baseline_stats.ingest.records import Dataset, Feature


@pytest.fixture()
def normalized(sample_dataset: Dataset):
    return strip_approximations(sample_dataset.features).features


def test_first_implementation_is_earliest_release(sample_dataset: Dataset, normalized) -> None:
    result = resolve_first_implementation_dates(normalized, sample_dataset.browsers)

    assert result.features["grid"].first_implementation_date == "2019-06-01"
    assert result.features["subgrid"].first_implementation_date == "2020-03-01"
    assert result.features["promises"].first_implementation_date == "2019-09-01"
    assert result.features["mutation-events"].first_implementation_date == "2019-06-01"


def test_feature_without_support_has_no_date(sample_dataset: Dataset, normalized) -> None:
    result = resolve_first_implementation_dates(normalized, sample_dataset.browsers)

    assert result.features["nowhere"].first_implementation_date is None


def test_resolution_is_idempotent(sample_dataset: Dataset, normalized) -> None:
    first = resolve_first_implementation_dates(normalized, sample_dataset.browsers)
    second = resolve_first_implementation_dates(first.features, sample_dataset.browsers)

    assert second.features == first.features
    assert second.axis == first.axis


def test_date_axis_collects_all_dates(sample_dataset: Dataset, normalized) -> None:
    axis = resolve_first_implementation_dates(normalized, sample_dataset.browsers).axis

    assert axis.dates == (
        "2019-06-01",
        "2019-09-01",
        "2020-01-01",
        "2020-03-01",
        "2021-01-01",
        "2021-02-01",
        "2022-07-01",
    )
    assert axis.years == ("2019", "2020", "2021", "2022")
    assert "2020-03-01" in axis


def test_unknown_version_is_an_integrity_error(sample_dataset: Dataset) -> None:
    feature = Feature(name="future", baseline="low", support={"chrome": "42"})

    with pytest.raises(DatasetIntegrityError, match="future.*chrome.*42"):
        first_implementation_date(feature, sample_dataset.browsers)


def test_unknown_browser_is_an_integrity_error(sample_dataset: Dataset) -> None:
    feature = Feature(name="elsewhere", baseline="low", support={"netscape": "4"})

    with pytest.raises(DatasetIntegrityError, match="netscape"):
        first_implementation_date(feature, sample_dataset.browsers)


def test_date_axis_from_dates_dedupes_and_sorts() -> None:
    axis = DateAxis.from_dates(["2021-01-01", "2019-12-31", "2021-01-01"])

    assert axis.dates == ("2019-12-31", "2021-01-01")
    assert axis.years == ("2019", "2021")
