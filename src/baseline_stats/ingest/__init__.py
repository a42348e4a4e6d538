"""Dataset ingestion entrypoints and data contracts for :mod:`baseline_stats`."""

from .contracts import assert_dataset_contract, is_feature_entry
from .dataset import DatasetDownloadError, download_dataset, load_dataset, parse_dataset
from .records import Browser, Dataset, Feature, GroupDefinition, Release

__all__ = [
    "Browser",
    "Dataset",
    "DatasetDownloadError",
    "Feature",
    "GroupDefinition",
    "Release",
    "assert_dataset_contract",
    "download_dataset",
    "is_feature_entry",
    "load_dataset",
    "parse_dataset",
]
