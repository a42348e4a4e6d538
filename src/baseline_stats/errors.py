"""Exceptions raised when the web-features dataset violates its contract."""

from __future__ import annotations


class DatasetIntegrityError(RuntimeError):
    """Raised when dataset records reference unknown or inconsistent data."""


class UndefinedBaselineError(DatasetIntegrityError):
    """Raised when a feature that is not discouraged has no baseline status."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"{feature} still has an undefined baseline status!")
        self.feature = feature


class HierarchyError(DatasetIntegrityError):
    """Raised when group parent links do not form a tree."""


__all__ = ["DatasetIntegrityError", "HierarchyError", "UndefinedBaselineError"]
