"""Serialization of report tables to semicolon separated files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import pandas as pd


LOGGER = logging.getLogger(__name__)

DELIMITER = ";"
REPORT_SUFFIX = ".csv"


def render_table(table: pd.DataFrame) -> str:
    """Return ``table`` as text, header row first.

    Cells are joined with ``;`` and rows with a newline, without quoting
    and without a trailing newline. Values must not contain the delimiter.
    """

    lines = [DELIMITER.join(str(column) for column in table.columns)]
    for row in table.itertuples(index=False, name=None):
        lines.append(DELIMITER.join(str(value) for value in row))
    return "\n".join(lines)


def write_report(table: pd.DataFrame, path: str | Path) -> Path:
    """Write ``table`` to ``path`` and return the path."""

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_table(table), encoding="utf-8")
    LOGGER.info("Wrote %s", output_path)
    return output_path


def write_reports(
    tables: Mapping[str, pd.DataFrame], output_dir: str | Path
) -> dict[str, Path]:
    """Write every table to ``<output_dir>/<name>.csv``."""

    directory = Path(output_dir)
    return {
        name: write_report(table, directory / f"{name}{REPORT_SUFFIX}")
        for name, table in tables.items()
    }


__all__ = ["DELIMITER", "REPORT_SUFFIX", "render_table", "write_report", "write_reports"]
