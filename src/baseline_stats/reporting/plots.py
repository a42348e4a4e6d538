"""PNG previews of the report tables."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from matplotlib import pyplot as plt

from .tables import GROUP_COLUMNS, TIMELINE_NUMBER_COLUMNS


_AVAILABILITY_COLORS = {
    "Widely available": "#1a7f37",
    "Newly available": "#0969da",
    "Implemented somewhere": "#bf8700",
    "Limited availability": "#bf8700",
    "Discouraged": "#8c959f",
}


def plot_timeline(table: pd.DataFrame, *, path: Path) -> Path:
    """Plot the timeline-number table as a stacked area chart."""

    missing = set(TIMELINE_NUMBER_COLUMNS).difference(table.columns)
    if missing:
        raise KeyError(f"Timeline table missing columns: {sorted(missing)}")

    series = list(TIMELINE_NUMBER_COLUMNS[1:])
    fig, ax = plt.subplots(figsize=(10, 5))
    if not table.empty:
        dates = pd.to_datetime(table["Date"])
        ax.stackplot(
            dates,
            *(table[column].astype(int) for column in series),
            labels=series,
            colors=[_AVAILABILITY_COLORS[column] for column in series],
            alpha=0.8,
        )
    ax.set_xlabel("Date")
    ax.set_ylabel("Number of features")
    ax.set_title("Evolution of the number of web features")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight", dpi=150)
    plt.close(fig)

    return path


def plot_group_availability(table: pd.DataFrame, *, path: Path, title: str) -> Path:
    """Plot one of the groups tables as horizontal stacked bars."""

    missing = set(GROUP_COLUMNS).difference(table.columns)
    if missing:
        raise KeyError(f"Groups table missing columns: {sorted(missing)}")

    series = list(GROUP_COLUMNS[1:])
    height = max(3.0, 0.35 * len(table) + 1.5)
    fig, ax = plt.subplots(figsize=(10, height))
    left = pd.Series([0] * len(table), dtype="int64")
    labels = table["Group"].astype(str).to_list()
    for column in series:
        values = table[column].astype("int64").reset_index(drop=True)
        ax.barh(labels, values, left=left, label=column, color=_AVAILABILITY_COLORS[column])
        left = left + values
    ax.invert_yaxis()
    ax.set_xlabel("Number of features")
    ax.set_title(title)
    ax.grid(True, axis="x", alpha=0.3)
    ax.legend(loc="lower right")

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight", dpi=150)
    plt.close(fig)

    return path


__all__ = ["plot_group_availability", "plot_timeline"]
