"""
Charts for the emissions report.

Every function renders one PNG into `output_dir` and returns its path.
Figures are closed after saving.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402

from .summaries import (  # noqa: E402
    STATUS_ORDER,
    LogLinearFit,
    emissions_by_status_over_time,
    fit_log_linear,
    global_time_series,
    positive_pairs,
)

GLOBAL_TIME_SERIES_PNG = "global_gdp_emissions.png"
STATUS_BOXPLOT_PNG = "emissions_by_status_boxplot.png"
STATUS_LINE_PNG = "emissions_by_status_line.png"

_DPI = 150
_STATUS_COLORS = {STATUS_ORDER[0]: "tab:red", STATUS_ORDER[1]: "tab:blue"}


def _save(fig: plt.Figure, output_dir: Path | str, file_name: str) -> Path:
    output_root = Path(output_dir)
    output_root.mkdir(parents=True, exist_ok=True)
    output_path = output_root / file_name
    fig.tight_layout()
    fig.savefig(output_path, dpi=_DPI)
    plt.close(fig)
    return output_path


def plot_global_time_series(df: pd.DataFrame, output_dir: Path | str) -> Path:
    """Total emissions and mean normalized GDP per year, on two y axes."""
    series = global_time_series(df)

    fig, ax_emissions = plt.subplots(figsize=(10, 6))
    ax_emissions.plot(
        series["year"],
        series["total_emissions"],
        color="tab:red",
        marker="o",
        markersize=3,
        label="Total emissions",
    )
    ax_emissions.set_xlabel("Year")
    ax_emissions.set_ylabel("Total emissions", color="tab:red")

    ax_gdp = ax_emissions.twinx()
    ax_gdp.plot(
        series["year"],
        series["mean_gdp"],
        color="tab:green",
        marker="s",
        markersize=3,
        label="Mean normalized GDP",
    )
    ax_gdp.set_ylabel("Mean normalized GDP (1 + GDP/100)", color="tab:green")

    ax_emissions.set_title("Global emissions and GDP per capita over time")
    ax_emissions.grid(True, linestyle="--", alpha=0.3)
    return _save(fig, output_dir, GLOBAL_TIME_SERIES_PNG)


def plot_emissions_boxplot_by_status(df: pd.DataFrame, output_dir: Path | str) -> Path:
    """Distribution of country-year emissions per industrialization status."""
    labels = []
    data = []
    for status in STATUS_ORDER:
        values = df.loc[df["status"] == status, "emissions"].to_numpy(dtype=float)
        if values.size:
            labels.append(status)
            data.append(values)

    fig, ax = plt.subplots(figsize=(8, 6))
    if data:
        ax.boxplot(data)
        ax.set_xticks(range(1, len(labels) + 1), labels)
    # symlog keeps net-sink (negative) values visible
    ax.set_yscale("symlog")
    ax.set_ylabel("Emissions per country-year")
    ax.set_title("Emissions by industrialization status")
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    return _save(fig, output_dir, STATUS_BOXPLOT_PNG)


def plot_emissions_line_by_status(df: pd.DataFrame, output_dir: Path | str) -> Path:
    """Total emissions per year for each industrialization status."""
    by_status = emissions_by_status_over_time(df)

    fig, ax = plt.subplots(figsize=(10, 6))
    for status in STATUS_ORDER:
        subset = by_status[by_status["status"] == status]
        if subset.empty:
            continue
        ax.plot(
            subset["year"],
            subset["total_emissions"],
            marker="o",
            markersize=3,
            color=_STATUS_COLORS[status],
            label=status,
        )
    ax.set_xlabel("Year")
    ax.set_ylabel("Total emissions")
    ax.set_title("Emissions over time by industrialization status")
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend(frameon=False)
    return _save(fig, output_dir, STATUS_LINE_PNG)


def plot_top_emitters_bar(
    top: pd.DataFrame,
    output_dir: Path | str,
    *,
    value_column: str,
    title: str,
    file_name: str,
    color: str = "tab:gray",
) -> Path:
    """Horizontal bar chart, largest value on top."""
    ordered = top.sort_values(value_column)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.barh(ordered["country"].astype(str), ordered[value_column], color=color)
    ax.set_xlabel(value_column.replace("_", " ").capitalize())
    ax.set_title(title)
    ax.grid(True, axis="x", linestyle="--", alpha=0.3)
    return _save(fig, output_dir, file_name)


def plot_log_scatter(
    df: pd.DataFrame,
    output_dir: Path | str,
    *,
    x_column: str,
    x_label: str,
    fit: Optional[LogLinearFit] = None,
) -> Path:
    """
    Scatter of log(x) against log(emissions) with the fitted trend line.

    Points are colored by industrialization status when `df` has it.
    """
    fit = fit or fit_log_linear(df, x_column)
    valid = positive_pairs(df, x_column)
    log_x = np.log(valid[x_column].to_numpy(dtype=float))
    log_y = np.log(valid["emissions"].to_numpy(dtype=float))

    fig, ax = plt.subplots(figsize=(10, 6))
    if "status" in valid.columns:
        status = valid["status"].astype(str).to_numpy()
        for label in STATUS_ORDER:
            mask = status == label
            if mask.any():
                ax.scatter(
                    log_x[mask],
                    log_y[mask],
                    s=8,
                    alpha=0.5,
                    color=_STATUS_COLORS[label],
                    edgecolors="none",
                    label=label,
                )
    else:
        ax.scatter(log_x, log_y, s=8, alpha=0.5, edgecolors="none")

    x_line = np.linspace(log_x.min(), log_x.max(), 200)
    ax.plot(
        x_line,
        fit.predict_log(x_line),
        color="black",
        linewidth=2,
        label=f"Linear fit (slope={fit.slope:.2f}, R²={fit.r_squared:.2f})",
    )
    ax.set_xlabel(f"log({x_label})")
    ax.set_ylabel("log(emissions)")
    ax.set_title(f"log({x_label}) vs log(emissions)")
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend(frameon=False)
    return _save(fig, output_dir, f"log_{x_column}_vs_log_emissions.png")


__all__ = [
    "GLOBAL_TIME_SERIES_PNG",
    "STATUS_BOXPLOT_PNG",
    "STATUS_LINE_PNG",
    "plot_global_time_series",
    "plot_emissions_boxplot_by_status",
    "plot_emissions_line_by_status",
    "plot_top_emitters_bar",
    "plot_log_scatter",
]
