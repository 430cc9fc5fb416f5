"""
Descriptive statistics over the prepared country-year table.

Industrialization status is derived from normalized GDP (1 + GDP/100):
a country-year is "Industrialized" when its normalized GDP is above the
threshold (45 by default).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

DEFAULT_INDUSTRIALIZED_THRESHOLD = 45.0

INDUSTRIALIZED = "Industrialized"
NON_INDUSTRIALIZED = "Non-industrialized"
STATUS_ORDER = [INDUSTRIALIZED, NON_INDUSTRIALIZED]

MIN_FIT_POINTS = 2


@dataclass(frozen=True)
class LogLinearFit:
    """Least-squares line of log(y) on log(x)."""

    x_column: str
    y_column: str
    slope: float
    intercept: float
    pearson_r: float
    n: int

    @property
    def r_squared(self) -> float:
        return self.pearson_r ** 2

    def predict_log(self, log_x: np.ndarray) -> np.ndarray:
        return self.slope * log_x + self.intercept


def classify_industrialization(
    df: pd.DataFrame,
    threshold: float = DEFAULT_INDUSTRIALIZED_THRESHOLD,
) -> pd.DataFrame:
    """Add `industrialized` (bool) and `status` (label) columns."""
    out = df.copy()
    out["industrialized"] = out["gdp"] > threshold
    out["status"] = np.where(out["industrialized"], INDUSTRIALIZED, NON_INDUSTRIALIZED)
    out["status"] = pd.Categorical(out["status"], categories=STATUS_ORDER)
    return out


def head_tail(df: pd.DataFrame, n: int = 5) -> pd.DataFrame:
    """First and last `n` rows after sorting by (country, year)."""
    ordered = df.sort_values(["country", "year"]).reset_index(drop=True)
    if len(ordered) <= 2 * n:
        return ordered
    return pd.concat([ordered.head(n), ordered.tail(n)])


def _total_by_country(df: pd.DataFrame) -> pd.DataFrame:
    return (
        df.groupby("country", as_index=False, observed=True)["emissions"]
        .sum()
        .rename(columns={"emissions": "total_emissions"})
    )


def top_emitters(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """Countries with the largest emissions summed over all years."""
    totals = _total_by_country(df)
    return totals.sort_values(["total_emissions", "country"], ascending=[False, True]).head(n).reset_index(drop=True)


def bottom_emitters(df: pd.DataFrame, n: int = 5) -> pd.DataFrame:
    totals = _total_by_country(df)
    return totals.sort_values(["total_emissions", "country"]).head(n).reset_index(drop=True)


def latest_year(df: pd.DataFrame) -> int:
    if df.empty:
        raise ValueError("Cannot pick the latest year of an empty table")
    return int(df["year"].max())


def top_emitters_by_status(
    df: pd.DataFrame,
    status: str,
    *,
    year: Optional[int] = None,
    n: int = 10,
) -> pd.DataFrame:
    """
    Top `n` emitters of one industrialization status in a single year.

    `df` must carry the `status` column (see classify_industrialization).
    Defaults to the most recent year in `df`.
    """
    if year is None:
        year = latest_year(df)
    subset = df[(df["year"] == year) & (df["status"] == status)]
    columns = ["country", "year", "emissions", "gdp", "population"]
    return (
        subset.sort_values(["emissions", "country"], ascending=[False, True])
        .head(n)[columns]
        .reset_index(drop=True)
    )


def global_time_series(df: pd.DataFrame) -> pd.DataFrame:
    """Per year: total emissions, mean normalized GDP and total population."""
    return (
        df.groupby("year", as_index=False)
        .agg(
            total_emissions=("emissions", "sum"),
            mean_gdp=("gdp", "mean"),
            total_population=("population", "sum"),
        )
        .sort_values("year")
        .reset_index(drop=True)
    )


def emissions_by_status_over_time(df: pd.DataFrame) -> pd.DataFrame:
    """Per (year, status): total emissions. Requires the `status` column."""
    return (
        df.groupby(["year", "status"], as_index=False, observed=True)["emissions"]
        .sum()
        .rename(columns={"emissions": "total_emissions"})
        .sort_values(["year", "status"])
        .reset_index(drop=True)
    )


def status_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Number of country-years and distinct countries per status."""
    return (
        df.groupby("status", as_index=False, observed=True)
        .agg(country_years=("country", "size"), countries=("country", "nunique"))
    )


def positive_pairs(
    df: pd.DataFrame,
    x_column: str,
    y_column: str = "emissions",
) -> pd.DataFrame:
    """Rows where both values are strictly positive (defined on a log scale)."""
    return df[(df[x_column] > 0) & (df[y_column] > 0)]


def can_fit_log_linear(
    df: pd.DataFrame,
    x_column: str,
    y_column: str = "emissions",
) -> bool:
    return len(positive_pairs(df, x_column, y_column)) >= MIN_FIT_POINTS


def fit_log_linear(
    df: pd.DataFrame,
    x_column: str,
    y_column: str = "emissions",
) -> LogLinearFit:
    """
    Fit log(y) = slope * log(x) + intercept.

    Only rows where both values are strictly positive take part. Raises
    ValueError with fewer than MIN_FIT_POINTS such rows.
    """
    valid = positive_pairs(df, x_column, y_column)
    if len(valid) < MIN_FIT_POINTS:
        raise ValueError(
            f"Need at least two positive ({x_column}, {y_column}) pairs, got {len(valid)}",
        )

    log_x = np.log(valid[x_column].to_numpy(dtype=float))
    log_y = np.log(valid[y_column].to_numpy(dtype=float))
    slope, intercept = np.polyfit(log_x, log_y, 1)
    r = float(np.corrcoef(log_x, log_y)[0, 1])

    return LogLinearFit(
        x_column=x_column,
        y_column=y_column,
        slope=float(slope),
        intercept=float(intercept),
        pearson_r=r,
        n=int(len(valid)),
    )


__all__ = [
    "DEFAULT_INDUSTRIALIZED_THRESHOLD",
    "INDUSTRIALIZED",
    "NON_INDUSTRIALIZED",
    "STATUS_ORDER",
    "LogLinearFit",
    "classify_industrialization",
    "head_tail",
    "top_emitters",
    "bottom_emitters",
    "latest_year",
    "top_emitters_by_status",
    "global_time_series",
    "emissions_by_status_over_time",
    "status_counts",
    "MIN_FIT_POINTS",
    "positive_pairs",
    "can_fit_log_linear",
    "fit_log_linear",
]
