"""
GDP per capita reshaping, normalization and imputation.

Steps, each returning a new DataFrame:

1. `build_gdp_long_dataframe`: wide World Bank table -> long rows
   (country_name, country_code, year, gdp). Indicator columns are discarded.
2. `rescale_gdp`: normalized GDP, gdp = 1 + gdp / 100. The industrialization
   threshold used by the analysis is expressed on this scale.
3. `impute_gdp_geometric_mean`: per country, missing values are replaced by
   the geometric mean of that country's observed values.

Countries with no observed value (or with a non-positive observed value,
for which the geometric mean is undefined) keep their missing values and
drop out at the merge.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from ingestion.schemas import WideTableSchema, gdp_schema
from .reshape import YEAR_COLUMN, wide_to_long

LOG = logging.getLogger(__name__)

WB_RENAME = {
    "Country Name": "country_name",
    "Country Code": "country_code",
}

GDP_COLUMNS = ["country_name", "country_code", YEAR_COLUMN, "gdp"]


def build_gdp_long_dataframe(
    wide: pd.DataFrame,
    schema: WideTableSchema | None = None,
) -> pd.DataFrame:
    """Reshape the wide GDP table; missing values are kept."""
    schema = schema or gdp_schema()
    long_df = wide_to_long(wide, schema, value_name="gdp", rename=WB_RENAME)
    return long_df[GDP_COLUMNS].reset_index(drop=True)


def rescale_gdp(df: pd.DataFrame, *, value_column: str = "gdp") -> pd.DataFrame:
    out = df.copy()
    out[value_column] = 1.0 + out[value_column] / 100.0
    return out


def geometric_mean_by_group(
    values: pd.Series,
    groups: pd.Series,
) -> pd.Series:
    """
    Geometric mean of the observed values of each group, broadcast to rows.

    The result is missing for groups with no observed value and for groups
    holding a non-positive value. Groups whose observed values are all equal
    get that exact value.
    """
    observed_count = values.notna().groupby(groups).transform("sum")
    non_positive_count = (values <= 0).groupby(groups).transform("sum")

    log_mean = np.log(values.where(values > 0)).groupby(groups).transform("mean")
    geo_mean = np.exp(log_mean)

    group_min = values.groupby(groups).transform("min")
    group_max = values.groupby(groups).transform("max")
    geo_mean = geo_mean.where(group_min != group_max, group_min)

    defined = (observed_count > 0) & (non_positive_count == 0)
    return geo_mean.where(defined)


def impute_gdp_geometric_mean(
    df: pd.DataFrame,
    *,
    group_column: str = "country_name",
    value_column: str = "gdp",
) -> pd.DataFrame:
    """
    Fill missing values per group with the group's geometric mean.

    Observed values are never changed, so running it again on its own
    output is a no-op.
    """
    out = df.copy()
    values = out[value_column].astype("float64")
    missing_before = int(values.isna().sum())

    fill = geometric_mean_by_group(values, out[group_column])
    out[value_column] = values.fillna(fill)
    out[YEAR_COLUMN] = out[YEAR_COLUMN].astype("int64")

    still_missing = out[value_column].isna()
    unresolved = out.loc[still_missing, group_column].dropna().unique()
    LOG.info(
        "GDP imputation: %d missing values filled, %d left missing (%d countries without usable observations)",
        missing_before - int(still_missing.sum()),
        int(still_missing.sum()),
        len(unresolved),
    )
    if len(unresolved):
        LOG.debug("GDP imputation: countries left missing: %s", sorted(map(str, unresolved)))
    return out


def prepare_gdp_long_dataframe(
    wide: pd.DataFrame,
    schema: WideTableSchema | None = None,
) -> pd.DataFrame:
    """Reshape, rescale and impute the wide GDP table."""
    long_df = build_gdp_long_dataframe(wide, schema)
    return impute_gdp_geometric_mean(rescale_gdp(long_df))


__all__ = [
    "GDP_COLUMNS",
    "WB_RENAME",
    "build_gdp_long_dataframe",
    "rescale_gdp",
    "geometric_mean_by_group",
    "impute_gdp_geometric_mean",
    "prepare_gdp_long_dataframe",
]
