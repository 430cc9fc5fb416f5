"""
Emissions reshaping (wide year columns -> long country-year rows).

Output schema (one row per country and year):
    country    - string
    sector     - string
    gas        - string
    unit       - string
    year       - int64
    emissions  - float64, never missing

The "Data source" identifier is discarded after the reshape.
"""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from common.errors import DataQualityError
from ingestion.schemas import WideTableSchema, emissions_schema
from .reshape import YEAR_COLUMN, wide_to_long

LOG = logging.getLogger(__name__)

EMISSIONS_RENAME = {
    "Country": "country",
    "Data source": "data_source",
    "Sector": "sector",
    "Gas": "gas",
    "Unit": "unit",
}

EMISSIONS_COLUMNS = ["country", "sector", "gas", "unit", YEAR_COLUMN, "emissions"]


def _filter_series(
    wide: pd.DataFrame,
    *,
    sector: Optional[str],
    gas: Optional[str],
) -> pd.DataFrame:
    mask = pd.Series(True, index=wide.index)
    if sector is not None:
        mask &= wide["Sector"] == sector
    if gas is not None:
        mask &= wide["Gas"] == gas
    filtered = wide[mask]
    if (sector is not None or gas is not None) and filtered.empty:
        raise DataQualityError(
            f"No emissions rows for sector={sector!r}, gas={gas!r}",
        )
    return filtered


def build_emissions_long_dataframe(
    wide: pd.DataFrame,
    schema: WideTableSchema | None = None,
    *,
    sector: Optional[str] = None,
    gas: Optional[str] = None,
    max_dropped: Optional[int] = None,
) -> pd.DataFrame:
    """
    Reshape the wide emissions table into long country-year rows.

    Parameters
    ----------
    wide:
        Table returned by `load_wide_table` with the emissions schema.
    sector, gas:
        Optional filters selecting a single series when the file carries
        several sectors or gases per country.
    max_dropped:
        Upper bound on rows discarded for a missing value. Exceeding it
        raises DataQualityError.

    Raises DataQualityError if a (country, year) pair still has more than
    one row after filtering.
    """
    schema = schema or emissions_schema()
    wide = _filter_series(wide, sector=sector, gas=gas)

    long_df = wide_to_long(
        wide,
        schema,
        value_name="emissions",
        rename=EMISSIONS_RENAME,
    )

    missing_mask = long_df["emissions"].isna()
    dropped = int(missing_mask.sum())
    long_df = long_df[~missing_mask]
    LOG.info("Emissions reshape: %d rows kept, %d rows dropped (missing value)", len(long_df), dropped)

    if max_dropped is not None and dropped > max_dropped:
        raise DataQualityError(
            f"Emissions reshape dropped {dropped} rows with missing values "
            f"(expected at most {max_dropped})",
        )

    duplicated = long_df.duplicated(subset=["country", YEAR_COLUMN], keep=False)
    if duplicated.any():
        examples = (
            long_df.loc[duplicated, ["country", "sector", "gas"]]
            .drop_duplicates()
            .head(5)
            .to_dict("records")
        )
        raise DataQualityError(
            "Emissions table has several rows per (country, year); "
            f"select one sector/gas series. Examples: {examples}",
        )

    negative = int((long_df["emissions"] < 0).sum())
    if negative:
        LOG.warning("Emissions reshape: %d rows have negative emissions (net sinks)", negative)

    return long_df[EMISSIONS_COLUMNS].reset_index(drop=True)


__all__ = [
    "EMISSIONS_COLUMNS",
    "EMISSIONS_RENAME",
    "build_emissions_long_dataframe",
]
