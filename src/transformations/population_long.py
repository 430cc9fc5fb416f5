"""
Population reshaping (wide year columns -> long rows keyed by country code).

Output schema:
    country_code - string
    year         - int64
    population   - float64, never missing

Missing population values are not imputed; those (country, year) pairs
are dropped.
"""

from __future__ import annotations

import logging

import pandas as pd

from ingestion.schemas import WideTableSchema, population_schema
from .gdp_long import WB_RENAME
from .reshape import YEAR_COLUMN, wide_to_long

LOG = logging.getLogger(__name__)

POPULATION_COLUMNS = ["country_code", YEAR_COLUMN, "population"]


def build_population_long_dataframe(
    wide: pd.DataFrame,
    schema: WideTableSchema | None = None,
) -> pd.DataFrame:
    schema = schema or population_schema()
    long_df = wide_to_long(wide, schema, value_name="population", rename=WB_RENAME)

    missing_mask = long_df["population"].isna()
    LOG.info(
        "Population reshape: %d rows kept, %d rows dropped (missing value)",
        int((~missing_mask).sum()),
        int(missing_mask.sum()),
    )
    long_df = long_df[~missing_mask]
    return long_df[POPULATION_COLUMNS].reset_index(drop=True)


__all__ = [
    "POPULATION_COLUMNS",
    "build_population_long_dataframe",
]
