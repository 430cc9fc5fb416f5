"""
Generic wide <-> long reshaping for tables with one column per year.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd

from ingestion.schemas import WideTableSchema

YEAR_COLUMN = "year"


def wide_to_long(
    wide: pd.DataFrame,
    schema: WideTableSchema,
    *,
    value_name: str,
    rename: Dict[str, str] | None = None,
) -> pd.DataFrame:
    """
    Melt the declared year columns of `wide` into (ids..., year, value) rows.

    Columns listed in `schema.drop_columns` are discarded. `rename` maps
    source identifier names to output names. Missing values are kept;
    callers decide whether to drop or impute them.
    """
    id_columns = list(schema.id_columns)
    long_df = wide.melt(
        id_vars=id_columns,
        value_vars=list(schema.year_columns),
        var_name=YEAR_COLUMN,
        value_name=value_name,
    )
    long_df[YEAR_COLUMN] = long_df[YEAR_COLUMN].map(schema.year_of).astype("int64")
    long_df[value_name] = pd.to_numeric(long_df[value_name]).astype("float64")

    if rename:
        long_df = long_df.rename(columns=rename)
        id_columns = [rename.get(c, c) for c in id_columns]

    for col in id_columns:
        long_df[col] = long_df[col].astype("string")

    return long_df[id_columns + [YEAR_COLUMN, value_name]]


def long_to_wide(
    long_df: pd.DataFrame,
    *,
    id_columns: Sequence[str],
    value_name: str,
) -> pd.DataFrame:
    """
    Pivot a long table back to one column per year (named by str(year)).

    Cells with no long row come back as missing.
    """
    wide = long_df.pivot(
        index=list(id_columns),
        columns=YEAR_COLUMN,
        values=value_name,
    )
    wide.columns = [str(int(year)) for year in wide.columns]
    wide.columns.name = None
    return wide.reset_index()


__all__ = [
    "YEAR_COLUMN",
    "wide_to_long",
    "long_to_wide",
]
