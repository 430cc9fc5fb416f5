"""
Loader for the wide delimited source files.

`load_wide_table` reads one file in a single pass, treats the missing-value
sentinel (and empty cells) as missing, and validates the result against a
WideTableSchema. Any problem is fatal: MissingFileError when the file is
absent, ParseError/SchemaError when it cannot be read as declared.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd
from pandas.api.types import is_numeric_dtype

from common.errors import MissingFileError, ParseError, SchemaError
from .schemas import WideTableSchema

LOG = logging.getLogger(__name__)

DEFAULT_MISSING_SENTINEL = "N/A"

# pandas names header-less trailing columns "Unnamed: <n>"
_UNNAMED_PREFIX = "Unnamed:"


def _drop_empty_trailer_columns(df: pd.DataFrame) -> pd.DataFrame:
    trailer = [
        col
        for col in df.columns
        if str(col).startswith(_UNNAMED_PREFIX) and df[col].isna().all()
    ]
    if trailer:
        df = df.drop(columns=trailer)
    return df


def validate_wide_table(
    df: pd.DataFrame,
    schema: WideTableSchema,
    *,
    path: Path | str | None = None,
) -> pd.DataFrame:
    """
    Check a freshly read table against its schema.

    - every identifier and declared year column must be present;
    - no undeclared column may appear;
    - year columns must hold numbers (or missing values).

    Returns the table with its columns in schema order.
    """
    columns = [str(c) for c in df.columns]
    expected = list(schema.expected_columns)

    missing = [c for c in expected if c not in columns]
    if missing:
        raise SchemaError(
            f"{schema.name} table is missing declared columns: {missing}",
            path=path,
        )

    unexpected = [c for c in columns if c not in expected]
    if unexpected:
        raise SchemaError(
            f"{schema.name} table has undeclared columns: {unexpected}",
            path=path,
        )

    bad_years: List[str] = []
    for col in schema.year_columns:
        if not is_numeric_dtype(df[col]):
            bad_years.append(col)
    if bad_years:
        sample = df[bad_years[0]].dropna().astype(str).head(3).tolist()
        raise ParseError(
            f"{schema.name} year columns are not numeric: {bad_years} "
            f"(sample values in {bad_years[0]}: {sample})",
            path=path,
        )

    return df[expected]


def load_wide_table(
    path: Path | str,
    schema: WideTableSchema,
    *,
    missing_sentinel: str = DEFAULT_MISSING_SENTINEL,
) -> pd.DataFrame:
    """
    Read a delimited file into a wide DataFrame validated against `schema`.

    Column types are inferred by pandas; identifier columns stay text and
    year columns must come out numeric.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise MissingFileError(file_path)

    try:
        df = pd.read_csv(
            file_path,
            encoding=schema.encoding,
            skiprows=schema.skiprows,
            na_values=[missing_sentinel, ""],
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError as exc:
        raise ParseError("file is empty", path=file_path) from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise ParseError(f"cannot parse file: {exc}", path=file_path) from exc

    df.columns = [str(c).strip() for c in df.columns]
    df = _drop_empty_trailer_columns(df)
    df = validate_wide_table(df, schema, path=file_path)

    LOG.info(
        "Loaded %s table from %s: %d rows x %d columns",
        schema.name,
        file_path,
        df.shape[0],
        df.shape[1],
    )
    return df


__all__ = [
    "DEFAULT_MISSING_SENTINEL",
    "load_wide_table",
    "validate_wide_table",
]
