"""
Country-name reconciliation
---------------------------

The emissions source and the World Bank sources spell some countries
differently ("Russia" vs "Russian Federation"). The merge matches names
exactly, so those countries drop out of the prepared table; the join audit
counts them.

This module provides an opt-in fix: a CSV of overrides

    source_country_name,country_name

renames World Bank country names to the emissions spelling before the
merge. Lookup is done on a normalized name (see normalize_country_name).
The default pipeline does not apply it.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from pathlib import Path
from typing import Dict

import pandas as pd

from common.errors import MissingFileError, SchemaError

LOG = logging.getLogger(__name__)

# Default path of the bundled overrides CSV
COUNTRY_MAPPING_OVERRIDES_CSV = Path(__file__).with_name("country_mapping_overrides.csv")

OVERRIDE_COLUMNS = ("source_country_name", "country_name")


def normalize_country_name(name: str) -> str:
    """
    Normalize a country name for matching.

    - lower case
    - accents removed
    - non-alphanumeric characters (except space) replaced by spaces
    - repeated spaces collapsed, ends trimmed
    """
    if name is None or (not isinstance(name, str) and pd.isna(name)):
        return ""

    s = str(name).lower()
    s = unicodedata.normalize("NFKD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = re.sub(r"[^a-z0-9 ]", " ", s)
    s = re.sub(r"\s+", " ", s)
    return s.strip()


def load_country_overrides(
    path: Path | str = COUNTRY_MAPPING_OVERRIDES_CSV,
) -> pd.DataFrame:
    """
    Load the overrides CSV.

    Returns a DataFrame with source_country_name, country_name and
    source_country_name_normalized.
    """
    overrides_file = Path(path)
    if not overrides_file.is_file():
        raise MissingFileError(overrides_file)

    overrides = pd.read_csv(overrides_file, dtype="string")
    missing = set(OVERRIDE_COLUMNS) - set(overrides.columns)
    if missing:
        raise SchemaError(
            f"overrides file is missing required columns: {sorted(missing)}",
            path=overrides_file,
        )

    overrides = overrides[list(OVERRIDE_COLUMNS)].dropna().copy()
    overrides["source_country_name_normalized"] = (
        overrides["source_country_name"].map(normalize_country_name).astype("string")
    )
    return overrides.drop_duplicates(subset=["source_country_name_normalized"], keep="last")


def build_rename_lookup(overrides: pd.DataFrame) -> Dict[str, str]:
    return dict(
        zip(
            overrides["source_country_name_normalized"].astype(str),
            overrides["country_name"].astype(str),
        )
    )


def apply_country_overrides(
    df: pd.DataFrame,
    overrides: pd.DataFrame,
    *,
    name_column: str = "country_name",
) -> pd.DataFrame:
    """
    Rename country names in `name_column` according to `overrides`.

    Names without an override are left untouched.
    """
    if df.empty or overrides.empty:
        return df.copy()

    lookup = build_rename_lookup(overrides)
    out = df.copy()
    normalized = out[name_column].map(normalize_country_name)
    renamed = normalized.map(lookup)
    changed = renamed.notna()

    out[name_column] = renamed.where(changed, out[name_column]).astype("string")
    LOG.info(
        "Country overrides: %d rows renamed across %d countries",
        int(changed.sum()),
        int(normalized[changed].nunique()),
    )
    return out


__all__ = [
    "COUNTRY_MAPPING_OVERRIDES_CSV",
    "OVERRIDE_COLUMNS",
    "normalize_country_name",
    "load_country_overrides",
    "build_rename_lookup",
    "apply_country_overrides",
]
