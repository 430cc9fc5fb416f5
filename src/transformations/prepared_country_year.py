"""
Prepared dataset: emissions, GDP and population by country-year.

Join order:

1. GDP-long LEFT JOIN population-long on (country_code, year)
   -> economic indicators (rows kept even without population).
2. emissions-long INNER JOIN economic indicators on
   (country = country_name, year).
3. Rows with any missing field are dropped.

Countries whose names differ between the emissions source and the World
Bank sources drop out at step 2. That loss is not an error: it is counted
in a JoinAudit and logged.

Fields:
    country        - string
    country_code   - string
    sector         - string
    gas            - string
    unit           - string
    year           - int64
    emissions      - float64
    gdp            - float64 (normalized GDP)
    population     - float64

Row order is not meaningful; sort before any order-sensitive use.

Optional persistence, partitioned by year:

    prepared/year=<year>/prepared_country_year.parquet
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pandas as pd

from .reshape import YEAR_COLUMN

LOG = logging.getLogger(__name__)

# Local output directory for the prepared parquet partitions
PREPARED_OUTPUT_DIR = Path("prepared")
PREPARED_PARQUET_NAME = "prepared_country_year.parquet"

PREPARED_COLUMNS = [
    "country",
    "country_code",
    "sector",
    "gas",
    "unit",
    YEAR_COLUMN,
    "emissions",
    "gdp",
    "population",
]

# How many unmatched names are listed in the log line
_MAX_LOGGED_NAMES = 10


@dataclass
class JoinAudit:
    """Row counts of one merge run."""

    emissions_rows: int = 0
    economic_rows: int = 0
    economic_rows_without_population: int = 0
    duplicate_economic_rows: int = 0
    unmatched_emission_rows: int = 0
    dropped_incomplete_rows: int = 0
    prepared_rows: int = 0
    unmatched_countries: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_economic_indicators(
    gdp_long: pd.DataFrame,
    population_long: pd.DataFrame,
) -> pd.DataFrame:
    """Left join GDP with population on (country_code, year)."""
    gdp = gdp_long.drop_duplicates(subset=["country_code", YEAR_COLUMN])
    population = population_long.drop_duplicates(subset=["country_code", YEAR_COLUMN])

    return gdp.merge(
        population[["country_code", YEAR_COLUMN, "population"]],
        on=["country_code", YEAR_COLUMN],
        how="left",
    )


def merge_prepared_country_year(
    emissions_long: pd.DataFrame,
    gdp_long: pd.DataFrame,
    population_long: pd.DataFrame,
) -> Tuple[pd.DataFrame, JoinAudit]:
    """
    Build the prepared country-year table from the three long tables.

    Returns the table and the audit of rows lost on the way.
    """
    audit = JoinAudit(emissions_rows=int(len(emissions_long)))

    economic = build_economic_indicators(gdp_long, population_long)
    # several World Bank rows can share a name once overrides are applied
    duplicated = economic.duplicated(subset=["country_name", YEAR_COLUMN])
    audit.duplicate_economic_rows = int(duplicated.sum())
    economic = economic[~duplicated]
    audit.economic_rows = int(len(economic))
    audit.economic_rows_without_population = int(economic["population"].isna().sum())

    joined = emissions_long.merge(
        economic,
        left_on=["country", YEAR_COLUMN],
        right_on=["country_name", YEAR_COLUMN],
        how="left",
        indicator=True,
    )
    unmatched = joined["_merge"] == "left_only"
    audit.unmatched_emission_rows = int(unmatched.sum())
    audit.unmatched_countries = sorted(
        str(name) for name in joined.loc[unmatched, "country"].dropna().unique()
    )

    joined = joined[~unmatched].drop(columns=["_merge", "country_name"])

    complete = joined[PREPARED_COLUMNS].notna().all(axis=1)
    audit.dropped_incomplete_rows = int((~complete).sum())
    prepared = joined.loc[complete, PREPARED_COLUMNS].reset_index(drop=True)

    prepared[YEAR_COLUMN] = prepared[YEAR_COLUMN].astype("int64")
    for col in ["emissions", "gdp", "population"]:
        prepared[col] = prepared[col].astype("float64")
    audit.prepared_rows = int(len(prepared))

    LOG.info(
        "Merge: %d emission rows -> %d prepared rows "
        "(%d without economic match, %d incomplete)",
        audit.emissions_rows,
        audit.prepared_rows,
        audit.unmatched_emission_rows,
        audit.dropped_incomplete_rows,
    )
    if audit.duplicate_economic_rows:
        LOG.warning(
            "Merge: dropped %d economic rows sharing a (country_name, year) key",
            audit.duplicate_economic_rows,
        )
    if audit.unmatched_countries:
        LOG.warning(
            "Merge: %d emission countries have no economic match, e.g. %s",
            len(audit.unmatched_countries),
            audit.unmatched_countries[:_MAX_LOGGED_NAMES],
        )

    return prepared, audit


def save_prepared_parquet_partitions(
    df: pd.DataFrame,
    *,
    output_dir: Path | str = PREPARED_OUTPUT_DIR,
) -> List[Path]:
    """
    Save the prepared table partitioned by year in Parquet format.

    Returns the list of generated paths.
    """
    if df.empty or YEAR_COLUMN not in df.columns:
        return []

    output_root = Path(output_dir)
    output_root.mkdir(parents=True, exist_ok=True)

    output_paths: List[Path] = []
    for year_value, df_year in df.groupby(YEAR_COLUMN):
        year_dir = output_root / f"year={int(year_value)}"
        year_dir.mkdir(parents=True, exist_ok=True)

        file_path = year_dir / PREPARED_PARQUET_NAME
        df_year.to_parquet(file_path, index=False)
        output_paths.append(file_path)

    LOG.info("Saved %d prepared partitions under %s", len(output_paths), output_root)
    return output_paths


def load_prepared_parquet(input_dir: Path | str = PREPARED_OUTPUT_DIR) -> pd.DataFrame:
    """Read back every partition written by save_prepared_parquet_partitions."""
    root = Path(input_dir)
    frames = [pd.read_parquet(path) for path in sorted(root.rglob(PREPARED_PARQUET_NAME))]
    if not frames:
        return pd.DataFrame(columns=PREPARED_COLUMNS)
    return pd.concat(frames, ignore_index=True)


__all__ = [
    "PREPARED_OUTPUT_DIR",
    "PREPARED_PARQUET_NAME",
    "PREPARED_COLUMNS",
    "JoinAudit",
    "build_economic_indicators",
    "merge_prepared_country_year",
    "save_prepared_parquet_partitions",
    "load_prepared_parquet",
]
