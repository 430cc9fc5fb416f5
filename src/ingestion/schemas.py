"""
Explicit schemas for the wide source tables.

Each source declares which columns identify a row, which columns hold one
value per year, and which columns are discarded. Year columns are listed
explicitly (from a year range) instead of being guessed from column names,
so a misnamed column fails validation at load time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from common.errors import ConfigError

EMISSIONS_ID_COLUMNS: Tuple[str, ...] = ("Country", "Data source", "Sector", "Gas", "Unit")
WB_ID_COLUMNS: Tuple[str, ...] = ("Country Name", "Country Code")
WB_INDICATOR_COLUMNS: Tuple[str, ...] = ("Indicator Name", "Indicator Code")


@dataclass(frozen=True)
class WideTableSchema:
    """
    Layout of a wide table with one column per year.

    Attributes
    ----------
    name:
        Logical dataset name, used in log and error messages.
    id_columns:
        Columns identifying a row (kept through the reshape).
    years:
        Every year expected as a column, in any order.
    drop_columns:
        Known columns that are read but discarded before the reshape.
    encoding:
        Text encoding of the file.
    skiprows:
        Leading lines to skip before the header row.
    """

    name: str
    id_columns: Tuple[str, ...]
    years: Tuple[int, ...]
    drop_columns: Tuple[str, ...] = ()
    encoding: str = "utf-8"
    skiprows: int = 0

    @property
    def year_columns(self) -> Tuple[str, ...]:
        return tuple(str(year) for year in self.years)

    @property
    def expected_columns(self) -> Tuple[str, ...]:
        return self.id_columns + self.drop_columns + self.year_columns

    def year_of(self, column: str) -> int:
        """Map a declared year column back to its integer year."""
        if column not in self.year_columns:
            raise KeyError(f"{column!r} is not a year column of {self.name}")
        return int(column)


def _year_range(first_year: int, last_year: int) -> Tuple[int, ...]:
    if last_year < first_year:
        raise ConfigError(f"Invalid year range: {first_year}..{last_year}")
    return tuple(range(first_year, last_year + 1))


def emissions_schema(
    first_year: int = 1990,
    last_year: int = 2019,
    *,
    encoding: str = "utf-8",
) -> WideTableSchema:
    return WideTableSchema(
        name="emissions",
        id_columns=EMISSIONS_ID_COLUMNS,
        years=_year_range(first_year, last_year),
        encoding=encoding,
    )


def gdp_schema(
    first_year: int = 1960,
    last_year: int = 2020,
    *,
    encoding: str = "latin-1",
    skiprows: int = 0,
) -> WideTableSchema:
    return WideTableSchema(
        name="gdp",
        id_columns=WB_ID_COLUMNS,
        years=_year_range(first_year, last_year),
        drop_columns=WB_INDICATOR_COLUMNS,
        encoding=encoding,
        skiprows=skiprows,
    )


def population_schema(
    first_year: int = 1960,
    last_year: int = 2020,
    *,
    encoding: str = "utf-8",
    skiprows: int = 0,
) -> WideTableSchema:
    return WideTableSchema(
        name="population",
        id_columns=WB_ID_COLUMNS,
        years=_year_range(first_year, last_year),
        encoding=encoding,
        skiprows=skiprows,
    )


def build_default_schemas(settings) -> Dict[str, WideTableSchema]:
    """Schemas for the three sources, parametrized by PipelineSettings."""
    return {
        "emissions": emissions_schema(
            settings.emissions_first_year,
            settings.emissions_last_year,
        ),
        "gdp": gdp_schema(
            settings.wb_first_year,
            settings.wb_last_year,
            encoding=settings.gdp_encoding,
            skiprows=settings.wb_skiprows,
        ),
        "population": population_schema(
            settings.wb_first_year,
            settings.wb_last_year,
            skiprows=settings.wb_skiprows,
        ),
    }


__all__ = [
    "EMISSIONS_ID_COLUMNS",
    "WB_ID_COLUMNS",
    "WB_INDICATOR_COLUMNS",
    "WideTableSchema",
    "emissions_schema",
    "gdp_schema",
    "population_schema",
    "build_default_schemas",
]
