"""Shared fixtures: small wide source tables covering three years."""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from env_loader import PipelineSettings
from ingestion.schemas import emissions_schema, gdp_schema, population_schema
from transformations import (
    build_emissions_long_dataframe,
    build_population_long_dataframe,
    merge_prepared_country_year,
    prepare_gdp_long_dataframe,
)

FIRST_YEAR = 2017
LAST_YEAR = 2019


@pytest.fixture
def schemas():
    return {
        "emissions": emissions_schema(FIRST_YEAR, LAST_YEAR),
        "gdp": gdp_schema(FIRST_YEAR, LAST_YEAR),
        "population": population_schema(FIRST_YEAR, LAST_YEAR),
    }


@pytest.fixture
def emissions_wide():
    # Climate Watch lists the most recent year first.
    return pd.DataFrame(
        {
            "Country": ["China", "United States", "India", "Atlantis", "Russia"],
            "Data source": ["CAIT"] * 5,
            "Sector": ["Total including LUCF"] * 5,
            "Gas": ["All GHG"] * 5,
            "Unit": ["MtCO₂e"] * 5,
            "2019": [12000.0, 6000.0, 3400.0, 5.0, 2200.0],
            "2018": [11500.0, 6100.0, 3300.0, 5.0, 2150.0],
            "2017": [11000.0, np.nan, 3200.0, 5.0, 2100.0],
        }
    )


@pytest.fixture
def gdp_wide():
    return pd.DataFrame(
        {
            "Country Name": [
                "China",
                "United States",
                "India",
                "Atlantis",
                "Russian Federation",
                "Nowhere",
            ],
            "Country Code": ["CHN", "USA", "IND", "ATL", "RUS", "NWH"],
            "Indicator Name": ["GDP per capita (current US$)"] * 6,
            "Indicator Code": ["NY.GDP.PCAP.CD"] * 6,
            "2017": [8800.0, 60000.0, np.nan, 1000.0, 10700.0, np.nan],
            "2018": [9900.0, 62800.0, 2000.0, 1000.0, 11300.0, np.nan],
            "2019": [10200.0, 65100.0, np.nan, 1000.0, 11500.0, np.nan],
        }
    )


@pytest.fixture
def population_wide():
    return pd.DataFrame(
        {
            "Country Name": ["China", "United States", "India", "Russian Federation", "Nowhere"],
            "Country Code": ["CHN", "USA", "IND", "RUS", "NWH"],
            "2017": [1.386e9, 3.25e8, 1.339e9, 1.44e8, np.nan],
            "2018": [1.393e9, 3.27e8, 1.353e9, 1.44e8, np.nan],
            "2019": [1.398e9, 3.28e8, 1.366e9, 1.44e8, np.nan],
        }
    )


@pytest.fixture
def emissions_long(emissions_wide, schemas):
    return build_emissions_long_dataframe(emissions_wide, schemas["emissions"])


@pytest.fixture
def gdp_long(gdp_wide, schemas):
    return prepare_gdp_long_dataframe(gdp_wide, schemas["gdp"])


@pytest.fixture
def population_long(population_wide, schemas):
    return build_population_long_dataframe(population_wide, schemas["population"])


@pytest.fixture
def prepared_and_audit(emissions_long, gdp_long, population_long):
    return merge_prepared_country_year(emissions_long, gdp_long, population_long)


@pytest.fixture
def prepared(prepared_and_audit):
    return prepared_and_audit[0]


@pytest.fixture
def source_files(tmp_path: Path, emissions_wide, gdp_wide, population_wide):
    """The three wide tables written the way the real downloads look."""
    paths = {
        "emissions": tmp_path / "historical_emissions.csv",
        "gdp": tmp_path / "gdp_per_capita.csv",
        "population": tmp_path / "population.csv",
    }
    emissions_wide.to_csv(paths["emissions"], index=False, na_rep="N/A", encoding="utf-8")
    gdp_wide.to_csv(paths["gdp"], index=False, na_rep="N/A", encoding="latin-1")
    population_wide.to_csv(paths["population"], index=False, na_rep="N/A", encoding="utf-8")
    return paths


@pytest.fixture
def write_default_range_sources(tmp_path: Path):
    """
    Factory writing one-country sources that span the default year ranges.

    Only 2019 carries values, so the prepared table has a single row for
    ("China", 2019).
    """
    settings = PipelineSettings()
    emission_years = range(settings.emissions_last_year, settings.emissions_first_year - 1, -1)
    wb_years = range(settings.wb_first_year, settings.wb_last_year + 1)

    def _write(emissions_2019: float = 12000.0):
        emissions = pd.DataFrame(
            {
                "Country": ["China"],
                "Data source": ["CAIT"],
                "Sector": ["Total including LUCF"],
                "Gas": ["All GHG"],
                "Unit": ["MtCO₂e"],
                **{str(year): [np.nan] for year in emission_years},
            }
        )
        emissions["2019"] = emissions_2019
        gdp = pd.DataFrame(
            {
                "Country Name": ["China"],
                "Country Code": ["CHN"],
                "Indicator Name": ["GDP per capita (current US$)"],
                "Indicator Code": ["NY.GDP.PCAP.CD"],
                **{str(year): [np.nan] for year in wb_years},
            }
        )
        gdp["2019"] = 10200.0
        population = pd.DataFrame(
            {
                "Country Name": ["China"],
                "Country Code": ["CHN"],
                **{str(year): [np.nan] for year in wb_years},
            }
        )
        population["2019"] = 1.398e9

        paths = {
            "emissions": tmp_path / "historical_emissions.csv",
            "gdp": tmp_path / "gdp_per_capita.csv",
            "population": tmp_path / "population.csv",
        }
        emissions.to_csv(paths["emissions"], index=False, na_rep="N/A", encoding="utf-8")
        gdp.to_csv(paths["gdp"], index=False, na_rep="N/A", encoding="latin-1")
        population.to_csv(paths["population"], index=False, na_rep="N/A", encoding="utf-8")
        return paths

    return _write
