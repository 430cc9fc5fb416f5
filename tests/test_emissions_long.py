"""Tests for transformations.emissions_long."""

import pandas as pd
import pytest

from common.errors import DataQualityError
from transformations import EMISSIONS_COLUMNS, build_emissions_long_dataframe


def test_no_missing_emissions_survive(emissions_long):
    assert emissions_long["emissions"].notna().all()
    # 5 countries x 3 years, minus the missing United States 2017 value
    assert len(emissions_long) == 14


def test_output_columns(emissions_long):
    assert list(emissions_long.columns) == EMISSIONS_COLUMNS
    assert "data_source" not in emissions_long.columns


def test_one_row_per_country_year(emissions_long):
    assert not emissions_long.duplicated(subset=["country", "year"]).any()


def test_max_dropped_exceeded(emissions_wide, schemas):
    with pytest.raises(DataQualityError, match="dropped 1 rows"):
        build_emissions_long_dataframe(emissions_wide, schemas["emissions"], max_dropped=0)


def test_max_dropped_respected(emissions_wide, schemas):
    long_df = build_emissions_long_dataframe(emissions_wide, schemas["emissions"], max_dropped=1)
    assert len(long_df) == 14


def _with_extra_sector(emissions_wide):
    extra = emissions_wide.assign(Sector="Energy")
    return pd.concat([emissions_wide, extra], ignore_index=True)


def test_several_sectors_require_a_filter(emissions_wide, schemas):
    with pytest.raises(DataQualityError, match="several rows per"):
        build_emissions_long_dataframe(_with_extra_sector(emissions_wide), schemas["emissions"])


def test_sector_filter_selects_one_series(emissions_wide, schemas):
    long_df = build_emissions_long_dataframe(
        _with_extra_sector(emissions_wide),
        schemas["emissions"],
        sector="Energy",
        gas="All GHG",
    )

    assert set(long_df["sector"]) == {"Energy"}
    assert len(long_df) == 14


def test_unknown_sector(emissions_wide, schemas):
    with pytest.raises(DataQualityError, match="No emissions rows"):
        build_emissions_long_dataframe(emissions_wide, schemas["emissions"], sector="Waste")


def test_negative_emissions_are_kept(emissions_wide, schemas, caplog):
    sink = emissions_wide.copy()
    sink.loc[sink["Country"] == "Atlantis", "2019"] = -3.0

    with caplog.at_level("WARNING"):
        long_df = build_emissions_long_dataframe(sink, schemas["emissions"])

    assert (long_df["emissions"] < 0).sum() == 1
    assert "negative emissions" in caplog.text
