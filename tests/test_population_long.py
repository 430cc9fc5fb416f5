"""Tests for transformations.population_long."""

from transformations import POPULATION_COLUMNS


def test_missing_rows_dropped(population_long):
    assert population_long["population"].notna().all()
    assert "NWH" not in set(population_long["country_code"])
    assert len(population_long) == 4 * 3


def test_country_name_dropped(population_long):
    assert list(population_long.columns) == POPULATION_COLUMNS


def test_values_not_imputed(population_wide, schemas):
    from transformations import build_population_long_dataframe

    partial = population_wide.copy()
    partial.loc[partial["Country Code"] == "IND", "2017"] = None

    long_df = build_population_long_dataframe(partial, schemas["population"])
    india = long_df[long_df["country_code"] == "IND"]

    assert sorted(india["year"]) == [2018, 2019]
