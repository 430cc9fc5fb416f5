"""Tests for analysis.summaries."""

import numpy as np
import pandas as pd
import pytest

from analysis import (
    INDUSTRIALIZED,
    NON_INDUSTRIALIZED,
    bottom_emitters,
    can_fit_log_linear,
    classify_industrialization,
    emissions_by_status_over_time,
    fit_log_linear,
    global_time_series,
    head_tail,
    latest_year,
    status_counts,
    top_emitters,
    top_emitters_by_status,
)


@pytest.fixture
def classified(prepared):
    return classify_industrialization(prepared)


def test_threshold_is_strict():
    df = pd.DataFrame({"gdp": [44.9, 45.0, 45.1]})

    out = classify_industrialization(df, threshold=45.0)

    assert out["industrialized"].tolist() == [False, False, True]
    assert out["status"].astype(str).tolist() == [NON_INDUSTRIALIZED, NON_INDUSTRIALIZED, INDUSTRIALIZED]


def test_classification_of_fixture(classified):
    status = classified.groupby("country")["status"].first().astype(str).to_dict()

    assert status == {
        "China": INDUSTRIALIZED,
        "India": NON_INDUSTRIALIZED,
        "United States": INDUSTRIALIZED,
    }


def test_head_tail_is_sorted(prepared):
    shuffled = prepared.sample(frac=1.0, random_state=0)

    out = head_tail(shuffled, n=2)

    assert list(zip(out["country"], out["year"])) == [
        ("China", 2017),
        ("China", 2018),
        ("United States", 2018),
        ("United States", 2019),
    ]


def test_head_tail_short_table(prepared):
    assert len(head_tail(prepared, n=5)) == len(prepared)


def test_top_and_bottom_emitters(prepared):
    top = top_emitters(prepared, n=10)
    bottom = bottom_emitters(prepared, n=1)

    assert top["country"].tolist() == ["China", "United States", "India"]
    assert top.loc[0, "total_emissions"] == 34500.0
    assert bottom["country"].tolist() == ["India"]


def test_latest_year(prepared):
    assert latest_year(prepared) == 2019

    with pytest.raises(ValueError):
        latest_year(prepared.iloc[0:0])


def test_top_emitters_by_status(classified):
    industrialized = top_emitters_by_status(classified, INDUSTRIALIZED)
    non_industrialized = top_emitters_by_status(classified, NON_INDUSTRIALIZED, n=1)

    assert industrialized["country"].tolist() == ["China", "United States"]
    assert set(industrialized["year"]) == {2019}
    assert non_industrialized["country"].tolist() == ["India"]


def test_top_emitters_by_status_explicit_year(classified):
    out = top_emitters_by_status(classified, INDUSTRIALIZED, year=2017)

    assert out["country"].tolist() == ["China"]


def test_global_time_series(prepared):
    series = global_time_series(prepared)

    assert series["year"].tolist() == [2017, 2018, 2019]
    assert series.loc[2, "total_emissions"] == 12000.0 + 6000.0 + 3400.0
    assert series.loc[0, "total_population"] == pytest.approx(1.386e9 + 1.339e9)


def test_emissions_by_status_over_time(classified):
    by_status = emissions_by_status_over_time(classified)
    row = by_status[(by_status["year"] == 2019) & (by_status["status"] == INDUSTRIALIZED)]

    assert row["total_emissions"].item() == 18000.0


def test_status_counts(classified):
    counts = status_counts(classified).set_index("status")

    assert counts.loc[INDUSTRIALIZED, "country_years"] == 5
    assert counts.loc[NON_INDUSTRIALIZED, "countries"] == 1


def test_fit_log_linear_power_law():
    x = np.array([1.0, 2.0, 4.0, 8.0, 16.0])
    df = pd.DataFrame({"population": x, "emissions": 3.0 * x ** 2})

    fit = fit_log_linear(df, "population")

    assert fit.slope == pytest.approx(2.0)
    assert fit.intercept == pytest.approx(np.log(3.0))
    assert fit.pearson_r == pytest.approx(1.0)
    assert fit.n == 5


def test_fit_log_linear_ignores_non_positive():
    df = pd.DataFrame(
        {
            "gdp": [1.0, 10.0, 100.0, 0.0, 50.0],
            "emissions": [1.0, 10.0, 100.0, 5.0, -2.0],
        }
    )

    fit = fit_log_linear(df, "gdp")

    assert fit.n == 3
    assert fit.slope == pytest.approx(1.0)


def test_fit_log_linear_needs_two_points():
    df = pd.DataFrame({"gdp": [1.0], "emissions": [1.0]})

    with pytest.raises(ValueError):
        fit_log_linear(df, "gdp")


@pytest.mark.parametrize(
    "emissions, expected",
    [
        ([1.0, 2.0], True),
        ([1.0, -2.0], False),
        ([-1.0, 0.0], False),
    ],
)
def test_can_fit_log_linear(emissions, expected):
    df = pd.DataFrame({"gdp": [10.0, 20.0], "emissions": emissions})

    assert can_fit_log_linear(df, "gdp") is expected
