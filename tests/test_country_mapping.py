"""Tests for transformations.country_mapping."""

import pandas as pd
import pytest

from common.errors import MissingFileError, SchemaError
from transformations import (
    COUNTRY_MAPPING_OVERRIDES_CSV,
    apply_country_overrides,
    load_country_overrides,
    normalize_country_name,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Côte d'Ivoire", "cote d ivoire"),
        ("  Korea,  Rep. ", "korea rep"),
        ("Russian Federation", "russian federation"),
        (None, ""),
    ],
)
def test_normalize_country_name(name, expected):
    assert normalize_country_name(name) == expected


def test_bundled_overrides_load():
    overrides = load_country_overrides(COUNTRY_MAPPING_OVERRIDES_CSV)

    assert {"source_country_name", "country_name", "source_country_name_normalized"} <= set(overrides.columns)
    assert not overrides.empty


def test_apply_overrides_renames_known_spellings():
    overrides = load_country_overrides()
    df = pd.DataFrame(
        {
            "country_name": ["Russian Federation", "Korea, Rep.", "China"],
            "year": [2019, 2019, 2019],
        }
    )

    out = apply_country_overrides(df, overrides)

    assert out["country_name"].tolist() == ["Russia", "South Korea", "China"]
    assert df["country_name"].tolist()[0] == "Russian Federation"


def test_overrides_missing_columns(tmp_path):
    path = tmp_path / "overrides.csv"
    path.write_text("from,to\nA,B\n")

    with pytest.raises(SchemaError):
        load_country_overrides(path)


def test_overrides_missing_file(tmp_path):
    with pytest.raises(MissingFileError):
        load_country_overrides(tmp_path / "absent.csv")
