"""Tests for env_loader."""

import os
from pathlib import Path

import pytest

from common.errors import ConfigError
from env_loader import PipelineSettings, load_dotenv_if_present


def test_defaults():
    settings = PipelineSettings.from_env({})

    assert settings.missing_sentinel == "N/A"
    assert settings.gdp_encoding == "latin-1"
    assert settings.industrialized_threshold == 45.0
    assert settings.reconcile_country_names is False
    assert settings.country_mapping_overrides_csv.name == "country_mapping_overrides.csv"


def test_from_env_values():
    settings = PipelineSettings.from_env(
        {
            "EMISSIONS_CSV": "in/em.csv",
            "WB_FIRST_YEAR": "1990",
            "INDUSTRIALIZED_THRESHOLD": "50.5",
            "RECONCILE_COUNTRY_NAMES": "yes",
            "EMISSIONS_SECTOR": "Energy",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.emissions_csv == Path("in/em.csv")
    assert settings.wb_first_year == 1990
    assert settings.industrialized_threshold == 50.5
    assert settings.reconcile_country_names is True
    assert settings.sector == "Energy"
    assert settings.log_level == "DEBUG"


def test_invalid_integer():
    with pytest.raises(ConfigError, match="WB_LAST_YEAR") as excinfo:
        PipelineSettings.from_env({"WB_LAST_YEAR": "twenty"})

    assert isinstance(excinfo.value, ValueError)


def test_unknown_log_level():
    with pytest.raises(ConfigError, match="LOUD"):
        PipelineSettings.from_env({"LOG_LEVEL": "loud"})

    with pytest.raises(ConfigError):
        PipelineSettings().with_overrides(log_level="CHATTY")


def test_with_overrides_ignores_none():
    settings = PipelineSettings().with_overrides(output_dir=Path("out"), sector=None)

    assert settings.output_dir == Path("out")
    assert settings.sector is None


def test_dotenv_does_not_overwrite(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nGDP_ENCODING=cp1252\nMISSING_SENTINEL=\"..\"\n")
    monkeypatch.setenv("GDP_ENCODING", "utf-8")
    monkeypatch.setenv("MISSING_SENTINEL", "placeholder")
    monkeypatch.delenv("MISSING_SENTINEL")

    load_dotenv_if_present(str(env_file))

    assert os.environ["GDP_ENCODING"] == "utf-8"
    assert os.environ["MISSING_SENTINEL"] == ".."
