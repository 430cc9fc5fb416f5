from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from common.errors import ConfigError

# Bundled overrides for the optional country-name reconciliation step.
DEFAULT_COUNTRY_MAPPING_OVERRIDES_CSV = (
    Path(__file__).parent / "transformations" / "country_mapping_overrides.csv"
)

_TRUTHY = {"1", "true", "yes", "on"}


def load_dotenv_if_present(path: str | None = None) -> None:
    """
    Lightweight .env loader used for local runs.

    - Reads KEY=VALUE pairs from the given file (default: ".env" in CWD).
    - Ignores empty lines and comments starting with "#".
    - Does *not* overwrite variables that are already present in os.environ.
    """
    env_path = Path(path or ".env")
    if not env_path.exists():
        return

    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError:
        return

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if not key:
            continue
        if key not in os.environ:
            os.environ[key] = value


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc


def _get_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc


def _get_bool(env: Mapping[str, str], key: str, default: bool = False) -> bool:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class PipelineSettings:
    """Run configuration for the report pipeline."""

    emissions_csv: Path = Path("data") / "historical_emissions.csv"
    gdp_csv: Path = Path("data") / "gdp_per_capita.csv"
    population_csv: Path = Path("data") / "population.csv"
    gdp_encoding: str = "latin-1"
    missing_sentinel: str = "N/A"
    emissions_first_year: int = 1990
    emissions_last_year: int = 2019
    wb_first_year: int = 1960
    wb_last_year: int = 2020
    wb_skiprows: int = 0
    output_dir: Path = Path("report")
    industrialized_threshold: float = 45.0
    sector: Optional[str] = None
    gas: Optional[str] = None
    save_prepared: bool = False
    reconcile_country_names: bool = False
    country_mapping_overrides_csv: Path = DEFAULT_COUNTRY_MAPPING_OVERRIDES_CSV
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "PipelineSettings":
        """
        Build settings from environment variables.

        When `env` is None, a `.env` file in the working directory is
        loaded first (see load_dotenv_if_present) and os.environ is used.
        """
        if env is None:
            load_dotenv_if_present()
            env = os.environ

        defaults = cls()
        return cls(
            emissions_csv=Path(env.get("EMISSIONS_CSV") or defaults.emissions_csv),
            gdp_csv=Path(env.get("GDP_CSV") or defaults.gdp_csv),
            population_csv=Path(env.get("POPULATION_CSV") or defaults.population_csv),
            gdp_encoding=env.get("GDP_ENCODING") or defaults.gdp_encoding,
            missing_sentinel=env.get("MISSING_SENTINEL") or defaults.missing_sentinel,
            emissions_first_year=_get_int(env, "EMISSIONS_FIRST_YEAR", defaults.emissions_first_year),
            emissions_last_year=_get_int(env, "EMISSIONS_LAST_YEAR", defaults.emissions_last_year),
            wb_first_year=_get_int(env, "WB_FIRST_YEAR", defaults.wb_first_year),
            wb_last_year=_get_int(env, "WB_LAST_YEAR", defaults.wb_last_year),
            wb_skiprows=_get_int(env, "WB_SKIPROWS", defaults.wb_skiprows),
            output_dir=Path(env.get("REPORT_OUTPUT_DIR") or defaults.output_dir),
            industrialized_threshold=_get_float(
                env, "INDUSTRIALIZED_THRESHOLD", defaults.industrialized_threshold
            ),
            sector=env.get("EMISSIONS_SECTOR") or None,
            gas=env.get("EMISSIONS_GAS") or None,
            save_prepared=_get_bool(env, "SAVE_PREPARED"),
            reconcile_country_names=_get_bool(env, "RECONCILE_COUNTRY_NAMES"),
            country_mapping_overrides_csv=Path(
                env.get("COUNTRY_MAPPING_OVERRIDES_CSV")
                or defaults.country_mapping_overrides_csv
            ),
            log_level=(env.get("LOG_LEVEL") or defaults.log_level).upper(),
        )

    def with_overrides(self, **changes: object) -> "PipelineSettings":
        """Return a copy with every non-None keyword applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


__all__ = [
    "DEFAULT_COUNTRY_MAPPING_OVERRIDES_CSV",
    "PipelineSettings",
    "load_dotenv_if_present",
]
