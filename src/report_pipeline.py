"""
Entrypoint for the GHG emissions x socioeconomic EDA report.

Runs, in order:

1. Load the three wide source files (emissions, GDP per capita, population)
2. Reshape emissions to long country-year rows
3. Reshape, normalize and impute GDP per capita
4. Reshape population
5. Merge into the prepared country-year table
6. Render the report (summary tables + charts)

Intended usage:

    PYTHONPATH=src python -m report_pipeline

Settings come from environment variables / a local `.env` file
(see env_loader.PipelineSettings); command-line flags override them:

    PYTHONPATH=src python -m report_pipeline --output-dir report --save-prepared
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from analysis import build_report
from common.errors import ConfigError, DataQualityError, PipelineError
from env_loader import PipelineSettings
from ingestion import build_default_schemas, load_wide_table
from transformations import (
    apply_country_overrides,
    build_emissions_long_dataframe,
    build_population_long_dataframe,
    load_country_overrides,
    merge_prepared_country_year,
    prepare_gdp_long_dataframe,
    save_prepared_parquet_partitions,
)

LOG = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def run_report_pipeline(settings: PipelineSettings) -> Dict[str, List[Path]]:
    """
    Run the full pipeline end-to-end.

    Returns
    -------
    artefacts:
        Dictionary mapping step names to lists of generated Paths.
    """
    artefacts: Dict[str, List[Path]] = {}
    schemas = build_default_schemas(settings)

    # 1. Load
    print("[1/6] Loading source files...")
    emissions_wide = load_wide_table(
        settings.emissions_csv,
        schemas["emissions"],
        missing_sentinel=settings.missing_sentinel,
    )
    gdp_wide = load_wide_table(
        settings.gdp_csv,
        schemas["gdp"],
        missing_sentinel=settings.missing_sentinel,
    )
    population_wide = load_wide_table(
        settings.population_csv,
        schemas["population"],
        missing_sentinel=settings.missing_sentinel,
    )

    # 2. Emissions
    print("[2/6] Reshaping emissions...")
    emissions_long = build_emissions_long_dataframe(
        emissions_wide,
        schemas["emissions"],
        sector=settings.sector,
        gas=settings.gas,
    )
    print(f"      {len(emissions_long)} emission rows.")

    # 3. GDP
    print("[3/6] Reshaping, normalizing and imputing GDP per capita...")
    gdp_long = prepare_gdp_long_dataframe(gdp_wide, schemas["gdp"])
    if settings.reconcile_country_names:
        overrides = load_country_overrides(settings.country_mapping_overrides_csv)
        gdp_long = apply_country_overrides(gdp_long, overrides)
    print(f"      {len(gdp_long)} GDP rows.")

    # 4. Population
    print("[4/6] Reshaping population...")
    population_long = build_population_long_dataframe(population_wide, schemas["population"])
    print(f"      {len(population_long)} population rows.")

    # 5. Merge
    print("[5/6] Merging into the prepared country-year table...")
    prepared, audit = merge_prepared_country_year(emissions_long, gdp_long, population_long)
    print(
        f"      {audit.prepared_rows} prepared rows "
        f"({len(audit.unmatched_countries)} emission countries without a match)."
    )
    if prepared.empty:
        raise DataQualityError("No country-year rows left after merging the three sources")

    # 6. Report
    print("[6/6] Rendering report...")
    report = build_report(
        prepared,
        settings.output_dir,
        threshold=settings.industrialized_threshold,
        audit=audit,
    )
    artefacts["report"] = report.all_paths()
    print(f"      Report: {report.markdown_path}")

    if settings.save_prepared:
        artefacts["prepared"] = save_prepared_parquet_partitions(
            prepared,
            output_dir=Path(settings.output_dir) / "prepared",
        )
        print(f"      Saved {len(artefacts['prepared'])} prepared parquet partitions.")

    print("\nPipeline completed successfully.")
    return artefacts


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the GHG emissions x GDP x population EDA report.",
    )
    parser.add_argument("--emissions-csv", type=Path, default=None, help="Wide emissions CSV.")
    parser.add_argument("--gdp-csv", type=Path, default=None, help="Wide GDP per capita CSV.")
    parser.add_argument("--population-csv", type=Path, default=None, help="Wide population CSV.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for report.md and charts (default: report).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Normalized GDP above which a country-year counts as industrialized (default: 45).",
    )
    parser.add_argument("--sector", default=None, help="Keep only this emissions sector.")
    parser.add_argument("--gas", default=None, help="Keep only this gas.")
    parser.add_argument(
        "--save-prepared",
        action="store_true",
        default=None,
        help="Also persist the prepared table as year-partitioned Parquet.",
    )
    parser.add_argument(
        "--reconcile-country-names",
        action="store_true",
        default=None,
        help="Rename World Bank country names with the overrides CSV before merging.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO).")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = PipelineSettings.from_env().with_overrides(
            emissions_csv=args.emissions_csv,
            gdp_csv=args.gdp_csv,
            population_csv=args.population_csv,
            output_dir=args.output_dir,
            industrialized_threshold=args.threshold,
            sector=args.sector,
            gas=args.gas,
            save_prepared=args.save_prepared,
            reconcile_country_names=args.reconcile_country_names,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ConfigError as exc:
        logging.basicConfig(format=LOG_FORMAT)
        LOG.error("Invalid configuration: %s", exc)
        return 1

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        run_report_pipeline(settings)
    except PipelineError as exc:
        LOG.error("Pipeline failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())


__all__ = ["run_report_pipeline", "build_arg_parser", "main"]
