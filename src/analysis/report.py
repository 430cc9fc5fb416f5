"""
Markdown report assembling the summary tables and charts.

Layout of `output_dir`:

    report.md
    global_gdp_emissions.png
    emissions_by_status_boxplot.png
    emissions_by_status_line.png
    top_emitters.png
    top_industrialized_emitters.png
    top_non_industrialized_emitters.png
    log_population_vs_log_emissions.png
    log_gdp_vs_log_emissions.png

The two log-log charts are left out when fewer than MIN_FIT_POINTS rows
have strictly positive values.

All statistics are computed before the first file is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from transformations.prepared_country_year import JoinAudit
from .charts import (
    plot_emissions_boxplot_by_status,
    plot_emissions_line_by_status,
    plot_global_time_series,
    plot_log_scatter,
    plot_top_emitters_bar,
)
from .summaries import (
    DEFAULT_INDUSTRIALIZED_THRESHOLD,
    INDUSTRIALIZED,
    NON_INDUSTRIALIZED,
    LogLinearFit,
    bottom_emitters,
    can_fit_log_linear,
    classify_industrialization,
    fit_log_linear,
    head_tail,
    latest_year,
    status_counts,
    top_emitters,
    top_emitters_by_status,
)

LOG = logging.getLogger(__name__)

REPORT_MD_NAME = "report.md"

_FLOAT_FORMAT = ",.2f"

# (x column, axis label) of the log-log scatter plots
_LOG_LOG_AXES = [("population", "population"), ("gdp", "normalized GDP")]

NO_FIT_TEXT = "_Not enough positive observations for a log-log fit._"


@dataclass
class ReportArtifacts:
    markdown_path: Path
    chart_paths: Dict[str, Path] = field(default_factory=dict)

    def all_paths(self) -> List[Path]:
        return [self.markdown_path, *self.chart_paths.values()]


def _table(df: pd.DataFrame) -> str:
    if df.empty:
        return "_No rows._"
    return df.to_markdown(index=False, floatfmt=_FLOAT_FORMAT)


def _fits_table(fits: List[LogLinearFit]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "x": f"log({fit.x_column})",
                "y": f"log({fit.y_column})",
                "slope": fit.slope,
                "intercept": fit.intercept,
                "pearson_r": fit.pearson_r,
                "r_squared": fit.r_squared,
                "n": fit.n,
            }
            for fit in fits
        ]
    )


def _audit_table(audit: JoinAudit) -> pd.DataFrame:
    counts = audit.to_dict()
    unmatched = counts.pop("unmatched_countries")
    rows = [{"measure": key, "value": value} for key, value in counts.items()]
    rows.append({"measure": "unmatched_countries", "value": len(unmatched)})
    return pd.DataFrame(rows)


def _image(title: str, path: Path) -> str:
    return f"![{title}]({path.name})"


def build_report(
    prepared: pd.DataFrame,
    output_dir: Path | str,
    *,
    threshold: float = DEFAULT_INDUSTRIALIZED_THRESHOLD,
    audit: Optional[JoinAudit] = None,
    head_rows: int = 5,
) -> ReportArtifacts:
    """
    Render the full report for a prepared country-year table.

    Raises ValueError when `prepared` is empty.
    """
    if prepared.empty:
        raise ValueError("Prepared table is empty; nothing to report")

    df = classify_industrialization(prepared, threshold=threshold)
    year = latest_year(df)

    preview = head_tail(df.drop(columns=["industrialized", "status"]), n=head_rows)
    top10 = top_emitters(df, n=10)
    bottom5 = bottom_emitters(df, n=5)
    top_ind = top_emitters_by_status(df, INDUSTRIALIZED, year=year, n=10)
    top_non_ind = top_emitters_by_status(df, NON_INDUSTRIALIZED, year=year, n=10)
    counts = status_counts(df)
    fits = {
        x_column: fit_log_linear(df, x_column)
        for x_column, _ in _LOG_LOG_AXES
        if can_fit_log_linear(df, x_column)
    }
    for x_column, _ in _LOG_LOG_AXES:
        if x_column not in fits:
            LOG.warning("Skipping log(%s) vs log(emissions): too few positive pairs", x_column)

    output_root = Path(output_dir)
    output_root.mkdir(parents=True, exist_ok=True)

    charts: Dict[str, Path] = {
        "global_time_series": plot_global_time_series(df, output_root),
        "status_boxplot": plot_emissions_boxplot_by_status(df, output_root),
        "status_line": plot_emissions_line_by_status(df, output_root),
        "top_emitters": plot_top_emitters_bar(
            top10,
            output_root,
            value_column="total_emissions",
            title="Top 10 emitters (all years)",
            file_name="top_emitters.png",
        ),
        "top_industrialized": plot_top_emitters_bar(
            top_ind,
            output_root,
            value_column="emissions",
            title=f"Top 10 industrialized emitters ({year})",
            file_name="top_industrialized_emitters.png",
            color="tab:red",
        ),
        "top_non_industrialized": plot_top_emitters_bar(
            top_non_ind,
            output_root,
            value_column="emissions",
            title=f"Top 10 non-industrialized emitters ({year})",
            file_name="top_non_industrialized_emitters.png",
            color="tab:blue",
        ),
    }
    for x_column, x_label in _LOG_LOG_AXES:
        if x_column in fits:
            charts[f"log_{x_column}"] = plot_log_scatter(
                df,
                output_root,
                x_column=x_column,
                x_label=x_label,
                fit=fits[x_column],
            )

    sections = [
        "# Greenhouse-gas emissions and socioeconomic factors",
        "",
        f"Prepared dataset: {len(df):,} country-years, "
        f"{df['country'].nunique():,} countries, "
        f"years {int(df['year'].min())}-{year}.",
        "",
        f"A country-year is classified as *industrialized* when its normalized "
        f"GDP per capita (1 + GDP/100) exceeds {threshold:g}.",
        "",
        "## Prepared dataset (head and tail)",
        "",
        _table(preview),
        "",
        "## Industrialization status",
        "",
        _table(counts),
        "",
        "## Global GDP and emissions",
        "",
        _image("Global GDP and emissions", charts["global_time_series"]),
        "",
        "## Emissions by industrialization status",
        "",
        _image("Emissions boxplot by status", charts["status_boxplot"]),
        "",
        _image("Emissions over time by status", charts["status_line"]),
        "",
        "## Top 10 emitters (all years)",
        "",
        _table(top10),
        "",
        _image("Top emitters", charts["top_emitters"]),
        "",
        "## Bottom 5 emitters (all years)",
        "",
        _table(bottom5),
        "",
        f"## Top 10 industrialized emitters ({year})",
        "",
        _table(top_ind),
        "",
        _image("Top industrialized emitters", charts["top_industrialized"]),
        "",
        f"## Top 10 non-industrialized emitters ({year})",
        "",
        _table(top_non_ind),
        "",
        _image("Top non-industrialized emitters", charts["top_non_industrialized"]),
        "",
        "## Population, GDP and emissions (log-log)",
        "",
    ]
    if fits:
        sections += [_table(_fits_table(list(fits.values()))), ""]
    else:
        sections += [NO_FIT_TEXT, ""]
    for x_column, x_label in _LOG_LOG_AXES:
        if x_column in fits:
            sections += [
                _image(f"log({x_label}) vs log(emissions)", charts[f"log_{x_column}"]),
                "",
            ]

    if audit is not None:
        sections += [
            "## Data preparation audit",
            "",
            _table(_audit_table(audit)),
            "",
        ]
        if audit.unmatched_countries:
            sections += [
                "Countries in the emissions source without a GDP/population match: "
                + ", ".join(audit.unmatched_countries),
                "",
            ]

    markdown_path = output_root / REPORT_MD_NAME
    markdown_path.write_text("\n".join(sections), encoding="utf-8")
    LOG.info("Report written to %s (%d charts)", markdown_path, len(charts))

    return ReportArtifacts(markdown_path=markdown_path, chart_paths=charts)


__all__ = [
    "NO_FIT_TEXT",
    "REPORT_MD_NAME",
    "ReportArtifacts",
    "build_report",
]
