"""
Analysis layer
--------------

Statistics, charts and the Markdown report built from the prepared
country-year dataset.
"""

from .summaries import (  # noqa: F401
    DEFAULT_INDUSTRIALIZED_THRESHOLD,
    INDUSTRIALIZED,
    NON_INDUSTRIALIZED,
    MIN_FIT_POINTS,
    LogLinearFit,
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
from .report import (  # noqa: F401
    REPORT_MD_NAME,
    ReportArtifacts,
    build_report,
)

__all__ = [
    "DEFAULT_INDUSTRIALIZED_THRESHOLD",
    "INDUSTRIALIZED",
    "NON_INDUSTRIALIZED",
    "LogLinearFit",
    "classify_industrialization",
    "head_tail",
    "top_emitters",
    "bottom_emitters",
    "latest_year",
    "top_emitters_by_status",
    "global_time_series",
    "emissions_by_status_over_time",
    "status_counts",
    "MIN_FIT_POINTS",
    "can_fit_log_linear",
    "fit_log_linear",
    "REPORT_MD_NAME",
    "ReportArtifacts",
    "build_report",
]
