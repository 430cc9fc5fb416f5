"""
Ingestion layer
---------------

Reads the three static source files (emissions, GDP per capita, population)
into wide DataFrames, validated against explicit schemas.
"""

from .schemas import (  # noqa: F401
    EMISSIONS_ID_COLUMNS,
    WB_ID_COLUMNS,
    WB_INDICATOR_COLUMNS,
    WideTableSchema,
    build_default_schemas,
    emissions_schema,
    gdp_schema,
    population_schema,
)
from .csv_loader import (  # noqa: F401
    DEFAULT_MISSING_SENTINEL,
    load_wide_table,
    validate_wide_table,
)

__all__ = [
    "EMISSIONS_ID_COLUMNS",
    "WB_ID_COLUMNS",
    "WB_INDICATOR_COLUMNS",
    "WideTableSchema",
    "build_default_schemas",
    "emissions_schema",
    "gdp_schema",
    "population_schema",
    "DEFAULT_MISSING_SENTINEL",
    "load_wide_table",
    "validate_wide_table",
]
