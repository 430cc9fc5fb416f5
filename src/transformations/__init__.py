"""
Transformations layer
----------------------

Turns the wide source tables into long country-year tables and merges them
into the prepared dataset consumed by the analysis layer.
"""

from .reshape import (  # noqa: F401
    YEAR_COLUMN,
    long_to_wide,
    wide_to_long,
)
from .emissions_long import (  # noqa: F401
    EMISSIONS_COLUMNS,
    build_emissions_long_dataframe,
)
from .gdp_long import (  # noqa: F401
    GDP_COLUMNS,
    build_gdp_long_dataframe,
    geometric_mean_by_group,
    impute_gdp_geometric_mean,
    prepare_gdp_long_dataframe,
    rescale_gdp,
)
from .population_long import (  # noqa: F401
    POPULATION_COLUMNS,
    build_population_long_dataframe,
)
from .country_mapping import (  # noqa: F401
    COUNTRY_MAPPING_OVERRIDES_CSV,
    apply_country_overrides,
    load_country_overrides,
    normalize_country_name,
)
from .prepared_country_year import (  # noqa: F401
    PREPARED_COLUMNS,
    PREPARED_OUTPUT_DIR,
    JoinAudit,
    build_economic_indicators,
    load_prepared_parquet,
    merge_prepared_country_year,
    save_prepared_parquet_partitions,
)

__all__ = [
    "YEAR_COLUMN",
    "EMISSIONS_COLUMNS",
    "GDP_COLUMNS",
    "POPULATION_COLUMNS",
    "PREPARED_COLUMNS",
    "PREPARED_OUTPUT_DIR",
    "COUNTRY_MAPPING_OVERRIDES_CSV",
    "JoinAudit",
    "wide_to_long",
    "long_to_wide",
    "build_emissions_long_dataframe",
    "build_gdp_long_dataframe",
    "rescale_gdp",
    "geometric_mean_by_group",
    "impute_gdp_geometric_mean",
    "prepare_gdp_long_dataframe",
    "build_population_long_dataframe",
    "normalize_country_name",
    "load_country_overrides",
    "apply_country_overrides",
    "build_economic_indicators",
    "merge_prepared_country_year",
    "save_prepared_parquet_partitions",
    "load_prepared_parquet",
]
