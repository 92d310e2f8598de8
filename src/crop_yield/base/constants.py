"""
Common constants for crop yield data processing.
"""

# Generic column names used across all tables
COUNTRY_CODE_COLUMN = "country_code"
CROP_COLUMN = "crop"
YEAR_COLUMN = "year"
YIELD_VALUE_COLUMN = "yield_value"
MEAN_YIELD_COLUMN = "mean_yield"
CONTINENT_COLUMN = "continent"
YIELD_CLASS_COLUMN = "yield_class"
COUNT_COLUMN = "country_count"

YIELD_RECORD_COLUMNS = [
    COUNTRY_CODE_COLUMN,
    CROP_COLUMN,
    YEAR_COLUMN,
    YIELD_VALUE_COLUMN,
]
CLASS_COUNT_KEYS = [YIELD_CLASS_COLUMN, CROP_COLUMN, CONTINENT_COLUMN]
