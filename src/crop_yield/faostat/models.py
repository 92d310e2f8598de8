"""
Models and configuration for FAOSTAT crop yield data.

This module contains mappings between FAOSTAT item names and standardized crop
names, and the raw column names of the FAOSTAT production export.
"""

from typing import Dict, Set
from src.crop_yield.base.constants import (
    CONTINENT_COLUMN,
    COUNTRY_CODE_COLUMN,
    CROP_COLUMN,
    YEAR_COLUMN,
    YIELD_VALUE_COLUMN,
)

# Mapping from FAOSTAT item names (as they appear in the data) to standardized names
CROP_NAME_MAPPING: Dict[str, str] = {
    "Wheat": "wheat",
    "Maize (corn)": "maize",
    "Maize": "maize",
    "Rice": "rice",
    "Rice, paddy": "rice",
    "Barley": "barley",
    "Soya beans": "soybean",
    "Soybeans": "soybean",
    "Potatoes": "potato",
}

# Set of all supported standardized crops for validation
SUPPORTED_CROPS: Set[str] = set(CROP_NAME_MAPPING.values())

# Column names in the raw FAOSTAT export
RAW_DATA_COLUMNS = {
    COUNTRY_CODE_COLUMN: "Area Code (ISO3)",
    CROP_COLUMN: "Item",
    YEAR_COLUMN: "Year",
    YIELD_VALUE_COLUMN: "Value",
}
ELEMENT_COLUMN = "Element"

# Accepted column aliases in continent lookup files
LOOKUP_COLUMN_ALIASES = {
    COUNTRY_CODE_COLUMN: ["country_code", "iso3", "ISO3", "ISO_A3", "code", "Code"],
    CONTINENT_COLUMN: ["continent", "CONTINENT", "Continent"],
}
