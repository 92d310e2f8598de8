"""
FAOSTAT crop yield data loading package.

This package reads FAOSTAT crop production exports into standardized yield
records and loads country to continent lookup tables.
"""

from src.crop_yield.faostat.models import CROP_NAME_MAPPING, SUPPORTED_CROPS

__all__ = [
    "CROP_NAME_MAPPING",
    "SUPPORTED_CROPS",
]
