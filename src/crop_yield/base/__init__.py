"""Base aggregation and completion steps for crop yield distributions"""

from src.crop_yield.base.aggregation import (
    attach_continent,
    bucket_and_count,
    compute_mean_yield,
)
from src.crop_yield.base.exceptions import DataUnavailableError, EmptyFacetError
from src.crop_yield.base.grid_completion import complete_grid
from src.crop_yield.base.models import ContinentCategory, PLACEHOLDER_CONTINENT

__all__ = [
    "attach_continent",
    "bucket_and_count",
    "compute_mean_yield",
    "complete_grid",
    "ContinentCategory",
    "PLACEHOLDER_CONTINENT",
    "DataUnavailableError",
    "EmptyFacetError",
]
