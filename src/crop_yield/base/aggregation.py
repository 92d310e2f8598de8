"""
Country-level yield aggregation.

Turns per-year yield records into one mean yield per country and crop,
attaches a continent to every country and counts countries per whole-ton
yield class.
"""

import logging
from typing import Tuple

import numpy as np
import pandas as pd

from src.constants import UNIT_CONVERSION_FACTOR
from src.crop_yield.base.constants import (
    CLASS_COUNT_KEYS,
    CONTINENT_COLUMN,
    COUNT_COLUMN,
    COUNTRY_CODE_COLUMN,
    CROP_COLUMN,
    MEAN_YIELD_COLUMN,
    YEAR_COLUMN,
    YIELD_CLASS_COLUMN,
    YIELD_VALUE_COLUMN,
)
from src.crop_yield.base.models import PLACEHOLDER_CONTINENT

logger = logging.getLogger(__name__)


def compute_mean_yield(
    records: pd.DataFrame, year_range: Tuple[int, int]
) -> pd.DataFrame:
    """
    Average yield per country and crop over a year range.

    Args:
        records: Yield records with country_code, crop, year and yield_value columns
        year_range: Inclusive (start_year, end_year)

    Returns:
        DataFrame with country_code, crop and mean_yield (t/ha) columns. A
        (country, crop) pair without any valid record is absent.
    """
    start_year, end_year = year_range
    if end_year < start_year:
        raise ValueError(f"Invalid year range: {start_year}-{end_year}")

    in_range = records[records[YEAR_COLUMN].between(start_year, end_year)]

    # Drop rows where yield is missing or negative
    initial_count = len(in_range)
    valid = in_range.dropna(subset=[YIELD_VALUE_COLUMN])
    valid = valid[valid[YIELD_VALUE_COLUMN] >= 0]
    final_count = len(valid)

    if initial_count > final_count:
        logger.info(
            f"Dropped {initial_count - final_count} ({((initial_count - final_count) / initial_count * 100):.1f}%) records with missing or negative yield"
        )

    country_yields = (
        valid.groupby([COUNTRY_CODE_COLUMN, CROP_COLUMN])[YIELD_VALUE_COLUMN]
        .mean()
        .div(UNIT_CONVERSION_FACTOR)
        .rename(MEAN_YIELD_COLUMN)
        .reset_index()
    )

    logger.debug(
        f"Mean yields for {len(country_yields)} country/crop pairs ({start_year}-{end_year})"
    )
    return country_yields


def attach_continent(
    country_yields: pd.DataFrame, lookup: pd.DataFrame
) -> pd.DataFrame:
    """Join each country to its continent, dropping countries the lookup does not know"""
    if (lookup[CONTINENT_COLUMN] == PLACEHOLDER_CONTINENT).any():
        raise ValueError(
            f"Continent lookup uses the reserved identifier {PLACEHOLDER_CONTINENT!r}"
        )

    continents = lookup[[COUNTRY_CODE_COLUMN, CONTINENT_COLUMN]].drop_duplicates(
        subset=[COUNTRY_CODE_COLUMN], keep="first"
    )
    merged = country_yields.merge(continents, on=COUNTRY_CODE_COLUMN, how="left")

    unmatched = merged[CONTINENT_COLUMN].isna()
    if unmatched.any():
        codes = sorted(merged.loc[unmatched, COUNTRY_CODE_COLUMN].astype(str).unique())
        logger.info(
            f"Dropped {unmatched.sum()} rows for {len(codes)} countries without a continent"
        )
        logger.debug(f"Unmatched country codes: {codes}")

    return merged[~unmatched].reset_index(drop=True)


def bucket_and_count(country_yields: pd.DataFrame) -> pd.DataFrame:
    """Count countries per (whole-ton yield class, crop, continent)"""
    classed = country_yields.assign(
        **{
            YIELD_CLASS_COLUMN: np.floor(country_yields[MEAN_YIELD_COLUMN]).astype(
                int
            )
        }
    )

    class_counts = (
        classed.groupby(CLASS_COUNT_KEYS, observed=True)
        .size()
        .rename(COUNT_COLUMN)
        .reset_index()
        .sort_values([CROP_COLUMN, YIELD_CLASS_COLUMN, CONTINENT_COLUMN])
        .reset_index(drop=True)
    )

    logger.info(
        f"Counted {int(class_counts[COUNT_COLUMN].sum())} countries in "
        f"{class_counts[YIELD_CLASS_COLUMN].nunique()} yield classes"
    )
    return class_counts
