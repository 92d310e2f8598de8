"""
Categorical completion of yield class counts.

The waffle renderer needs every (crop, yield class) facet to hold at least one
square. Completion therefore runs two expansion passes over distinct key sets:
first over the real continents (missing combinations count 0), then, once a
single placeholder row has registered the placeholder continent, over the
placeholder (missing combinations count 1). The passes must not be merged,
otherwise the placeholder would be forced into real-continent combinations.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd

from src.crop_yield.base.constants import (
    CLASS_COUNT_KEYS,
    CONTINENT_COLUMN,
    COUNT_COLUMN,
    CROP_COLUMN,
    YIELD_CLASS_COLUMN,
)
from src.crop_yield.base.models import ContinentCategory, PLACEHOLDER_CONTINENT

logger = logging.getLogger(__name__)


def continent_order(continents) -> List[str]:
    """Real continents sorted by name, placeholder last when present"""
    unique = set(continents)
    order = sorted(c for c in unique if not ContinentCategory.is_placeholder(c))
    if PLACEHOLDER_CONTINENT in unique:
        order.append(PLACEHOLDER_CONTINENT)
    return order


def _expand(
    class_counts: pd.DataFrame, continents: List[str], fill_value: int
) -> pd.DataFrame:
    """Reindex counts over yield classes x crops x continents"""
    classes = sorted(class_counts[YIELD_CLASS_COLUMN].unique())
    crops = sorted(class_counts[CROP_COLUMN].unique())
    full_index = pd.MultiIndex.from_product(
        [classes, crops, continents], names=CLASS_COUNT_KEYS
    )

    counts = class_counts.groupby(CLASS_COUNT_KEYS)[COUNT_COLUMN].sum()
    expanded = counts.reindex(full_index, fill_value=fill_value).astype(int)
    return expanded.reset_index()


def drop_classes_above(
    class_counts: pd.DataFrame, max_class: Optional[Dict[str, int]]
) -> pd.DataFrame:
    """Discard yield classes above a per-crop ceiling"""
    if not max_class:
        return class_counts

    for crop, ceiling in max_class.items():
        if ceiling < 0:
            raise ValueError(
                f"Yield class ceiling for {crop} must be >= 0, got {ceiling}"
            )

    ceilings = class_counts[CROP_COLUMN].map(max_class)
    keep = ceilings.isna() | (class_counts[YIELD_CLASS_COLUMN] <= ceilings)

    if (~keep).any():
        logger.info(
            f"Dropped {int(class_counts.loc[~keep, COUNT_COLUMN].sum())} countries above yield class ceilings {max_class}"
        )
    return class_counts[keep].reset_index(drop=True)


def complete_real_combinations(class_counts: pd.DataFrame) -> pd.DataFrame:
    """Fill every missing (class, crop, observed continent) with a zero count"""
    continents = continent_order(class_counts[CONTINENT_COLUMN])
    return _expand(class_counts, continents, fill_value=0)


def seed_placeholder(class_counts: pd.DataFrame) -> pd.DataFrame:
    """Register the placeholder continent with a single row

    The seed row counts 0 when it lands on a facet with real countries, and 1
    when no facet has any, so the seeded facet is never empty.
    """
    if (class_counts[CONTINENT_COLUMN] == PLACEHOLDER_CONTINENT).any():
        return class_counts

    totals = class_counts.groupby([CROP_COLUMN, YIELD_CLASS_COLUMN])[
        COUNT_COLUMN
    ].sum()
    populated = totals[totals > 0]
    seed_count = 0
    if populated.empty:
        logger.warning("No facet has a real country; seeding a visible placeholder")
        populated = totals
        seed_count = 1

    crop, yield_class = populated.index[0]
    logger.debug(f"Seeding placeholder continent at {crop} class {yield_class}")

    seed = pd.DataFrame(
        {
            YIELD_CLASS_COLUMN: [int(yield_class)],
            CROP_COLUMN: [crop],
            CONTINENT_COLUMN: [PLACEHOLDER_CONTINENT],
            COUNT_COLUMN: [seed_count],
        }
    )
    return pd.concat([class_counts, seed], ignore_index=True)


def complete_placeholder_combinations(class_counts: pd.DataFrame) -> pd.DataFrame:
    """Give the placeholder one unit in every combination it is missing from"""
    continents = continent_order(class_counts[CONTINENT_COLUMN])
    return _expand(class_counts, continents, fill_value=1)


def complete_grid(
    class_counts: pd.DataFrame, max_class: Optional[Dict[str, int]] = None
) -> pd.DataFrame:
    """
    Complete class counts so that every facet of the waffle chart is drawable.

    Args:
        class_counts: Counts per yield_class, crop and continent
        max_class: Optional per-crop ceiling; classes above it are discarded

    Returns:
        DataFrame covering yield classes x crops x (continents + placeholder),
        sorted by crop, yield class and continent, with an ordered categorical
        continent column whose last category is the placeholder
    """
    completed = class_counts[CLASS_COUNT_KEYS + [COUNT_COLUMN]].copy()
    completed[CONTINENT_COLUMN] = completed[CONTINENT_COLUMN].astype(str)

    completed = drop_classes_above(completed, max_class)
    if completed.empty:
        logger.warning("No class counts to complete")
        return completed.reset_index(drop=True)

    completed = complete_real_combinations(completed)
    completed = seed_placeholder(completed)
    completed = complete_placeholder_combinations(completed)

    order = continent_order(completed[CONTINENT_COLUMN])
    completed[CONTINENT_COLUMN] = pd.Categorical(
        completed[CONTINENT_COLUMN], categories=order, ordered=True
    )
    completed = completed.sort_values(
        [CROP_COLUMN, YIELD_CLASS_COLUMN, CONTINENT_COLUMN]
    ).reset_index(drop=True)

    logger.info(
        f"Completed grid: {completed[CROP_COLUMN].nunique()} crops x "
        f"{completed[YIELD_CLASS_COLUMN].nunique()} yield classes x "
        f"{len(order)} continents"
    )
    return completed
