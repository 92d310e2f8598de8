"""Tests for the two-pass yield class grid completion"""

import pandas as pd
import pytest

from src.crop_yield.base import PLACEHOLDER_CONTINENT, complete_grid
from src.crop_yield.base.grid_completion import (
    complete_placeholder_combinations,
    complete_real_combinations,
    continent_order,
    drop_classes_above,
    seed_placeholder,
)


@pytest.fixture
def class_counts():
    # Maize has no country in class 8, wheat none in class 2
    return pd.DataFrame(
        {
            "yield_class": [2, 3, 3, 8],
            "crop": ["maize", "maize", "wheat", "wheat"],
            "continent": ["Africa", "Europe", "Europe", "Europe"],
            "country_count": [4, 1, 2, 1],
        }
    )


def _count(df, yield_class, crop, continent):
    row = df[
        (df["yield_class"] == yield_class)
        & (df["crop"] == crop)
        & (df["continent"].astype(str) == continent)
    ]
    assert len(row) == 1
    return row["country_count"].iloc[0]


def test_continent_order_puts_placeholder_last():
    order = continent_order(["Europe", PLACEHOLDER_CONTINENT, "Africa", "Europe"])

    assert order == ["Africa", "Europe", PLACEHOLDER_CONTINENT]


def test_real_combinations_preserve_counts_and_fill_zeros(class_counts):
    result = complete_real_combinations(class_counts)

    # 3 classes x 2 crops x 2 continents
    assert len(result) == 12
    assert not result.duplicated(["yield_class", "crop", "continent"]).any()
    for _, row in class_counts.iterrows():
        observed = _count(result, row["yield_class"], row["crop"], row["continent"])
        assert observed == row["country_count"]
    assert _count(result, 8, "maize", "Africa") == 0
    assert PLACEHOLDER_CONTINENT not in set(result["continent"])


def test_seed_placeholder_inserts_single_zero_row(class_counts):
    result = seed_placeholder(complete_real_combinations(class_counts))

    placeholder = result[result["continent"] == PLACEHOLDER_CONTINENT]
    assert len(placeholder) == 1
    assert placeholder["country_count"].iloc[0] == 0


def test_seed_placeholder_skips_when_present(class_counts):
    seeded = seed_placeholder(complete_real_combinations(class_counts))

    assert seed_placeholder(seeded).equals(seeded)


def test_placeholder_combinations_fill_ones(class_counts):
    seeded = seed_placeholder(complete_real_combinations(class_counts))
    result = complete_placeholder_combinations(seeded)

    placeholder = result[result["continent"] == PLACEHOLDER_CONTINENT]
    assert len(placeholder) == 6
    assert sorted(placeholder["country_count"]) == [0, 1, 1, 1, 1, 1]


def test_every_facet_has_a_square(class_counts):
    result = complete_grid(class_counts)

    totals = result.groupby(["crop", "yield_class"])["country_count"].sum()
    assert len(totals) == 6
    assert (totals >= 1).all()


def test_placeholder_only_added_once_per_facet(class_counts):
    result = complete_grid(class_counts)

    per_facet = (
        result[result["continent"] == PLACEHOLDER_CONTINENT]
        .groupby(["crop", "yield_class"])
        .size()
    )
    assert (per_facet == 1).all()


def test_seed_lands_on_populated_facet(class_counts):
    result = complete_grid(class_counts)

    seed = result[
        (result["continent"] == PLACEHOLDER_CONTINENT) & (result["country_count"] == 0)
    ]
    crop, yield_class = seed["crop"].iloc[0], seed["yield_class"].iloc[0]
    facet = result[(result["crop"] == crop) & (result["yield_class"] == yield_class)]
    assert facet["country_count"].sum() >= 1


def test_continent_is_ordered_categorical(class_counts):
    result = complete_grid(class_counts)

    assert isinstance(result["continent"].dtype, pd.CategoricalDtype)
    assert list(result["continent"].cat.categories) == [
        "Africa",
        "Europe",
        PLACEHOLDER_CONTINENT,
    ]


def test_complete_grid_is_idempotent(class_counts):
    once = complete_grid(class_counts)
    twice = complete_grid(once)

    pd.testing.assert_frame_equal(once, twice)


def test_drop_classes_above_ceiling(class_counts):
    result = drop_classes_above(class_counts, {"wheat": 5})

    assert 8 not in set(result["yield_class"])
    # Maize has no ceiling
    assert set(result.loc[result["crop"] == "maize", "yield_class"]) == {2, 3}


def test_negative_ceiling_raises(class_counts):
    with pytest.raises(ValueError):
        drop_classes_above(class_counts, {"wheat": -1})


def test_ceiling_removes_classes_from_grid(class_counts):
    result = complete_grid(class_counts, max_class={"wheat": 5})

    assert set(result["yield_class"]) == {2, 3}


def test_empty_counts_complete_to_empty():
    empty = pd.DataFrame(
        {
            "yield_class": pd.Series([], dtype=int),
            "crop": pd.Series([], dtype=str),
            "continent": pd.Series([], dtype=str),
            "country_count": pd.Series([], dtype=int),
        }
    )

    assert complete_grid(empty).empty


def test_single_country_example():
    counts = pd.DataFrame(
        {
            "yield_class": [7],
            "crop": ["wheat"],
            "continent": ["Europe"],
            "country_count": [1],
        }
    )
    result = complete_grid(counts)

    assert _count(result, 7, "wheat", "Europe") == 1
    # The only facet is the seed pair, so the placeholder contributes 0
    assert _count(result, 7, "wheat", PLACEHOLDER_CONTINENT) == 0


def test_all_zero_counts_still_fill_every_facet():
    counts = pd.DataFrame(
        {
            "yield_class": [3, 4],
            "crop": ["wheat", "wheat"],
            "continent": ["Europe", "Europe"],
            "country_count": [0, 0],
        }
    )
    result = complete_grid(counts)

    totals = result.groupby(["crop", "yield_class"])["country_count"].sum()
    assert (totals >= 1).all()
    assert _count(result, 3, "wheat", PLACEHOLDER_CONTINENT) == 1
    pd.testing.assert_frame_equal(complete_grid(result), result)
