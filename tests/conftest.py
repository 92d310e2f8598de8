"""Shared fixtures for yield distribution tests"""

import pandas as pd
import pytest


@pytest.fixture
def yield_records():
    """Yield records in hg/ha for a handful of countries"""
    return pd.DataFrame(
        {
            "country_code": [
                "FRA",
                "FRA",
                "DEU",
                "DEU",
                "USA",
                "USA",
                "KEN",
                "KEN",
                "XXX",
            ],
            "crop": [
                "wheat",
                "wheat",
                "wheat",
                "maize",
                "maize",
                "wheat",
                "maize",
                "maize",
                "wheat",
            ],
            "year": [2015, 2016, 2015, 2015, 2015, 2015, 2015, 2016, 2015],
            "yield_value": [
                70000,
                75000,
                78000,
                95000,
                110000,
                32000,
                15000,
                None,
                40000,
            ],
        }
    )


@pytest.fixture
def continent_lookup():
    return pd.DataFrame(
        {
            "country_code": ["FRA", "DEU", "USA", "KEN"],
            "continent": ["Europe", "Europe", "North America", "Africa"],
        }
    )


@pytest.fixture
def faostat_csv(tmp_path):
    """A small FAOSTAT-style export with yield and production rows"""
    rows = [
        ("FRA", "Wheat", "Yield", 2015, 70000),
        ("FRA", "Wheat", "Yield", 2016, 75000),
        ("FRA", "Wheat", "Production", 2015, 40000000),
        ("DEU", "Wheat", "Yield", 2015, 78000),
        ("DEU", "Maize (corn)", "Yield", 2015, 95000),
        ("USA", "Maize (corn)", "Yield", 2015, 110000),
        ("USA", "Wheat", "Yield", 2015, 32000),
        ("KEN", "Maize (corn)", "Yield", 2015, 15000),
        ("KEN", "Maize (corn)", "Yield", 2016, ""),
        ("KEN", "Tea leaves", "Yield", 2015, 20000),
    ]
    df = pd.DataFrame(
        rows, columns=["Area Code (ISO3)", "Item", "Element", "Year", "Value"]
    )
    path = tmp_path / "faostat.csv"
    df.to_csv(path, index=False)
    return path


@pytest.fixture
def lookup_csv(tmp_path, continent_lookup):
    path = tmp_path / "continents.csv"
    continent_lookup.rename(columns={"country_code": "iso3"}).to_csv(path, index=False)
    return path
