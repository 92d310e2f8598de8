"""Tests for FAOSTAT yield records and continent lookup loading"""

import pandas as pd
import pytest
import requests

from src.crop_yield.base import DataUnavailableError
from src.crop_yield.faostat import loader
from src.crop_yield.faostat.loader import (
    download_source,
    load_continent_lookup,
    load_yield_records,
)


def test_loads_yield_rows_only(faostat_csv):
    records = load_yield_records(faostat_csv)

    assert list(records.columns) == ["country_code", "crop", "year", "yield_value"]
    # Production row and unmapped crop are gone
    assert len(records) == 8
    assert set(records["crop"]) == {"wheat", "maize"}


def test_missing_value_is_kept_as_nan(faostat_csv):
    records = load_yield_records(faostat_csv)

    ken_2016 = records[(records["country_code"] == "KEN") & (records["year"] == 2016)]
    assert ken_2016["yield_value"].isna().all()


def test_crop_filter(faostat_csv):
    records = load_yield_records(faostat_csv, crops=["maize"])

    assert set(records["crop"]) == {"maize"}
    assert len(records) == 4


def test_standard_columns_pass_through(tmp_path, yield_records):
    path = tmp_path / "standard.csv"
    yield_records.to_csv(path, index=False)

    records = load_yield_records(path)

    assert len(records) == len(yield_records)
    assert set(records["crop"]) == {"wheat", "maize"}


def test_missing_file_raises(tmp_path):
    with pytest.raises(DataUnavailableError):
        load_yield_records(tmp_path / "missing.csv")


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")

    with pytest.raises(DataUnavailableError):
        load_yield_records(path)


def test_unreadable_source_raises(tmp_path):
    directory = tmp_path / "adir.csv"
    directory.mkdir()

    with pytest.raises(DataUnavailableError):
        load_yield_records(directory)


def test_missing_columns_raise(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"Area": ["France"], "Value": [1]}).to_csv(path, index=False)

    with pytest.raises(DataUnavailableError):
        load_yield_records(path)


def test_no_matching_crops_raise(faostat_csv):
    with pytest.raises(DataUnavailableError):
        load_yield_records(faostat_csv, crops=["rice"])


def test_lookup_accepts_aliases(lookup_csv):
    lookup = load_continent_lookup(lookup_csv)

    assert list(lookup.columns) == ["country_code", "continent"]
    assert dict(zip(lookup["country_code"], lookup["continent"]))["FRA"] == "Europe"


def test_lookup_without_continent_raises(tmp_path):
    path = tmp_path / "lookup.csv"
    pd.DataFrame({"iso3": ["FRA"]}).to_csv(path, index=False)

    with pytest.raises(DataUnavailableError):
        load_continent_lookup(path)


class _FakeResponse:
    def __init__(self, content: bytes):
        self.content = content
        self.headers = {"content-length": str(len(content))}
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]


def test_url_source_is_downloaded_once(tmp_path, monkeypatch, faostat_csv):
    responses = []

    def fake_get(url, stream, timeout):
        responses.append(_FakeResponse(faostat_csv.read_bytes()))
        return responses[-1]

    monkeypatch.setattr(loader.requests, "get", fake_get)
    url = "https://example.org/exports/faostat.csv"

    first = load_yield_records(url, cache_dir=tmp_path / "cache")
    second = load_yield_records(url, cache_dir=tmp_path / "cache")

    assert len(responses) == 1
    assert responses[0].closed
    assert len(list((tmp_path / "cache").glob("*faostat.csv"))) == 1
    pd.testing.assert_frame_equal(first, second)


def test_same_file_name_from_different_urls_is_cached_separately(
    tmp_path, monkeypatch, faostat_csv, lookup_csv
):
    contents = {
        "https://example.org/yields/data.csv": faostat_csv.read_bytes(),
        "https://example.org/lookups/data.csv": lookup_csv.read_bytes(),
    }

    def fake_get(url, stream, timeout):
        return _FakeResponse(contents[url])

    monkeypatch.setattr(loader.requests, "get", fake_get)
    cache_dir = tmp_path / "cache"

    records = load_yield_records(
        "https://example.org/yields/data.csv", cache_dir=cache_dir
    )
    lookup = load_continent_lookup(
        "https://example.org/lookups/data.csv", cache_dir=cache_dir
    )

    assert len(records) == 8
    assert len(lookup) == 4
    assert len(list(cache_dir.glob("*data.csv"))) == 2


def test_failed_download_raises(tmp_path, monkeypatch):
    def fake_get(url, stream, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(loader.requests, "get", fake_get)

    with pytest.raises(DataUnavailableError):
        download_source("https://example.org/faostat.csv", tmp_path)
    assert not list(tmp_path.iterdir())
