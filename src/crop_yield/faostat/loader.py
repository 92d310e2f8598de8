"""
FAOSTAT crop yield loader.

Reads a FAOSTAT-style long table (one row per country, crop and year) from a
local CSV file or URL into standardized yield records, and reads optional
country to continent lookup tables.
"""

import hashlib
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union
from urllib.parse import urlparse

import pandas as pd
import requests
from tqdm import tqdm

from src.constants import DATA_DIR, DOWNLOAD_CHUNK_SIZE, YIELD_ELEMENT
from src.crop_yield.base.constants import (
    CONTINENT_COLUMN,
    COUNTRY_CODE_COLUMN,
    CROP_COLUMN,
    YEAR_COLUMN,
    YIELD_RECORD_COLUMNS,
    YIELD_VALUE_COLUMN,
)
from src.crop_yield.base.exceptions import DataUnavailableError
from src.crop_yield.faostat.models import (
    CROP_NAME_MAPPING,
    ELEMENT_COLUMN,
    LOOKUP_COLUMN_ALIASES,
    RAW_DATA_COLUMNS,
)

logger = logging.getLogger(__name__)


def is_url(source: Union[str, Path]) -> bool:
    """Check whether a source points to an http(s) resource"""
    return urlparse(str(source)).scheme in ("http", "https")


def download_source(url: str, cache_dir: Path) -> Path:
    """Download a remote table once, reusing the cached copy afterwards"""
    cache_dir.mkdir(parents=True, exist_ok=True)
    parsed = urlparse(url)
    filename = Path(parsed.path).name or "download.csv"

    # Cache key covers the full URL, not just the file name
    url_hash = hashlib.sha256(url.encode("utf-8")).hexdigest()[:12]
    cached_file = cache_dir / f"{url_hash}_{filename}"

    if cached_file.exists():
        logger.info(f"Loading cached file: {cached_file}")
        return cached_file

    logger.info(f"Downloading {url}")
    partial_file = cached_file.with_suffix(cached_file.suffix + ".part")
    try:
        with requests.get(url, stream=True, timeout=60) as response:
            response.raise_for_status()

            total_size = int(response.headers.get("content-length", 0))
            with open(partial_file, "wb") as file, tqdm(
                total=total_size,
                unit="B",
                unit_scale=True,
                desc=f"Downloading {filename}",
            ) as pbar:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    file.write(chunk)
                    pbar.update(len(chunk))
    except requests.RequestException as e:
        partial_file.unlink(missing_ok=True)
        raise DataUnavailableError(f"Failed to download {url}: {e}") from e

    partial_file.rename(cached_file)
    logger.info(f"Download complete: {cached_file}")
    return cached_file


def read_table(
    source: Union[str, Path], cache_dir: Optional[Path] = None
) -> pd.DataFrame:
    """Read a CSV table from a path or URL, raising DataUnavailableError on failure"""
    if is_url(source):
        path = download_source(str(source), Path(cache_dir or Path(DATA_DIR) / "raw"))
    else:
        path = Path(source)

    if not path.exists():
        raise DataUnavailableError(f"File not found: {path}")

    try:
        df = pd.read_csv(path, encoding="utf-8-sig", low_memory=False)
    except (
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
        UnicodeDecodeError,
        OSError,
    ) as e:
        raise DataUnavailableError(f"Could not read {path}: {e}") from e

    # Clean column names
    df.columns = df.columns.str.strip().str.replace('"', "")
    return df


def _rename_columns(df: pd.DataFrame, aliases: Dict[str, List[str]]) -> pd.DataFrame:
    """Rename the first matching alias of each standard column"""
    column_mapping = {}
    for standard, candidates in aliases.items():
        if standard in df.columns:
            continue
        for candidate in candidates:
            if candidate in df.columns:
                column_mapping[candidate] = standard
                break
    return df.rename(columns=column_mapping)


def load_yield_records(
    source: Union[str, Path],
    crops: Optional[List[str]] = None,
    cache_dir: Optional[Path] = None,
) -> pd.DataFrame:
    """
    Load yield records from a FAOSTAT export or an already standardized table.

    Args:
        source: Local CSV path or http(s) URL
        crops: Standardized crop names to keep (default: all mapped crops)
        cache_dir: Where downloaded files are cached (default: data/raw)

    Returns:
        DataFrame with country_code, crop, year and yield_value columns
    """
    df = read_table(source, cache_dir)

    # Keep only yield rows of multi-element exports
    if ELEMENT_COLUMN in df.columns:
        df = df[df[ELEMENT_COLUMN].astype(str).str.strip() == YIELD_ELEMENT]

    df = _rename_columns(
        df, {standard: [raw] for standard, raw in RAW_DATA_COLUMNS.items()}
    )
    missing = [col for col in YIELD_RECORD_COLUMNS if col not in df.columns]
    if missing:
        raise DataUnavailableError(f"Missing columns {missing} in {source}")

    df = df[YIELD_RECORD_COLUMNS].copy()
    df[COUNTRY_CODE_COLUMN] = df[COUNTRY_CODE_COLUMN].astype(str).str.strip()
    df[CROP_COLUMN] = df[CROP_COLUMN].astype(str).str.strip()

    # Map FAOSTAT item names; standardized names pass through unchanged
    standard_names = set(CROP_NAME_MAPPING.values())
    df[CROP_COLUMN] = df[CROP_COLUMN].map(
        lambda name: name if name in standard_names else CROP_NAME_MAPPING.get(name)
    )
    unknown = df[CROP_COLUMN].isna()
    if unknown.any():
        logger.debug(f"Dropped {unknown.sum()} records with unmapped crop names")
    df = df[~unknown].copy()

    if crops:
        df = df[df[CROP_COLUMN].isin(crops)].copy()

    df[YEAR_COLUMN] = pd.to_numeric(df[YEAR_COLUMN], errors="coerce")
    df = df.dropna(subset=[YEAR_COLUMN])
    df[YEAR_COLUMN] = df[YEAR_COLUMN].astype(int)
    df[YIELD_VALUE_COLUMN] = pd.to_numeric(df[YIELD_VALUE_COLUMN], errors="coerce")

    if df.empty:
        raise DataUnavailableError(f"No yield records for crops {crops} in {source}")

    logger.info(
        f"Loaded {len(df):,} yield records for {df[COUNTRY_CODE_COLUMN].nunique()} countries "
        f"({df[YEAR_COLUMN].min()}-{df[YEAR_COLUMN].max()})"
    )
    return df.reset_index(drop=True)


def load_continent_lookup(
    source: Union[str, Path], cache_dir: Optional[Path] = None
) -> pd.DataFrame:
    """Load a country code to continent lookup table"""
    df = _rename_columns(read_table(source, cache_dir), LOOKUP_COLUMN_ALIASES)

    missing = [col for col in LOOKUP_COLUMN_ALIASES if col not in df.columns]
    if missing:
        raise DataUnavailableError(f"Missing columns {missing} in {source}")

    lookup = df[[COUNTRY_CODE_COLUMN, CONTINENT_COLUMN]].dropna().copy()
    lookup[COUNTRY_CODE_COLUMN] = lookup[COUNTRY_CODE_COLUMN].astype(str).str.strip()
    lookup = lookup.drop_duplicates(subset=[COUNTRY_CODE_COLUMN]).reset_index(drop=True)

    logger.info(f"Loaded continent lookup with {len(lookup)} countries")
    return lookup
