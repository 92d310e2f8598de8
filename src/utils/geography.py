"""Geographic utilities for country to continent lookups"""

import logging

import geopandas as gpd
import pandas as pd

from src.crop_yield.base.constants import CONTINENT_COLUMN, COUNTRY_CODE_COLUMN
from src.crop_yield.base.exceptions import DataUnavailableError

logger = logging.getLogger(__name__)

NATURAL_EARTH_URL = (
    "https://naciscdn.org/naturalearth/110m/cultural/ne_110m_admin_0_countries.zip"
)

# Natural Earth marks disputed ISO codes with -99 (e.g. France, Norway)
MISSING_ISO_CODE = "-99"


class Geography:
    """Handles country geographic data and continent lookups"""

    def __init__(self, source: str = NATURAL_EARTH_URL):
        """Initialize geography handler with lazy-loaded world data"""
        self.source = source
        self._world_data = None

    @property
    def world_data(self) -> gpd.GeoDataFrame:
        """Lazy load world geographic data from Natural Earth dataset"""
        if self._world_data is None:
            logger.info(f"Loading country boundaries from {self.source}")
            try:
                self._world_data = gpd.read_file(self.source)
            except Exception as e:
                raise DataUnavailableError(
                    f"Could not load country data from {self.source}: {e}"
                ) from e
        return self._world_data

    def get_continent_lookup(self) -> pd.DataFrame:
        """Get ISO3 country code to continent mapping"""
        world = self.world_data

        codes = world["ISO_A3"].astype(str)
        if "ADM0_A3" in world.columns:
            codes = codes.where(codes != MISSING_ISO_CODE, world["ADM0_A3"].astype(str))

        lookup = pd.DataFrame(
            {
                COUNTRY_CODE_COLUMN: codes.to_numpy(),
                CONTINENT_COLUMN: world["CONTINENT"].to_numpy(),
            }
        )
        lookup = lookup[lookup[COUNTRY_CODE_COLUMN] != MISSING_ISO_CODE]
        lookup = lookup.dropna().drop_duplicates(subset=[COUNTRY_CODE_COLUMN])

        logger.debug(f"Continent lookup covers {len(lookup)} countries")
        return lookup.reset_index(drop=True)
