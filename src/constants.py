"""Constants used throughout the project"""

# Data directory
DATA_DIR = "data"

# Yield source data
YIELD_START_YEAR_MIN = 1961  # FAOSTAT production data availability
UNIT_CONVERSION_FACTOR = 10000  # hg/ha -> t/ha
YIELD_ELEMENT = "Yield"

# Crops compared by default
DEFAULT_CROPS = ["wheat", "maize"]

# Waffle chart layout
DEFAULT_ROW_WIDTH = 5  # Squares per row inside each facet
SQUARE_PADDING = 0.1  # Gap between squares, as a fraction of the square side

# File processing
DOWNLOAD_CHUNK_SIZE = 8192  # Bytes for file downloads

# Output formats
OUTPUT_FORMAT_CSV = "csv"
OUTPUT_FORMAT_PARQUET = "parquet"
IMAGE_FORMATS = ["png", "svg", "pdf"]

# Default values for CLI (only place defaults are allowed)
DEFAULT_OUTPUT_FORMAT = OUTPUT_FORMAT_CSV
DEFAULT_IMAGE_FORMAT = "png"
DEFAULT_START_YEAR = 2010
DEFAULT_END_YEAR = 2020
