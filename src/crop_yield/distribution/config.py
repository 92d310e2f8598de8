"""Configuration for the yield distribution chart"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from src.constants import (
    DATA_DIR,
    DEFAULT_CROPS,
    DEFAULT_END_YEAR,
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_ROW_WIDTH,
    DEFAULT_START_YEAR,
    IMAGE_FORMATS,
    OUTPUT_FORMAT_CSV,
    OUTPUT_FORMAT_PARQUET,
    YIELD_START_YEAR_MIN,
)
from src.crop_yield.faostat.models import SUPPORTED_CROPS


@dataclass
class YieldDistributionConfig:
    """Configuration for the yield class waffle chart pipeline"""

    input_source: Union[str, Path]
    lookup_source: Optional[Union[str, Path]] = None
    crops: List[str] = field(default_factory=lambda: list(DEFAULT_CROPS))
    start_year: int = DEFAULT_START_YEAR
    end_year: int = DEFAULT_END_YEAR
    row_width: int = DEFAULT_ROW_WIDTH
    max_class: Optional[Dict[str, int]] = None
    colors: Optional[Dict[str, str]] = None
    title: Optional[str] = None
    data_dir: Path = Path(DATA_DIR)
    output_dir: Optional[Path] = None
    image_format: str = DEFAULT_IMAGE_FORMAT
    output_format: str = DEFAULT_OUTPUT_FORMAT
    debug: bool = False

    def __post_init__(self):
        """Ensure directories are Path objects"""
        self.data_dir = Path(self.data_dir or DATA_DIR)
        self.output_dir = Path(self.output_dir or self.data_dir / "final")

    def validate(self) -> None:
        """Validate configuration parameters"""
        if not self.input_source:
            raise ValueError("Input source must be specified")

        if not self.crops:
            raise ValueError("At least one crop must be specified")
        unknown = sorted(set(self.crops) - SUPPORTED_CROPS)
        if unknown:
            raise ValueError(
                f"Unknown crops: {unknown}. Available crops: {sorted(SUPPORTED_CROPS)}"
            )

        if self.end_year < self.start_year:
            raise ValueError("end_year must be >= start_year")
        if self.start_year < YIELD_START_YEAR_MIN:
            raise ValueError(
                f"start_year cannot be before {YIELD_START_YEAR_MIN} (FAOSTAT data availability)"
            )

        if self.row_width <= 0:
            raise ValueError(f"Row width must be positive, got {self.row_width}")

        for crop, ceiling in (self.max_class or {}).items():
            if ceiling < 0:
                raise ValueError(
                    f"Yield class ceiling for {crop} must be >= 0, got {ceiling}"
                )

        if self.image_format not in IMAGE_FORMATS:
            raise ValueError(
                f"Invalid image_format: {self.image_format}. Must be one of {IMAGE_FORMATS}"
            )

        valid_formats = [OUTPUT_FORMAT_CSV, OUTPUT_FORMAT_PARQUET]
        if self.output_format not in valid_formats:
            raise ValueError(
                f"Invalid output_format: {self.output_format}. Must be one of {valid_formats}"
            )

    def get_output_basename(self) -> str:
        """Base name shared by the chart and the class count table"""
        crops = "_".join(self.crops)
        return f"yield_distribution_{crops}_{self.start_year}-{self.end_year}"

    def get_cache_directory(self) -> Path:
        """Directory where downloaded sources are cached"""
        return self.data_dir / "raw"
