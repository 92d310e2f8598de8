"""Processor turning yield records into a yield class waffle chart"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from src.crop_yield.base import (
    attach_continent,
    bucket_and_count,
    complete_grid,
    compute_mean_yield,
)
from src.crop_yield.distribution.config import YieldDistributionConfig
from src.crop_yield.faostat.loader import load_continent_lookup, load_yield_records
from src.utils.geography import Geography
from src.visualization import render_waffle_chart, save_figure

logger = logging.getLogger(__name__)


class YieldDistributionProcessor:
    """Loads, aggregates, completes and renders yield class counts"""

    def __init__(
        self, config: YieldDistributionConfig, geography: Optional[Geography] = None
    ):
        """Initialize processor

        Args:
            config: Pipeline configuration
            geography: Continent lookup source used when config has no lookup file
        """
        self.config = config
        self.geography = geography

        logger.info(
            f"Initialized {self.__class__.__name__} for {', '.join(config.crops)} "
            f"({config.start_year}-{config.end_year})"
        )

    def process_with_validation(self) -> List[Path]:
        """Template method that validates config before processing"""
        self.config.validate()
        return self.process()

    def load_lookup(self) -> pd.DataFrame:
        """Load the continent lookup from file, or from Natural Earth by default"""
        if self.config.lookup_source:
            return load_continent_lookup(
                self.config.lookup_source, self.config.get_cache_directory()
            )

        if self.geography is None:
            self.geography = Geography()
        return self.geography.get_continent_lookup()

    def build_class_counts(self) -> pd.DataFrame:
        """Run every stage up to the completed class count table"""
        config = self.config

        logger.info("Step 1: Loading yield records...")
        records = load_yield_records(
            config.input_source, config.crops, config.get_cache_directory()
        )
        lookup = self.load_lookup()

        logger.info("Step 2: Aggregating mean yields per country...")
        country_yields = compute_mean_yield(
            records, (config.start_year, config.end_year)
        )
        country_yields = attach_continent(country_yields, lookup)
        class_counts = bucket_and_count(country_yields)

        logger.info("Step 3: Completing yield class grid...")
        return complete_grid(class_counts, config.max_class)

    def process(self) -> List[Path]:
        """Build the completed table and chart, returning the written files"""
        config = self.config
        completed = self.build_class_counts()

        logger.info("Step 4: Rendering waffle chart...")
        fig = render_waffle_chart(
            completed,
            colors=config.colors,
            row_width=config.row_width,
            title=config.title,
        )

        basename = config.get_output_basename()
        table_file = self.save_output(
            completed, f"{basename}.{config.output_format}", config.output_format
        )
        chart_file = save_figure(
            fig, config.output_dir / f"{basename}.{config.image_format}"
        )
        return [table_file, chart_file]

    def save_output(self, df: pd.DataFrame, filename: str, output_format: str) -> Path:
        """Save dataframe to the configured output directory

        Args:
            df: DataFrame to save
            filename: Name of the output file (including extension)
            output_format: Output format ('csv' or 'parquet')

        Returns:
            Path to saved file
        """
        output_dir = self.config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file = output_dir / filename

        if output_format == "csv":
            df.to_csv(output_file, index=False)
        elif output_format == "parquet":
            df.to_parquet(output_file, index=False)
        else:
            raise ValueError(f"Unsupported output format: {output_format}")

        logger.info(f"Saved {len(df)} class counts to {output_file}")
        return output_file
