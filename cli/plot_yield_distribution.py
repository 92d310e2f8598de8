#!/usr/bin/env python3
"""Plot the distribution of country mean yields as a waffle chart"""

from pathlib import Path

from cli.base_process_cli import parse_key_value_pairs, run_processor_cli
from src.constants import DEFAULT_IMAGE_FORMAT, DEFAULT_ROW_WIDTH, IMAGE_FORMATS
from src.crop_yield.distribution import (
    YieldDistributionConfig,
    YieldDistributionProcessor,
)


def add_distribution_arguments(parser):
    """Add chart-specific arguments"""
    parser.add_argument(
        "--lookup",
        type=str,
        help="Country code to continent CSV (default: Natural Earth countries)",
    )
    parser.add_argument(
        "--row-width",
        type=int,
        default=DEFAULT_ROW_WIDTH,
        help=f"Squares per row in each facet (default: {DEFAULT_ROW_WIDTH})",
    )
    parser.add_argument(
        "--max-class",
        nargs="+",
        metavar="CROP=CLASS",
        help="Drop yield classes above a ceiling per crop (e.g. maize=11)",
    )
    parser.add_argument(
        "--color",
        nargs="+",
        metavar="CONTINENT=COLOR",
        help="Continent colors (e.g. Europe=#2E86AB)",
    )
    parser.add_argument("--title", type=str, help="Chart title")
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Output directory (default: <data-dir>/final)",
    )
    parser.add_argument(
        "--image-format",
        choices=IMAGE_FORMATS,
        default=DEFAULT_IMAGE_FORMAT,
        help=f"Chart file format (default: {DEFAULT_IMAGE_FORMAT})",
    )


def parse_distribution_arguments(args):
    """Parse chart-specific arguments and return config kwargs"""
    return {
        "lookup_source": args.lookup,
        "row_width": args.row_width,
        "max_class": parse_key_value_pairs(args.max_class, int) or None,
        "colors": parse_key_value_pairs(args.color) or None,
        "title": args.title,
        "output_dir": args.output_dir,
        "image_format": args.image_format,
    }


def main(argv=None):
    """Main function to plot the yield distribution chart"""
    run_processor_cli(
        description="Plot country mean crop yields by yield class and continent",
        config_class=YieldDistributionConfig,
        processor_class=YieldDistributionProcessor,
        add_custom_args_func=add_distribution_arguments,
        parse_custom_args_func=parse_distribution_arguments,
        success_message="Yield distribution chart completed successfully!",
        argv=argv,
    )


if __name__ == "__main__":
    main()
