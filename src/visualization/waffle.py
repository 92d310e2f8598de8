"""
Waffle chart rendering for yield class distributions.

Each facet (crop row, yield class column) shows one unit square per country,
stacked in a fixed-width wrapping grid and coloured by continent. The
placeholder continent is drawn fully transparent so it takes grid space
without being visible.
"""

import logging
import math
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import matplotlib

# Use the non-interactive Agg backend (renders to file; no display needed).
matplotlib.use("Agg")

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from src.constants import DEFAULT_ROW_WIDTH, IMAGE_FORMATS, SQUARE_PADDING
from src.crop_yield.base.constants import (
    CONTINENT_COLUMN,
    COUNT_COLUMN,
    CROP_COLUMN,
    YIELD_CLASS_COLUMN,
)
from src.crop_yield.base.exceptions import EmptyFacetError
from src.crop_yield.base.grid_completion import continent_order
from src.crop_yield.base.models import ContinentCategory

logger = logging.getLogger(__name__)

# Professional color palette
DEFAULT_COLORS = [
    "#2E86AB",
    "#A23B72",
    "#F18F01",
    "#C73E1D",
    "#4A5568",
    "#38A169",
    "#9F7AEA",
    "#ED8936",
]

Color = Union[str, Tuple[float, ...]]


def build_palette(
    continents: Sequence[str], colors: Optional[Dict[str, Color]] = None
) -> Dict[str, Color]:
    """Map every continent to a color, the placeholder to full transparency"""
    colors = colors or {}
    palette = {}
    fallback = iter(c for c in DEFAULT_COLORS if c not in colors.values())

    for continent in continents:
        if ContinentCategory.is_placeholder(continent):
            palette[continent] = ContinentCategory.PLACEHOLDER.color
        elif continent in colors:
            palette[continent] = colors[continent]
        else:
            palette[continent] = next(
                fallback, DEFAULT_COLORS[len(palette) % len(DEFAULT_COLORS)]
            )
            logger.debug(f"No color given for {continent}, using {palette[continent]}")
    return palette


def waffle_positions(
    counts: Sequence[Tuple[str, int]], row_width: int
) -> List[Tuple[int, int, str]]:
    """
    Lay out unit squares for one facet.

    Squares fill each row left to right, rows from the bottom up, categories
    in the given order.

    Args:
        counts: (category, number of squares) pairs
        row_width: Squares per row

    Returns:
        List of (column, row, category) for every square
    """
    if row_width <= 0:
        raise ValueError(f"Row width must be positive, got {row_width}")

    positions = []
    index = 0
    for category, count in counts:
        for _ in range(int(count)):
            positions.append((index % row_width, index // row_width, category))
            index += 1
    return positions


def facet_totals(completed: pd.DataFrame) -> pd.DataFrame:
    """Total square count of every (crop, yield class) facet, including absent ones"""
    crops = sorted(completed[CROP_COLUMN].unique())
    classes = sorted(completed[YIELD_CLASS_COLUMN].unique())
    full_index = pd.MultiIndex.from_product(
        [crops, classes], names=[CROP_COLUMN, YIELD_CLASS_COLUMN]
    )
    totals = completed.groupby([CROP_COLUMN, YIELD_CLASS_COLUMN])[COUNT_COLUMN].sum()
    return totals.reindex(full_index, fill_value=0).rename(COUNT_COLUMN).reset_index()


def check_facets(completed: pd.DataFrame) -> None:
    """Raise EmptyFacetError if any facet would have nothing to draw"""
    if completed.empty:
        raise EmptyFacetError("No facets to render: the class count table is empty")

    totals = facet_totals(completed)
    empty = totals[totals[COUNT_COLUMN] <= 0]
    if not empty.empty:
        facets = [
            f"{row[CROP_COLUMN]} class {row[YIELD_CLASS_COLUMN]}"
            for _, row in empty.iterrows()
        ]
        raise EmptyFacetError(
            f"{len(facets)} facets have no squares to draw: {', '.join(facets)}"
        )


def render_waffle_chart(
    completed: pd.DataFrame,
    colors: Optional[Dict[str, Color]] = None,
    row_width: int = DEFAULT_ROW_WIDTH,
    title: Optional[str] = None,
) -> Figure:
    """
    Render completed class counts as a faceted waffle chart.

    Args:
        completed: Completed class counts (see complete_grid)
        colors: Continent to color mapping; missing continents use DEFAULT_COLORS
        row_width: Squares per row inside each facet
        title: Optional figure title

    Returns:
        Matplotlib figure with one row of facets per crop and one column per yield class
    """
    if row_width <= 0:
        raise ValueError(f"Row width must be positive, got {row_width}")
    check_facets(completed)

    crops = sorted(completed[CROP_COLUMN].unique())
    classes = sorted(completed[YIELD_CLASS_COLUMN].unique())
    continents = continent_order(completed[CONTINENT_COLUMN].astype(str))
    palette = build_palette(continents, colors)

    max_total = int(facet_totals(completed)[COUNT_COLUMN].max())
    grid_rows = max(1, math.ceil(max_total / row_width))

    fig, axes = plt.subplots(
        len(crops),
        len(classes),
        figsize=(
            1.2 * len(classes) + 1.5,
            1.2 * len(crops) * grid_rows / row_width + 1.5,
        ),
        squeeze=False,
    )

    for i, crop in enumerate(crops):
        for j, yield_class in enumerate(classes):
            ax = axes[i][j]
            facet = completed[
                (completed[CROP_COLUMN] == crop)
                & (completed[YIELD_CLASS_COLUMN] == yield_class)
            ]
            counts = (
                facet.assign(**{CONTINENT_COLUMN: facet[CONTINENT_COLUMN].astype(str)})
                .groupby(CONTINENT_COLUMN)[COUNT_COLUMN]
                .sum()
            )
            ordered = [(c, counts.get(c, 0)) for c in continents]

            for x, y, continent in waffle_positions(ordered, row_width):
                ax.add_patch(
                    mpatches.Rectangle(
                        (x + SQUARE_PADDING / 2, y + SQUARE_PADDING / 2),
                        1 - SQUARE_PADDING,
                        1 - SQUARE_PADDING,
                        facecolor=palette[continent],
                        edgecolor=palette[continent],
                    )
                )

            ax.set_xlim(0, row_width)
            ax.set_ylim(0, grid_rows)
            ax.set_aspect("equal")
            ax.set_xticks([])
            ax.set_yticks([])
            for spine in ax.spines.values():
                spine.set_visible(False)

            if i == 0:
                ax.set_title(f"{yield_class}-{yield_class + 1} t/ha", fontsize=9)
            if j == 0:
                ax.set_ylabel(crop.capitalize(), fontsize=10)

    handles = [
        mpatches.Patch(facecolor=palette[c], label=c)
        for c in continents
        if not ContinentCategory.is_placeholder(c)
    ]
    fig.legend(
        handles=handles,
        loc="lower center",
        ncol=max(1, len(handles)),
        frameon=False,
    )
    if title:
        fig.suptitle(title, fontsize=14)

    logger.info(
        f"Rendered waffle chart with {len(crops)} crops x {len(classes)} yield classes"
    )
    return fig


def save_figure(fig: Figure, output_file: Path) -> Path:
    """Save figure to png, svg or pdf and close it"""
    output_file = Path(output_file)
    image_format = output_file.suffix.lstrip(".").lower()
    if image_format not in IMAGE_FORMATS:
        raise ValueError(
            f"Unsupported image format: {image_format}. Must be one of {IMAGE_FORMATS}"
        )

    output_file.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_file, format=image_format, dpi=300, bbox_inches="tight")
    plt.close(fig)

    logger.info(f"Saved chart to {output_file}")
    return output_file
