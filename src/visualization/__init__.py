"""Chart rendering for yield distributions"""

from src.visualization.waffle import render_waffle_chart, save_figure

__all__ = [
    "render_waffle_chart",
    "save_figure",
]
