"""Categorical models shared by the aggregation and rendering stages"""

from enum import Enum
from typing import Tuple


class ContinentCategory(Enum):
    """Synthetic continent categories injected next to the real continents"""

    # identifier, RGBA render colour
    PLACEHOLDER = ("__placeholder__", (0.0, 0.0, 0.0, 0.0))

    def __init__(self, identifier: str, color: Tuple[float, float, float, float]):
        self.identifier = identifier
        self.color = color

    @classmethod
    def is_placeholder(cls, continent) -> bool:
        """Check whether a continent value is the reserved placeholder"""
        return continent == cls.PLACEHOLDER.identifier


PLACEHOLDER_CONTINENT = ContinentCategory.PLACEHOLDER.identifier
