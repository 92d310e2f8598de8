"""Yield class distribution pipeline"""

from src.crop_yield.distribution.config import YieldDistributionConfig
from src.crop_yield.distribution.processor import YieldDistributionProcessor

__all__ = [
    "YieldDistributionConfig",
    "YieldDistributionProcessor",
]
