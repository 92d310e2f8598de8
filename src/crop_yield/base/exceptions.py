"""Errors raised by the yield distribution pipeline"""


class DataUnavailableError(RuntimeError):
    """Source table or continent lookup could not be fetched or parsed"""


class EmptyFacetError(ValueError):
    """A (crop, yield class) facet has nothing to draw"""
