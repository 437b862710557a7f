"""
Distance providers package.
"""

from .factory import ProviderFactory
from .distance_api.provider import HttpDistanceProvider
from .mapbox.provider import MapboxDistanceProvider

__all__ = [
    "ProviderFactory",
    "HttpDistanceProvider",
    "MapboxDistanceProvider",
]
