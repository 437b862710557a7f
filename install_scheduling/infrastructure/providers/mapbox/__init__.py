"""
Mapbox provider package.
"""

from .client import MapboxClient
from .models import Coordinates, MapboxMatrix, MapboxRoute
from .provider import MapboxDistanceProvider

__all__ = [
    "MapboxDistanceProvider",
    "MapboxClient",
    "Coordinates",
    "MapboxMatrix",
    "MapboxRoute",
]
