"""
Distance API endpoint provider package.
"""

from .provider import HttpDistanceProvider

__all__ = [
    "HttpDistanceProvider",
]
