"""
Distance provider domain exceptions.
"""


class DistanceProviderError(Exception):
    """Base exception for distance provider errors."""

    pass


class DistanceProviderConfigurationError(DistanceProviderError):
    """Raised when the distance provider is not configured."""

    pass


class DistanceLookupError(DistanceProviderError):
    """Raised when a distance between two postcodes cannot be resolved."""

    def __init__(self, origin: str, destination: str, reason: str):
        self.origin = origin
        self.destination = destination
        self.reason = reason
        super().__init__(
            f"Distance lookup failed for {origin} -> {destination}: {reason}"
        )
