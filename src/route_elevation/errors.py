"""Exception types shared by providers, the engine and the API."""
from __future__ import annotations

from typing import Optional


class RouteElevationError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(RouteElevationError):
    """A required setting is missing or invalid."""


class ProviderError(RouteElevationError):
    """A mapping provider request failed.

    ``status`` carries the provider's status code (e.g. ``ZERO_RESULTS``,
    ``OVER_QUERY_LIMIT``) when one was returned.
    """

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.status = status


class RouteCalculationError(RouteElevationError):
    DEFAULT_MESSAGE = "Failed to calculate route. Please try again."

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
