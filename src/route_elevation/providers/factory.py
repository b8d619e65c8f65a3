from __future__ import annotations

from route_elevation.providers.base import MappingProvider


PROVIDER_NAMES = ("google", "mock")


def build_provider(name: str) -> MappingProvider:
    """
    Build a provider from its name, e.g. "google" or "mock".

    The google provider needs ROUTE_ELEVATION_GOOGLE_MAPS_API_KEY and raises
    ConfigurationError without it.
    """
    token = (name or "").strip().lower()

    # Local imports to avoid loading unused providers
    if token == "google":
        from route_elevation.providers.google import GoogleMapsProvider

        return GoogleMapsProvider()
    if token == "mock":
        from route_elevation.providers.mock import MockProvider

        return MockProvider()

    raise ValueError(f"Unknown provider: '{name}' (supported: {', '.join(PROVIDER_NAMES)})")
