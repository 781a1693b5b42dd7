"""Error taxonomy for the provider resolution engine.

Only two conditions are ever raised by the engine:

- ``InvalidReferenceData``: the static reference collections are absent or
  malformed. Raised while loading; the engine cannot start.
- ``NoProvidersAvailable``: the provider collection is empty, so not even the
  positional default can answer a request.

Everything else ("no exact match", "unknown token", ...) is handled by the
strategy chain and is not an error.
"""

from __future__ import annotations


class ResolverError(Exception):
    """Base class for all resolver errors."""


class InvalidReferenceData(ResolverError, ValueError):
    """Reference data is missing or does not have the required fields."""


class NoProvidersAvailable(ResolverError, LookupError):
    """The provider collection is empty."""

    def __init__(self, raw_token: str = ""):
        self.raw_token = raw_token
        super().__init__(f"No provider available to resolve '{raw_token}'")


__all__ = ["ResolverError", "InvalidReferenceData", "NoProvidersAvailable"]
