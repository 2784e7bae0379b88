"""Typed failure outcomes shared by the services and the HTTP layer."""

from __future__ import annotations


class NotFoundError(LookupError):
    """A lookup completed normally but matched nothing."""


class ParkNotFound(NotFoundError):
    """No park exists for the requested park code."""

    def __init__(self, park_code: str) -> None:
        self.park_code = park_code
        super().__init__(f"Could not find park with code: {park_code}")


class LocationNotFound(NotFoundError):
    """The geocoder returned no candidate for a free-text location."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(
            f"Could not identify the location: {location}. "
            "Please try a more specific location name or provide coordinates."
        )


class ProviderFailure(RuntimeError):
    """A provider call failed in transport or returned a payload we could not read.

    ``lookup`` names what was being fetched (park code, location, coordinates)
    so the message shown to a user says which lookup failed.
    """

    def __init__(self, provider: str, lookup: str, detail: str | None = None) -> None:
        self.provider = provider
        self.lookup = lookup
        self.detail = detail
        message = f"{provider} lookup failed for {lookup}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
