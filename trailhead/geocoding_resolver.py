"""Resolve free-text locations into coordinates.

``resolve_location`` never raises for provider trouble: it returns a
``GeocodeOutcome`` whose status tells the caller whether to reformulate the
query (``NOT_FOUND``) or retry later (``TRANSPORT_ERROR``).
``require_coordinates`` is the raising form used when coordinates are a hard
dependency.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from trailhead.data_sources.base import GeocodingProvider
from trailhead.domain import Coordinates, GeocodeOutcome, GeocodeStatus, GeocodingResult
from trailhead.errors import LocationNotFound, ProviderFailure
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="geocoding_resolver")

PROVIDER_NAME = "Geocoding"


def _result_from_candidate(candidate: Dict[str, Any]) -> GeocodingResult:
    """Parse one provider candidate; bad numbers raise instead of becoming 0."""
    latitude = float(candidate["lat"])
    longitude = float(candidate["lon"])
    importance = candidate.get("importance")
    return GeocodingResult(
        coordinates=Coordinates(latitude=latitude, longitude=longitude),
        display_name=str(candidate.get("display_name") or ""),
        confidence=float(importance) if importance is not None else None,
    )


def resolve_location(query: str, geocoder: GeocodingProvider) -> GeocodeOutcome:
    """Resolve ``query`` with the first provider candidate."""
    if not query or not query.strip():
        raise ValueError("location query must be non-empty")

    try:
        candidates = geocoder.search(query)
    except ProviderFailure as exc:
        logger.warning("Geocoding transport failure", extra={"query": query, "error": str(exc)})
        return GeocodeOutcome.transport_error(query, str(exc))

    if not candidates:
        logger.info("No geocoding match", extra={"query": query})
        return GeocodeOutcome.not_found(query)

    try:
        result = _result_from_candidate(candidates[0])
    except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
        logger.warning("Unparseable geocoding candidate", extra={"query": query, "error": str(exc)})
        return GeocodeOutcome.transport_error(query, f"malformed candidate: {exc}")

    logger.debug(
        "Resolved location",
        extra={
            "query": query,
            "latitude": result.coordinates.latitude,
            "longitude": result.coordinates.longitude,
        },
    )
    return GeocodeOutcome.found(query, result)


def require_coordinates(query: str, geocoder: GeocodingProvider) -> GeocodingResult:
    """Resolve ``query`` or raise ``LocationNotFound`` / ``ProviderFailure``."""
    outcome = resolve_location(query, geocoder)
    if outcome.status == GeocodeStatus.FOUND:
        return outcome.result
    if outcome.status == GeocodeStatus.NOT_FOUND:
        raise LocationNotFound(query)
    raise ProviderFailure(PROVIDER_NAME, f"location '{query}'", outcome.error)
