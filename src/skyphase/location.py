"""Coordinate providers: browser geolocation results and a Nominatim place lookup."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from skyphase.config import Settings
from skyphase.models import Coordinate, LocationResult, LocationStatus

logger = logging.getLogger(__name__)

# GeolocationPositionError.PERMISSION_DENIED
_PERMISSION_DENIED = 1


class GeocodingError(Exception):
    """Geocoder call failure."""


def _in_range(latitude: float, longitude: float) -> bool:
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


def from_browser_payload(payload: Mapping[str, Any] | None) -> LocationResult:
    """Interpret the value returned by streamlit_js_eval.get_geolocation().

    The browser answers asynchronously, so None means the request is still
    pending. Errors carry the W3C GeolocationPositionError code; only code 1
    is a permission refusal, everything else is reported as unavailable.
    """
    if payload is None:
        return LocationResult(LocationStatus.PENDING)

    error = payload.get("error")
    if error is not None:
        code = error.get("code") if isinstance(error, Mapping) else None
        if code == _PERMISSION_DENIED:
            return LocationResult(LocationStatus.PERMISSION_DENIED)
        logger.warning("Browser geolocation failed: %s", error)
        return LocationResult(LocationStatus.UNAVAILABLE)

    coords = payload.get("coords")
    if not isinstance(coords, Mapping):
        return LocationResult(LocationStatus.UNSUPPORTED)

    try:
        latitude = float(coords["latitude"])
        longitude = float(coords["longitude"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Malformed geolocation payload: %s", coords)
        return LocationResult(LocationStatus.UNAVAILABLE)

    if not _in_range(latitude, longitude):
        logger.warning("Geolocation out of range: lat=%s lon=%s", latitude, longitude)
        return LocationResult(LocationStatus.UNAVAILABLE)

    return LocationResult(
        LocationStatus.LOCKED, Coordinate(latitude=latitude, longitude=longitude)
    )


def geocode_place(query: str, settings: Settings | None = None) -> tuple[Coordinate, str]:
    """Resolve a place name with Nominatim (OpenStreetMap).

    Args:
        query: Free-form place name in any language.
        settings: Endpoint and User-Agent. Defaults to Settings().

    Returns:
        (coordinate, display name returned by the geocoder).

    Raises:
        GeocodingError: When the request fails or the place cannot be found.
    """
    settings = settings or Settings()
    query = query.strip()
    if not query:
        raise GeocodingError("Empty place name")

    params = {"q": query, "format": "json", "limit": 1}
    headers = {"User-Agent": settings.user_agent}
    try:
        resp = httpx.get(
            settings.nominatim_url, params=params, headers=headers, timeout=10
        )
        resp.raise_for_status()
        results = resp.json()
    except httpx.HTTPError as e:
        raise GeocodingError(f"Geocoder request failed: {e}") from e

    if not results:
        raise GeocodingError(f"Place not found: {query}")
    r = results[0]
    try:
        latitude, longitude = float(r["lat"]), float(r["lon"])
    except (KeyError, TypeError, ValueError) as e:
        raise GeocodingError(f"Malformed geocoder response for {query}") from e

    logger.info("Geocoded %r to lat=%.4f lon=%.4f", query, latitude, longitude)
    return Coordinate(latitude=latitude, longitude=longitude), r.get("display_name", query)


def from_place(query: str, settings: Settings | None = None) -> tuple[LocationResult, str]:
    """Geocode a typed place name into a LOCKED result plus its display name.

    Raises:
        GeocodingError: Propagated from geocode_place.
    """
    coordinate, display = geocode_place(query, settings)
    return LocationResult(LocationStatus.LOCKED, coordinate), display
