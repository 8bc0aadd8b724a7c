"""Lunar position and illumination.

Low-precision model: a three-term solar ephemeris plus a mean-element moon
with the principal amplitude corrections. Day numbers here use the whole-day
Julian expression (ms/day - 0.5 + 2440588). It evaluates to the same value as
`skyphase.solar.julian_day`, but the lunar series keeps its own conversion so
the two ephemerides stay independent.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from skyphase.clock import epoch_millis
from skyphase.models import Coordinate, MoonState

_RAD = math.pi / 180
_DAY_MS = 86400000
_J1970 = 2440588
_J2000 = 2451545
_OBLIQUITY = _RAD * 23.4397
_PERIHELION = _RAD * 102.9372
_SUN_DISTANCE_KM = 149598000


@dataclass(frozen=True)
class EquatorialCoords:
    """Right ascension / declination in radians, distance in km (0 if unknown)."""

    ra: float
    dec: float
    distance_km: float = 0.0


@dataclass(frozen=True)
class Illumination:
    fraction: float
    phase: float
    angle: float  # signed position angle of the bright limb (radians)


def lunar_julian_date(moment: datetime) -> float:
    """Julian date in the whole-day convention: ms/day - 0.5 + 2440588."""
    return epoch_millis(moment) / _DAY_MS - 0.5 + _J1970


def days_since_j2000(moment: datetime) -> float:
    return lunar_julian_date(moment) - _J2000


def _right_ascension(lon: float, lat: float) -> float:
    return math.atan2(
        math.sin(lon) * math.cos(_OBLIQUITY) - math.tan(lat) * math.sin(_OBLIQUITY),
        math.cos(lon),
    )


def _declination(lon: float, lat: float) -> float:
    return math.asin(
        math.sin(lat) * math.cos(_OBLIQUITY)
        + math.cos(lat) * math.sin(_OBLIQUITY) * math.sin(lon)
    )


def sidereal_time(days: float, longitude_deg: float) -> float:
    """Local sidereal time in radians. West longitude counts positive internally."""
    lw = _RAD * -longitude_deg
    return _RAD * (280.16 + 360.9856235 * days) - lw


def sun_coords(days: float) -> EquatorialCoords:
    mean_anomaly = _RAD * (357.5291 + 0.98560028 * days)
    center = _RAD * (
        1.9148 * math.sin(mean_anomaly)
        + 0.02 * math.sin(2 * mean_anomaly)
        + 0.0003 * math.sin(3 * mean_anomaly)
    )
    ecliptic_longitude = mean_anomaly + center + _PERIHELION + math.pi
    return EquatorialCoords(
        ra=_right_ascension(ecliptic_longitude, 0),
        dec=_declination(ecliptic_longitude, 0),
    )


def moon_coords(days: float) -> EquatorialCoords:
    mean_longitude = _RAD * (218.316 + 13.176396 * days)
    mean_anomaly = _RAD * (134.963 + 13.064993 * days)
    mean_distance = _RAD * (93.272 + 13.229350 * days)

    lon = mean_longitude + _RAD * 6.289 * math.sin(mean_anomaly)
    lat = _RAD * 5.128 * math.sin(mean_distance)
    distance = 385001 - 20905 * math.cos(mean_anomaly)
    return EquatorialCoords(
        ra=_right_ascension(lon, lat),
        dec=_declination(lon, lat),
        distance_km=distance,
    )


def moon_altitude(moment: datetime, coordinate: Coordinate) -> float:
    """Geometric moon altitude in degrees (no refraction, no parallax)."""
    days = days_since_j2000(moment)
    moon = moon_coords(days)
    hour_angle = sidereal_time(days, coordinate.longitude) - moon.ra
    phi = _RAD * coordinate.latitude
    return (
        math.asin(
            math.sin(phi) * math.sin(moon.dec)
            + math.cos(phi) * math.cos(moon.dec) * math.cos(hour_angle)
        )
        / _RAD
    )


def moon_illumination(moment: datetime) -> Illumination:
    """Illuminated fraction and cycle position; independent of the observer."""
    days = days_since_j2000(moment)
    sun = sun_coords(days)
    moon = moon_coords(days)

    separation = math.acos(
        max(
            -1.0,
            min(
                1.0,
                math.sin(sun.dec) * math.sin(moon.dec)
                + math.cos(sun.dec) * math.cos(moon.dec) * math.cos(sun.ra - moon.ra),
            ),
        )
    )
    inc = math.atan2(
        _SUN_DISTANCE_KM * math.sin(separation),
        moon.distance_km - _SUN_DISTANCE_KM * math.cos(separation),
    )
    angle = math.atan2(
        math.cos(sun.dec) * math.sin(sun.ra - moon.ra),
        math.sin(sun.dec) * math.cos(moon.dec)
        - math.cos(sun.dec) * math.sin(moon.dec) * math.cos(sun.ra - moon.ra),
    )

    sign = -1 if angle < 0 else 1
    phase = (0.5 + sign * inc / (2 * math.pi)) % 1.0
    return Illumination(fraction=(1 + math.cos(inc)) / 2, phase=phase, angle=angle)


def moon_state(moment: datetime, coordinate: Coordinate) -> MoonState:
    """Moon altitude, illuminated fraction and cycle position for an observer."""
    illumination = moon_illumination(moment)
    return MoonState(
        altitude_deg=moon_altitude(moment, coordinate),
        illuminated_fraction=illumination.fraction,
        phase=illumination.phase,
        distance_km=moon_coords(days_since_j2000(moment)).distance_km,
        waxing=illumination.phase < 0.5,
    )
