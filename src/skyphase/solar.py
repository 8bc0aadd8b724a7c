"""Solar position: low-precision sun altitude for an observer.

Standard almanac approximation (about 0.01° in declination), accurate enough
because sky phase boundaries lie 6° apart.
"""

import math
from datetime import datetime, timedelta

from pytz import utc

from skyphase.classify import solar_phase_from_altitude
from skyphase.clock import epoch_millis, truncate_to_millis
from skyphase.models import Coordinate, PhaseLabel, SolarState

_RAD = math.pi / 180
_J2000 = 2451545.0
_UNIX_EPOCH_JD = 2440587.5
_DAY_MS = 86400000

RISING_LOOKAHEAD = timedelta(minutes=10)


def julian_day(moment: datetime) -> float:
    """Continuous Julian Day of an aware datetime."""
    return epoch_millis(moment) / _DAY_MS + _UNIX_EPOCH_JD


def solar_declination(moment: datetime) -> float:
    """Sun declination in degrees."""
    n = julian_day(moment) - _J2000
    mean_longitude = math.fmod(280.46 + 0.9856474 * n, 360)
    mean_anomaly = math.fmod(357.528 + 0.9856003 * n, 360)
    ecliptic_longitude = (
        mean_longitude
        + 1.915 * math.sin(mean_anomaly * _RAD)
        + 0.02 * math.sin(2 * mean_anomaly * _RAD)
    )
    obliquity = 23.439 - 0.0000004 * n
    return (
        math.asin(math.sin(obliquity * _RAD) * math.sin(ecliptic_longitude * _RAD))
        / _RAD
    )


def solar_altitude(moment: datetime, coordinate: Coordinate) -> float:
    """Sun altitude above the horizon in degrees (negative = below).

    `moment` is truncated to whole milliseconds first, so declination and hour
    angle see the same instant and altitude is constant within a millisecond.
    The hour angle is taken from the UTC clock fields, shifted by longitude;
    wall-clock time never enters this computation.

    Args:
        moment: Aware datetime.
        coordinate: Observer position. Not validated.

    Returns:
        Geometric altitude in degrees, without refraction.
    """
    t = truncate_to_millis(moment.astimezone(utc))
    declination = solar_declination(t)

    seconds = t.second + t.microsecond / 1_000_000
    hours = t.hour + t.minute / 60 + seconds / 3600
    solar_time = hours + coordinate.longitude / 15
    hour_angle = (solar_time * 15 - 180) * _RAD

    lat = coordinate.latitude * _RAD
    dec = declination * _RAD
    return (
        math.asin(
            math.sin(lat) * math.sin(dec)
            + math.cos(lat) * math.cos(dec) * math.cos(hour_angle)
        )
        / _RAD
    )


def solar_state(moment: datetime, coordinate: Coordinate) -> SolarState:
    """Altitude plus trend, using a 10-minute forward probe as the rising test."""
    now_alt = solar_altitude(moment, coordinate)
    future_alt = solar_altitude(moment + RISING_LOOKAHEAD, coordinate)
    return SolarState(altitude_deg=now_alt, is_rising=future_alt > now_alt)


def solar_phase_label(moment: datetime, coordinate: Coordinate) -> PhaseLabel:
    state = solar_state(moment, coordinate)
    return solar_phase_from_altitude(state.altitude_deg, state.is_rising)
