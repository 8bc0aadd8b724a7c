# tests/test_lunar.py

from datetime import datetime, timedelta

import pytest
from pytz import utc

from skyphase.classify import moon_phase_label
from skyphase.lunar import (
    days_since_j2000,
    lunar_julian_date,
    moon_altitude,
    moon_illumination,
    moon_state,
)
from skyphase.models import Coordinate, MoonPhaseLabel
from skyphase.solar import julian_day

LONDON = Coordinate(latitude=51.5074, longitude=-0.1278)


def test_whole_day_julian_date_at_j2000():
    moment = datetime(2000, 1, 1, 12, tzinfo=utc)
    assert lunar_julian_date(moment) == pytest.approx(2451545.0)
    assert days_since_j2000(moment) == pytest.approx(0.0)


def test_julian_conventions_agree_numerically():
    # Both expressions reduce to ms/day + 2440587.5
    for moment in (
        datetime(1999, 12, 31, 23, 59, tzinfo=utc),
        datetime(2024, 6, 21, 0, tzinfo=utc),
        datetime(2031, 2, 3, 4, 5, 6, tzinfo=utc),
    ):
        assert lunar_julian_date(moment) == pytest.approx(julian_day(moment), abs=1e-9)


def test_full_moon_2024_08_19():
    # Full moon: 2024-08-19 18:26 UTC
    state = moon_state(datetime(2024, 8, 19, 12, tzinfo=utc), LONDON)
    assert 0.47 <= state.phase <= 0.53
    assert moon_phase_label(state.phase) is MoonPhaseLabel.FULL
    assert state.illuminated_fraction > 0.97


def test_new_moon_2024_08_04():
    # New moon: 2024-08-04 11:13 UTC
    illumination = moon_illumination(datetime(2024, 8, 4, 11, tzinfo=utc))
    assert moon_phase_label(illumination.phase) is MoonPhaseLabel.NEW
    assert illumination.fraction < 0.03


def test_first_quarter_2024_08_12_is_waxing():
    # First quarter: 2024-08-12 15:19 UTC
    state = moon_state(datetime(2024, 8, 12, 15, tzinfo=utc), LONDON)
    assert moon_phase_label(state.phase) is MoonPhaseLabel.FIRST_QUARTER
    assert state.waxing
    assert state.illuminated_fraction == pytest.approx(0.5, abs=0.08)


def test_last_quarter_2024_08_26_is_waning():
    # Last quarter: 2024-08-26 09:26 UTC
    state = moon_state(datetime(2024, 8, 26, 9, tzinfo=utc), LONDON)
    assert moon_phase_label(state.phase) is MoonPhaseLabel.LAST_QUARTER
    assert not state.waxing


def test_year_sweep_stays_in_range():
    start = datetime(2024, 1, 1, tzinfo=utc)
    for hours in range(0, 24 * 366, 6):
        moment = start + timedelta(hours=hours)
        state = moon_state(moment, LONDON)
        assert 0.0 <= state.illuminated_fraction <= 1.0
        assert 0.0 <= state.phase < 1.0
        assert -90.0 <= state.altitude_deg <= 90.0
        assert 356000 < state.distance_km < 407000


def test_moon_altitude_depends_on_observer():
    moment = datetime(2024, 8, 19, 22, tzinfo=utc)
    north = moon_altitude(moment, Coordinate(latitude=60.0, longitude=0.0))
    south = moon_altitude(moment, Coordinate(latitude=-60.0, longitude=0.0))
    assert north != pytest.approx(south)


def test_moon_state_is_idempotent():
    moment = datetime(2024, 3, 14, 1, 59, 26, tzinfo=utc)
    assert moon_state(moment, LONDON) == moon_state(moment, LONDON)
