# tests/test_transitions.py

from datetime import datetime, timedelta

import pytest
from pytz import utc

from skyphase.models import Coordinate, PhaseLabel
from skyphase.solar import solar_phase_label
from skyphase.transitions import (
    bisect_boundary,
    find_bracket,
    next_solar_transition,
    next_transition,
    probe_times,
    search,
)

START = datetime(2024, 1, 1, tzinfo=utc)
LONDON = Coordinate(latitude=51.5074, longitude=-0.1278)
ONE_MS = timedelta(milliseconds=1)


def ramp(boundary_seconds: float):
    """Synthetic label function: flips from 'below' to 'above' after boundary_seconds."""

    def label_at(moment: datetime) -> str:
        elapsed = (moment - START).total_seconds()
        return "above" if elapsed > boundary_seconds else "below"

    return label_at


def test_probe_times_cover_horizon():
    probes = list(probe_times(START, timedelta(minutes=10), timedelta(minutes=2)))
    assert len(probes) == 5
    assert probes[0] == START + timedelta(minutes=2)
    assert probes[-1] == START + timedelta(minutes=10)


def test_find_bracket_returns_neighbouring_probes():
    low, high = find_bracket(
        ramp(1000), START, "below", timedelta(hours=1), timedelta(minutes=2)
    )
    assert low == START + timedelta(seconds=960)
    assert high == START + timedelta(seconds=1080)


def test_find_bracket_none_without_change():
    assert (
        find_bracket(lambda _: "same", START, "same", timedelta(hours=1), timedelta(minutes=2))
        is None
    )


def test_bisect_converges_on_ramp_boundary():
    boundary = START + timedelta(seconds=1000)
    at = bisect_boundary(
        ramp(1000),
        START + timedelta(seconds=960),
        START + timedelta(seconds=1080),
        "below",
        24,
    )
    assert boundary < at <= boundary + ONE_MS


def test_search_on_synthetic_ramp():
    label, at = search(ramp(4321.5), START)
    assert label == "above"
    boundary = START + timedelta(seconds=4321.5)
    assert boundary < at <= boundary + ONE_MS


def test_search_none_when_label_never_changes():
    assert search(lambda _: "night", START) is None


def test_search_respects_horizon():
    # Change happens 2 h out; a 1 h horizon must not see it
    assert search(ramp(7200), START, horizon=timedelta(hours=1)) is None
    assert search(ramp(7200), START, horizon=timedelta(hours=3)) is not None


def test_search_evaluation_budget():
    calls = 0
    label_at = ramp(86000)

    def counting(moment: datetime) -> str:
        nonlocal calls
        calls += 1
        return label_at(moment)

    search(counting, START)
    # current + 720 probes + 24 bisections + final label
    assert calls <= 1 + 720 + 24 + 1


def test_london_noon_next_transition_is_sunset():
    now = datetime(2024, 6, 21, 12, tzinfo=utc)
    event = next_transition(now, LONDON)
    assert event is not None
    assert event.label is PhaseLabel.CIVIL_TWILIGHT
    # Geometric sunset, no refraction: about 20:12 UTC
    assert datetime(2024, 6, 21, 19, 45, tzinfo=utc) < event.at < datetime(
        2024, 6, 21, 20, 40, tzinfo=utc
    )


@pytest.mark.parametrize(
    "now",
    [
        datetime(2024, 6, 21, 12, tzinfo=utc),
        datetime(2024, 3, 20, 3, 17, 42, tzinfo=utc),
        datetime(2024, 12, 21, 16, 5, tzinfo=utc),
    ],
)
def test_transition_separates_labels(now):
    event = next_solar_transition(now, LONDON)
    assert event is not None
    assert event.at > now
    before = solar_phase_label(event.at - ONE_MS, LONDON)
    after = solar_phase_label(event.at + ONE_MS, LONDON)
    assert before != after
    assert after is event.label


def test_arctic_summer_has_no_transition():
    # Svalbard at the solstice: the sun never drops below ~11°
    now = datetime(2024, 6, 21, 0, tzinfo=utc)
    assert next_transition(now, Coordinate(latitude=78.0, longitude=15.0)) is None


def test_next_transition_is_idempotent():
    now = datetime(2024, 10, 5, 17, 0, tzinfo=utc)
    assert next_transition(now, LONDON) == next_transition(now, LONDON)


def test_bisect_lands_on_whole_millisecond():
    low = START + timedelta(seconds=960, microseconds=250)
    at = bisect_boundary(ramp(1000.0004), low, START + timedelta(seconds=1080), "below", 24)
    assert (at - low) % ONE_MS == timedelta(0)


@pytest.mark.parametrize("latitude", [-66.0, -45.0, 0.0, 30.0, 51.5, 64.0, 70.0, 89.9])
@pytest.mark.parametrize("longitude", [-179.9, -60.0, 45.0, 135.0])
def test_transition_separates_labels_across_the_globe(latitude, longitude):
    coordinate = Coordinate(latitude=latitude, longitude=longitude)
    starts = [
        datetime(2024, 10, 3, 15, 7, 11, 123000, tzinfo=utc),
        datetime(2024, 1, 17, 4, 44, 2, 999000, tzinfo=utc),
        datetime(2024, 4, 9, 21, 30, 0, 501000, tzinfo=utc),
        datetime(2024, 7, 28, 9, 12, 58, 7000, tzinfo=utc),
    ]
    for now in starts:
        event = next_transition(now, coordinate)
        if event is None:
            continue
        assert event.at.microsecond % 1000 == 0
        before = solar_phase_label(event.at - ONE_MS, coordinate)
        after = solar_phase_label(event.at + ONE_MS, coordinate)
        assert before != after
        assert after is event.label


def test_high_latitude_boundary_at_astronomical_threshold():
    coordinate = Coordinate(latitude=64.0, longitude=-179.9)
    now = datetime(2024, 10, 3, 15, 7, 11, 123000, tzinfo=utc)
    event = next_transition(now, coordinate)
    assert event is not None
    assert event.label is PhaseLabel.ASTRONOMICAL_DAWN
    assert solar_phase_label(event.at - ONE_MS, coordinate) is PhaseLabel.NIGHT
