# tests/test_compute.py

from datetime import datetime

from pytz import utc

from skyphase.compute import run
from skyphase.models import Coordinate, MoonPhaseLabel, PhaseLabel

LONDON = Coordinate(latitude=51.5074, longitude=-0.1278)


def test_missing_coordinate_awaits_location():
    moment = datetime(2024, 6, 21, 12, tzinfo=utc)
    report = run(moment, None)
    assert report.awaiting_location
    assert report.moment == moment
    assert report.solar is None
    assert report.phase is None
    assert report.moon is None
    assert report.transition is None
    assert report.remaining is None


def test_london_solstice_noon_report():
    moment = datetime(2024, 6, 21, 12, tzinfo=utc)
    report = run(moment, LONDON)
    assert not report.awaiting_location
    assert report.phase is PhaseLabel.DAY
    assert report.solar.altitude_deg > 50
    assert report.moon_phase is not None
    assert report.transition is not None
    assert report.remaining == report.transition.at - moment
    assert report.remaining.total_seconds() > 0


def test_full_moon_report():
    report = run(datetime(2024, 8, 19, 12, tzinfo=utc), LONDON)
    assert report.moon_phase is MoonPhaseLabel.FULL


def test_polar_day_report_has_no_countdown():
    report = run(datetime(2024, 6, 21, 0, tzinfo=utc), Coordinate(latitude=78.0, longitude=15.0))
    assert report.phase is PhaseLabel.DAY
    assert report.transition is None
    assert report.remaining is None


def test_run_is_idempotent():
    moment = datetime(2024, 2, 29, 5, 45, tzinfo=utc)
    assert run(moment, LONDON) == run(moment, LONDON)
