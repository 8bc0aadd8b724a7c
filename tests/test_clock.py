# tests/test_clock.py

from datetime import datetime, time

from pytz import utc

from skyphase.clock import (
    TimeSource,
    browser_offset_to_minutes,
    epoch_millis,
    local_zone,
    truncate_to_millis,
)


def test_epoch_millis():
    assert epoch_millis(datetime(1970, 1, 1, tzinfo=utc)) == 0
    assert epoch_millis(datetime(1970, 1, 2, tzinfo=utc)) == 86400000


def test_live_instant_truncated_to_millis():
    real = datetime(2024, 6, 21, 12, 0, 0, 123456, tzinfo=utc)
    assert TimeSource().now(real_now=real) == datetime(2024, 6, 21, 12, 0, 0, 123000, tzinfo=utc)
    assert truncate_to_millis(real).microsecond == 123000


def test_override_uses_today_on_local_clock():
    source = TimeSource(utc_offset_minutes=120, override=time(21, 30))
    real = datetime(2024, 6, 21, 10, 0, tzinfo=utc)
    assert source.now(real_now=real) == datetime(2024, 6, 21, 19, 30, tzinfo=utc)
    assert source.overridden


def test_override_date_follows_local_day_not_utc_day():
    # 20:00Z is already the 22nd in UTC+9
    source = TimeSource(utc_offset_minutes=540, override=time(6, 0))
    real = datetime(2024, 6, 21, 20, 0, tzinfo=utc)
    assert source.now(real_now=real) == datetime(2024, 6, 21, 21, 0, tzinfo=utc)


def test_to_local_applies_offset():
    source = TimeSource(utc_offset_minutes=-210)
    local = source.to_local(datetime(2024, 1, 1, 12, 0, tzinfo=utc))
    assert (local.hour, local.minute) == (8, 30)
    assert local.utcoffset() == local_zone(-210).utcoffset(None)


def test_browser_offset_sign_flips():
    assert browser_offset_to_minutes(-540) == 540
    assert browser_offset_to_minutes(60) == -60
    assert browser_offset_to_minutes("0") == 0
    assert browser_offset_to_minutes(None) is None
    assert browser_offset_to_minutes("soon") is None
