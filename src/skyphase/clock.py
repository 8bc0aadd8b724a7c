"""Time source: the live instant or a substituted wall-clock reading.

Local wall-clock time is UTC plus a fixed offset in minutes; no timezone
database is consulted.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone

from pytz import utc


def local_zone(utc_offset_minutes: int) -> timezone:
    """Fixed-offset tzinfo for the observer's wall clock."""
    return timezone(timedelta(minutes=utc_offset_minutes))


def system_utc_offset_minutes() -> int:
    """UTC offset of the host clock, in minutes east of Greenwich."""
    offset = datetime.now().astimezone().utcoffset()
    return int(offset.total_seconds() // 60) if offset is not None else 0


def browser_offset_to_minutes(js_offset: int | float | str | None) -> int | None:
    """Convert JavaScript `Date.getTimezoneOffset()` to minutes east of UTC.

    The browser reports minutes *behind* UTC (UTC+9 → -540), so the sign flips.
    Returns None when the value has not arrived yet or cannot be parsed.
    """
    if js_offset is None:
        return None
    try:
        return -int(float(js_offset))
    except (TypeError, ValueError):
        return None


def truncate_to_millis(moment: datetime) -> datetime:
    """Drop sub-millisecond precision."""
    return moment.replace(microsecond=moment.microsecond - moment.microsecond % 1000)


def epoch_millis(moment: datetime) -> float:
    """Milliseconds since 1970-01-01T00:00Z for an aware datetime."""
    return moment.timestamp() * 1000.0


@dataclass(frozen=True)
class TimeSource:
    """Supplies the moment used for a refresh.

    With `override` set, the returned moment carries today's local date and
    the overridden hour/minute/second; otherwise it is the real instant.
    """

    utc_offset_minutes: int = 0
    override: time | None = None

    def now(self, real_now: datetime | None = None) -> datetime:
        """Return the current moment as a UTC-aware datetime.

        Args:
            real_now: Injected real instant (aware). Defaults to the system clock.

        Returns:
            UTC-aware datetime truncated to millisecond resolution.
        """
        instant = real_now if real_now is not None else datetime.now(tz=utc)
        if self.override is None:
            return truncate_to_millis(instant.astimezone(utc))

        zone = local_zone(self.utc_offset_minutes)
        today = instant.astimezone(zone).date()
        wall = datetime.combine(
            today,
            self.override.replace(microsecond=0, tzinfo=None),
            tzinfo=zone,
        )
        return wall.astimezone(utc)

    def to_local(self, moment: datetime) -> datetime:
        """Express a moment on the observer's wall clock."""
        return moment.astimezone(local_zone(self.utc_offset_minutes))

    @property
    def overridden(self) -> bool:
        return self.override is not None
