"""Display text for coordinates, wall-clock times and countdowns."""

from datetime import datetime, timedelta


def format_coordinate(value: float | None, positive_label: str, negative_label: str) -> str:
    """'51.5074° N' style text; '--' when the value is unknown."""
    if value is None:
        return "--"
    label = positive_label if value >= 0 else negative_label
    return f"{abs(value):.4f}° {label}"


def format_utc_offset(minutes: int) -> str:
    """'UTC+09:00' / 'UTC-03:30' for a fixed offset in minutes east of UTC."""
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"UTC{sign}{hours:02d}:{mins:02d}"


def format_clock(local: datetime) -> str:
    """HH:MM:SS of an already-localised datetime."""
    return local.strftime("%H:%M:%S")


def format_countdown(remaining: timedelta) -> str:
    """Compact countdown: '2h 05m', '14m 09s', '42s'. Negative durations read as 0s."""
    total = max(0, int(remaining.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}m"
    if minutes:
        return f"{minutes}m {seconds:02d}s"
    return f"{seconds}s"


def format_percent(fraction: float) -> str:
    return f"{fraction * 100:.0f}%"
