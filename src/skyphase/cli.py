"""CLI entry point: print the sky phase report for a location.

    skyphase --lat 51.5074 --lon -0.1278
    skyphase --place "Eiffel Tower, Paris" --at 2024-06-21T21:30:00+02:00
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, time

from dotenv import load_dotenv
from pytz import utc

from skyphase.classify import phase_detail_key
from skyphase.clock import TimeSource, system_utc_offset_minutes
from skyphase.compute import run
from skyphase.config import ConfigError, configure_logging, load_settings
from skyphase.formatting import (
    format_clock,
    format_coordinate,
    format_countdown,
    format_percent,
    format_utc_offset,
)
from skyphase.i18n import moon_phase_name, phase_name, t
from skyphase.location import GeocodingError, geocode_place
from skyphase.models import Coordinate, SkyPhaseReport


def _parse_moment(s: str) -> datetime:
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = utc.localize(dt)
    return dt.astimezone(utc)


def _parse_wall_time(s: str) -> time:
    return time.fromisoformat(s)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="skyphase", description="Current sky phase, moon and next transition")
    p.add_argument("--lat", type=float, help="latitude in degrees (north positive)")
    p.add_argument("--lon", type=float, help="longitude in degrees (east positive)")
    p.add_argument("--place", help="place name resolved with Nominatim instead of --lat/--lon")
    p.add_argument("--at", type=_parse_moment, help="ISO instant; naive values are UTC")
    p.add_argument("--time", type=_parse_wall_time, help="HH:MM[:SS] wall-clock override for today")
    p.add_argument("--offset", type=int, help="UTC offset in minutes (default: host clock)")
    p.add_argument("--lang", choices=["en", "ko"])
    return p


def render_text(report: SkyPhaseReport, source: TimeSource, lang: str) -> str:
    lines = [
        f"{t('label_local_time', lang)}: {format_clock(source.to_local(report.moment))} "
        f"({format_utc_offset(source.utc_offset_minutes)})",
    ]
    if report.coordinate is None:
        lines.append(t("awaiting_location", lang))
        return "\n".join(lines)

    assert report.solar is not None and report.phase is not None
    assert report.moon is not None and report.moon_phase is not None
    lines += [
        f"{t('label_latitude', lang)}: {format_coordinate(report.coordinate.latitude, 'N', 'S')}",
        f"{t('label_longitude', lang)}: {format_coordinate(report.coordinate.longitude, 'E', 'W')}",
        f"{t('label_current_phase', lang)}: {phase_name(report.phase, lang)}"
        f" ({report.solar.altitude_deg:.1f}°)",
        f"  {t(phase_detail_key(report.solar.altitude_deg), lang)}",
    ]
    if report.transition is None or report.remaining is None:
        lines.append(t("no_transition", lang))
    else:
        at_local = source.to_local(report.transition.at)
        lines.append(
            f"{t('label_next_phase', lang)}: "
            + t("countdown", lang).format(
                label=phase_name(report.transition.label, lang),
                remaining=format_countdown(report.remaining),
            )
            + f" ({format_clock(at_local)})"
        )
    lines.append(
        f"{t('label_moon', lang)}: {moon_phase_name(report.moon_phase, lang)}, "
        f"{t('label_illumination', lang)} {format_percent(report.moon.illuminated_fraction)}, "
        f"{t('label_moon_altitude', lang)} {report.moon.altitude_deg:.1f}°"
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"config error: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)

    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    lang = args.lang or settings.lang

    coordinate: Coordinate | None = None
    if args.place:
        try:
            coordinate, display = geocode_place(args.place, settings)
        except GeocodingError as e:
            print(t("error_place", lang).format(error=e), file=sys.stderr)
            return 1
        print(display)
    elif args.lat is not None and args.lon is not None:
        coordinate = Coordinate(latitude=args.lat, longitude=args.lon)

    offset = args.offset if args.offset is not None else system_utc_offset_minutes()
    source = TimeSource(utc_offset_minutes=offset, override=args.time)
    moment = source.now(real_now=args.at)

    report = run(
        moment,
        coordinate,
        horizon_minutes=settings.search_horizon_minutes,
        step_minutes=settings.search_step_minutes,
    )
    print(render_text(report, source, lang))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
