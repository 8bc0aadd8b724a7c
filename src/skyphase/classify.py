"""Phase classifiers: discrete labels from solar altitude and lunar cycle position."""

from skyphase.models import MoonPhaseLabel, PhaseLabel

# (altitude floor, dawn label, twilight label); altitude must be strictly above the floor
_SOLAR_BANDS: tuple[tuple[float, PhaseLabel, PhaseLabel], ...] = (
    (0.0, PhaseLabel.DAY, PhaseLabel.DAY),
    (-6.0, PhaseLabel.CIVIL_DAWN, PhaseLabel.CIVIL_TWILIGHT),
    (-12.0, PhaseLabel.NAUTICAL_DAWN, PhaseLabel.NAUTICAL_TWILIGHT),
    (-18.0, PhaseLabel.ASTRONOMICAL_DAWN, PhaseLabel.ASTRONOMICAL_TWILIGHT),
)

# Inclusive upper bounds, checked in order after the New-moon wrap test
_MOON_BINS: tuple[tuple[float, MoonPhaseLabel], ...] = (
    (0.22, MoonPhaseLabel.WAXING_CRESCENT),
    (0.28, MoonPhaseLabel.FIRST_QUARTER),
    (0.47, MoonPhaseLabel.WAXING_GIBBOUS),
    (0.53, MoonPhaseLabel.FULL),
    (0.72, MoonPhaseLabel.WANING_GIBBOUS),
    (0.78, MoonPhaseLabel.LAST_QUARTER),
)

_DETAIL_KEYS: tuple[tuple[float, str], ...] = (
    (0.0, "detail_day"),
    (-6.0, "detail_civil"),
    (-12.0, "detail_nautical"),
    (-18.0, "detail_astronomical"),
)

DAWN_LABELS = frozenset(
    {PhaseLabel.CIVIL_DAWN, PhaseLabel.NAUTICAL_DAWN, PhaseLabel.ASTRONOMICAL_DAWN}
)


def solar_phase_from_altitude(altitude: float, is_rising: bool) -> PhaseLabel:
    """Map sun altitude and trend to a sky phase.

    First matching band wins. Boundaries are exclusive, so an altitude of
    exactly 0.0 is civil dawn/twilight, not day.
    """
    for floor, dawn, twilight in _SOLAR_BANDS:
        if altitude > floor:
            return dawn if is_rising else twilight
    return PhaseLabel.NIGHT


def moon_phase_label(phase: float) -> MoonPhaseLabel:
    """Map a lunar cycle position in [0, 1) to one of eight named phases."""
    if phase <= 0.03 or phase >= 0.97:
        return MoonPhaseLabel.NEW
    for upper, label in _MOON_BINS:
        if phase <= upper:
            return label
    return MoonPhaseLabel.WANING_CRESCENT


def phase_detail_key(altitude: float) -> str:
    """i18n key of the one-line sky description for a sun altitude."""
    for floor, key in _DETAIL_KEYS:
        if altitude > floor:
            return key
    return "detail_night"
