"""Shared types passed between the time, compute and render layers."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """Observer position. Range checks belong to the provider, not the engine."""

    latitude: float  # Latitude (decimal degrees, north positive)
    longitude: float  # Longitude (decimal degrees, east positive)


@dataclass(frozen=True)
class SolarState:
    """Sun altitude at a moment plus the rising/falling trend."""

    altitude_deg: float
    is_rising: bool  # altitude 10 minutes later is strictly greater


class PhaseLabel(Enum):
    """Solar sky phase. Value is the English display label."""

    DAY = "Day"
    CIVIL_DAWN = "Civil dawn"
    CIVIL_TWILIGHT = "Civil twilight"
    NAUTICAL_DAWN = "Nautical dawn"
    NAUTICAL_TWILIGHT = "Nautical twilight"
    ASTRONOMICAL_DAWN = "Astronomical dawn"
    ASTRONOMICAL_TWILIGHT = "Astronomical twilight"
    NIGHT = "Night"


@dataclass(frozen=True)
class MoonState:
    """Moon altitude and illumination at a moment."""

    altitude_deg: float
    illuminated_fraction: float  # 0..1
    phase: float  # cycle position in [0, 1): 0=new, 0.5=full
    distance_km: float  # geocentric distance
    waxing: bool


class MoonPhaseLabel(Enum):
    """Eight-bin lunar phase. Value is the English display label."""

    NEW = "New moon"
    WAXING_CRESCENT = "Waxing crescent"
    FIRST_QUARTER = "First quarter"
    WAXING_GIBBOUS = "Waxing gibbous"
    FULL = "Full moon"
    WANING_GIBBOUS = "Waning gibbous"
    LAST_QUARTER = "Last quarter"
    WANING_CRESCENT = "Waning crescent"


@dataclass(frozen=True)
class TransitionEvent:
    """Next solar phase boundary. Derived fresh on every refresh."""

    label: PhaseLabel  # Phase entered at `at`
    at: datetime  # UTC-aware instant of the boundary


class LocationStatus(Enum):
    """State of the coordinate provider."""

    PENDING = "pending"
    LOCKED = "locked"
    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class LocationResult:
    """Outcome of one coordinate lookup. coordinate is set only when LOCKED."""

    status: LocationStatus
    coordinate: Coordinate | None = None


@dataclass(frozen=True)
class SkyPhaseReport:
    """The sole input to renderers. Fully computed state for one refresh.

    When `coordinate` is None every derived field is None and the report
    represents the "awaiting location" state.
    """

    moment: datetime
    coordinate: Coordinate | None
    solar: SolarState | None = None
    phase: PhaseLabel | None = None
    moon: MoonState | None = None
    moon_phase: MoonPhaseLabel | None = None
    transition: TransitionEvent | None = None
    remaining: timedelta | None = None  # until transition.at

    @property
    def awaiting_location(self) -> bool:
        return self.coordinate is None
