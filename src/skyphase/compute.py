"""Astronomy computation layer: assembles one SkyPhaseReport per refresh."""

import logging
from datetime import datetime

from skyphase.classify import moon_phase_label, solar_phase_from_altitude
from skyphase.lunar import moon_state
from skyphase.models import Coordinate, SkyPhaseReport
from skyphase.solar import solar_state
from skyphase.transitions import (
    DEFAULT_HORIZON_MINUTES,
    DEFAULT_STEP_MINUTES,
    next_transition,
)

logger = logging.getLogger(__name__)


def run(
    moment: datetime,
    coordinate: Coordinate | None,
    horizon_minutes: int = DEFAULT_HORIZON_MINUTES,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> SkyPhaseReport:
    """Top-level entry point: compute sun, moon and next transition for one moment.

    Args:
        moment: Aware datetime to evaluate.
        coordinate: Observer position, or None while the location is unknown.
        horizon_minutes: Transition search horizon.
        step_minutes: Transition search coarse step.

    Returns:
        SkyPhaseReport. With no coordinate, only `moment` is populated and
        `awaiting_location` is True.
    """
    if coordinate is None:
        return SkyPhaseReport(moment=moment, coordinate=None)

    solar = solar_state(moment, coordinate)
    moon = moon_state(moment, coordinate)
    transition = next_transition(
        moment,
        coordinate,
        horizon_minutes=horizon_minutes,
        step_minutes=step_minutes,
    )
    if transition is None:
        logger.info(
            "No phase transition within %d minutes at lat=%.4f lon=%.4f",
            horizon_minutes,
            coordinate.latitude,
            coordinate.longitude,
        )

    return SkyPhaseReport(
        moment=moment,
        coordinate=coordinate,
        solar=solar,
        phase=solar_phase_from_altitude(solar.altitude_deg, solar.is_rising),
        moon=moon,
        moon_phase=moon_phase_label(moon.phase),
        transition=transition,
        remaining=transition.at - moment if transition is not None else None,
    )
