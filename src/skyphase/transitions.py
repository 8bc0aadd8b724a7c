"""Phase transition search: coarse forward stepping followed by bisection.

The search is independent of the ephemeris: it only needs a function mapping
an instant to a label. `next_transition` plugs in the solar phase label.
"""

import logging
from collections.abc import Callable, Hashable, Iterator
from datetime import datetime, timedelta
from typing import TypeVar

from skyphase.clock import truncate_to_millis
from skyphase.models import Coordinate, TransitionEvent
from skyphase.solar import solar_phase_label

logger = logging.getLogger(__name__)

L = TypeVar("L", bound=Hashable)

DEFAULT_HORIZON_MINUTES = 1440
DEFAULT_STEP_MINUTES = 2
DEFAULT_REFINEMENT_ITERATIONS = 24

_ONE_MS = timedelta(milliseconds=1)


def probe_times(start: datetime, horizon: timedelta, step: timedelta) -> Iterator[datetime]:
    """Yield start + k*step for k = 1 .. horizon // step."""
    count = horizon // step
    for k in range(1, count + 1):
        yield start + step * k


def find_bracket(
    label_at: Callable[[datetime], L],
    start: datetime,
    current: L,
    horizon: timedelta,
    step: timedelta,
) -> tuple[datetime, datetime] | None:
    """Return (low, high): the last probe still labelled `current` and the first that is not.

    Returns None when every probe within the horizon keeps the current label.
    """
    low = start
    for probe in probe_times(start, horizon, step):
        if label_at(probe) != current:
            return low, probe
        low = probe
    return None


def bisect_boundary(
    label_at: Callable[[datetime], L],
    low: datetime,
    high: datetime,
    current: L,
    iterations: int,
) -> datetime:
    """Narrow [low, high] around the label change; returns the final `high`.

    Invariant: label_at(low) == current and label_at(high) != current.
    Midpoints fall on whole milliseconds from `low`, and the loop stops early
    once the bracket is a single millisecond wide.
    """
    for _ in range(iterations):
        span = (high - low) // _ONE_MS
        if span <= 1:
            break
        mid = low + _ONE_MS * (span // 2)
        if label_at(mid) == current:
            low = mid
        else:
            high = mid
    return high


def search(
    label_at: Callable[[datetime], L],
    start: datetime,
    horizon: timedelta = timedelta(minutes=DEFAULT_HORIZON_MINUTES),
    step: timedelta = timedelta(minutes=DEFAULT_STEP_MINUTES),
    iterations: int = DEFAULT_REFINEMENT_ITERATIONS,
) -> tuple[L, datetime] | None:
    """Find the first instant after `start` where `label_at` changes.

    Args:
        label_at: Pure function from instant to label.
        start: Search origin; its label is the reference.
        horizon: How far ahead to look.
        step: Coarse probe spacing.
        iterations: Bisection rounds once a change is bracketed.

    Returns:
        (new label, boundary instant), or None if nothing changes within the horizon.
    """
    start = truncate_to_millis(start)
    current = label_at(start)
    bracket = find_bracket(label_at, start, current, horizon, step)
    if bracket is None:
        logger.debug("no change from %s within %s of %s", current, horizon, start)
        return None

    low, high = bracket
    logger.debug("bracketed change from %s between %s and %s", current, low, high)
    boundary = bisect_boundary(label_at, low, high, current, iterations)
    return label_at(boundary), boundary


def next_transition(
    now: datetime,
    coordinate: Coordinate,
    horizon_minutes: int = DEFAULT_HORIZON_MINUTES,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    refinement_iterations: int = DEFAULT_REFINEMENT_ITERATIONS,
) -> TransitionEvent | None:
    """Next solar sky-phase change for an observer, or None within the horizon.

    None is a normal outcome near the poles during polar day or night.
    """
    found = search(
        lambda moment: solar_phase_label(moment, coordinate),
        now,
        horizon=timedelta(minutes=horizon_minutes),
        step=timedelta(minutes=step_minutes),
        iterations=refinement_iterations,
    )
    if found is None:
        return None
    label, at = found
    return TransitionEvent(label=label, at=at)


next_solar_transition = next_transition
