# taphold/game/clearance.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import (
    GROUND_Y, PLAYER_SIZE, CLEARANCE_MARGIN,
    HOLD_SEARCH_STEP_S, HOLD_SEARCH_MAX_S,
    FALLBACK_FIRST_OFFSET, FALLBACK_LAST_OFFSET
)
from .physics import TrajectoryPoint, simulate_jump, trajectory_array, peak_y

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Clearance:
    """Range of launch positions that clear one obstacle, and the input it needs."""
    earliest_x: float
    latest_x: float
    needs_hold: bool
    hold_duration_s: float


def required_y(obstacle_height: float) -> float:
    """Largest centre y that still passes over an obstacle of this height."""
    obstacle_top = GROUND_Y - obstacle_height
    return obstacle_top - (PLAYER_SIZE / 2 + CLEARANCE_MARGIN)


def hold_candidates() -> np.ndarray:
    """Hold durations tried in order: 0.1s .. 1.0s inclusive."""
    n = int(round(HOLD_SEARCH_MAX_S / HOLD_SEARCH_STEP_S))
    return np.round(np.arange(1, n + 1) * HOLD_SEARCH_STEP_S, 6)


def clearing_span(points: Sequence[TrajectoryPoint],
                  needed_y: float) -> Tuple[Optional[float], Optional[float]]:
    """First and last horizontal offsets at which the body is at or above needed_y."""
    arr = trajectory_array(points)
    if arr.shape[0] == 0:
        return None, None
    above = np.flatnonzero(arr[:, 1] <= needed_y)
    if above.size == 0:
        return None, None
    return float(arr[above[0], 0]), float(arr[above[-1], 0])


def solve_clearance(obstacle_x: float,
                    obstacle_width: float,
                    obstacle_height: float,
                    impulse: float,
                    gravity: float,
                    scroll_speed: float) -> Clearance:
    """
    Invert the simulator for one obstacle.

    A tap arc launched at offset 0 is checked first; if it never gets high enough,
    hold durations are swept shortest first and the first one that clears wins.
    Degenerate cases never fail: missing offsets fall back to 50/150, an exhausted
    sweep keeps the longest tried hold, and inverted bounds are reordered.
    """
    needed = required_y(obstacle_height)

    tap = simulate_jump(0.0, impulse, gravity, scroll_speed, 0.0)
    first, last = clearing_span(tap, needed)

    needs_hold = False
    hold_s = 0.0

    if peak_y(tap) > needed or first is None:
        needs_hold = True
        candidates = hold_candidates()
        hold_s = float(candidates[-1])
        for hd in candidates:
            held = simulate_jump(0.0, impulse, gravity, scroll_speed, float(hd))
            if peak_y(held) <= needed:
                hold_s = float(hd)
                first, last = clearing_span(held, needed)
                break
        else:
            log.debug("no hold up to %.1fs clears height %.1f (gravity=%.1f, impulse=%.1f)",
                      hold_s, obstacle_height, gravity, impulse)

    if first is None or last is None:
        log.debug("no qualifying offsets for height %.1f, using %.0f/%.0f", obstacle_height,
                  FALLBACK_FIRST_OFFSET, FALLBACK_LAST_OFFSET)
    if first is None:
        first = FALLBACK_FIRST_OFFSET
    if last is None:
        last = FALLBACK_LAST_OFFSET

    latest = obstacle_x - first
    earliest = obstacle_x + obstacle_width - last

    return Clearance(
        earliest_x=min(earliest, latest),
        latest_x=max(earliest, latest),
        needs_hold=needs_hold,
        hold_duration_s=hold_s,
    )
