# taphold/game/physics.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .config import (
    SIM_DT, SIM_MAX_TIME_S, PLAYER_GROUND_Y, PLAYER_CEILING_Y,
    GROUND_DETECTION_THRESHOLD
)


@dataclass(frozen=True)
class TrajectoryPoint:
    """One simulated sample: horizontal offset, centre y (screen space, down = +), time."""
    x: float
    y: float
    t: float


def simulate_jump(start_x: float,
                  impulse: float,
                  gravity: float,
                  scroll_speed: float,
                  hold_duration_s: float = 0.0) -> List[TrajectoryPoint]:
    """
    Forward-simulate one jump arc from launch to landing at a fixed 60 Hz step.

    - impulse is signed: negative means upward.
    - While the hold lasts, touching the ground (within GROUND_DETECTION_THRESHOLD)
      on the way down re-applies the impulse, so a held input keeps bouncing.
    - A held body that steps straight onto the ground rests there and re-fires
      on the next step.
    - The body is clamped under the ceiling (no bounce).
    - Stops on landing with no hold active, or after SIM_MAX_TIME_S.
    """
    points: List[TrajectoryPoint] = []

    x = float(start_x)
    y = float(PLAYER_GROUND_Y)
    vy = float(impulse)
    t = 0.0
    holding = hold_duration_s > 0.0
    hold_left = float(hold_duration_s)

    while y < PLAYER_GROUND_Y or vy < 0.0 or holding:
        points.append(TrajectoryPoint(x, y, t))

        vy += gravity * SIM_DT

        if holding and hold_left > 0.0:
            if y >= PLAYER_GROUND_Y - GROUND_DETECTION_THRESHOLD and vy >= 0.0:
                vy = impulse
            hold_left -= SIM_DT
            if hold_left <= 0.0:
                holding = False

        y += vy * SIM_DT
        x += scroll_speed * SIM_DT
        t += SIM_DT

        if y < PLAYER_CEILING_Y:
            y = PLAYER_CEILING_Y
            vy = 0.0

        if y >= PLAYER_GROUND_Y and vy >= 0.0:
            y = PLAYER_GROUND_Y
            if not holding:
                points.append(TrajectoryPoint(x, y, t))
                break
            # stepped past the detection band while held: rest, re-fire next step
            vy = 0.0

        if t > SIM_MAX_TIME_S:
            break

    return points


def trajectory_array(points: Sequence[TrajectoryPoint]) -> np.ndarray:
    """(N, 3) float array with columns x, y, t."""
    if not points:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array([(p.x, p.y, p.t) for p in points], dtype=np.float64)


def peak_y(points: Sequence[TrajectoryPoint]) -> float:
    """Highest point reached (smallest y); the ground when nothing rises above it."""
    if not points:
        return float(PLAYER_GROUND_Y)
    return float(min(PLAYER_GROUND_Y, trajectory_array(points)[:, 1].min()))
