# taphold/env/observations.py
from __future__ import annotations
from typing import Optional, Sequence, Tuple

import numpy as np

from taphold.game.config import (
    PLAYER_CEILING_Y, PLAYER_GROUND_Y, PLAYABLE_HEIGHT
)
from taphold.game.level import LevelConfig, Obstacle, JumpWindow

# Horizontal look-ahead used to normalize distances (world units)
LOOKAHEAD: float = 800.0
# Velocity scale for vy_norm (units/s)
VY_SCALE: float = 900.0

OBS_SIZE = 8


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def _norm_y(y: float) -> float:
    """0 at the ceiling clamp, 1 resting on the ground."""
    span = max(1.0, PLAYER_GROUND_Y - PLAYER_CEILING_Y)
    return _clamp((y - PLAYER_CEILING_Y) / span, 0.0, 1.0)


def _norm_dx(dx: float) -> float:
    return _clamp(dx / LOOKAHEAD, -1.0, 1.0)


def next_index(obstacles: Sequence[Obstacle], player_x: float) -> Optional[int]:
    """Index of the first obstacle whose trailing edge is still ahead of the player."""
    for i, ob in enumerate(obstacles):
        if ob.x + ob.width >= player_x:
            return i
    return None


def _height_norm(ob: Obstacle, mode: str) -> float:
    if mode == "gravity":
        return _clamp(ob.height / PLAYABLE_HEIGHT, 0.0, 1.0)
    return _clamp(ob.height, 0.0, 1.0)


def build_observation(player, level: LevelConfig, player_x: float) -> np.ndarray:
    """
    Returns a fixed (8,) float32 vector:
      [ y_norm, vy_norm, holding,
        next_obstacle_dx, next_obstacle_h,
        window_start_dx, window_end_dx, window_is_hold ]
    - y_norm in [0,1], everything *_dx in [-1,1] (LOOKAHEAD units, relative to player_x)
    - with nothing left ahead: dx = 1.0, h = 0.0, window_is_hold = 0.0
    The window is the one paired with the next obstacle (index-aligned lists).
    """
    y_norm = _norm_y(float(player.y))
    vy_norm = _clamp(float(player.vy) / VY_SCALE, -1.0, 1.0)
    holding = 1.0 if player.holding else 0.0

    idx = next_index(level.obstacles, player_x)
    if idx is None:
        tail: Tuple[float, ...] = (1.0, 0.0, 1.0, 1.0, 0.0)
    else:
        ob = level.obstacles[idx]
        win: JumpWindow = level.jump_windows[idx]
        tail = (
            _norm_dx(ob.x - player_x),
            _height_norm(ob, level.mode),
            _norm_dx(win.start_x - player_x),
            _norm_dx(win.end_x - player_x),
            1.0 if win.kind == "hold" else 0.0,
        )

    return np.asarray((y_norm, vy_norm, holding) + tail, dtype=np.float32)
