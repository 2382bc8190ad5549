# taphold/game/player.py
from __future__ import annotations
from dataclasses import dataclass

import pygame

from .config import (
    PLAYER_GROUND_Y, PLAYER_CEILING_Y, PLAYER_HITBOX,
    GROUND_DETECTION_THRESHOLD, WAVE_FALL_SPEED
)


@dataclass
class PlayerState:
    """
    Per-frame player physics, owned by whoever runs the game loop.
    - y is the centre of the cube in screen space (down = +)
    - holding mirrors the input (space / pointer) for this frame
    """
    y: float = PLAYER_GROUND_Y
    vy: float = 0.0
    holding: bool = False

    @property
    def grounded(self) -> bool:
        return self.y >= PLAYER_GROUND_Y

    def update_gravity(self, dt: float, gravity: float, jump_force: float):
        """Gravity mode: holding on (or just above) the ground launches a jump."""
        self.vy += gravity * dt

        if self.holding and self.y >= PLAYER_GROUND_Y - GROUND_DETECTION_THRESHOLD:
            self.vy = jump_force

        self.y += self.vy * dt

        if self.y > PLAYER_GROUND_Y:
            self.y = PLAYER_GROUND_Y
            self.vy = 0.0
        if self.y < PLAYER_CEILING_Y:
            self.y = PLAYER_CEILING_Y
            self.vy = 0.0

    def update_wave(self, dt: float, jump_force: float):
        """Wave mode: constant climb while holding, constant fall otherwise, clamped to the band."""
        self.vy = jump_force if self.holding else WAVE_FALL_SPEED
        self.y += self.vy * dt

        if self.y < PLAYER_CEILING_Y:
            self.y = PLAYER_CEILING_Y
        if self.y > PLAYER_GROUND_Y:
            self.y = PLAYER_GROUND_Y

    def hitbox(self, x: float) -> pygame.Rect:
        half = PLAYER_HITBOX // 2
        return pygame.Rect(int(x) - half, int(self.y) - half, PLAYER_HITBOX, PLAYER_HITBOX)
