# taphold/env/course_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym

from taphold.game.config import FPS, PLAYER_X_OFFSET, PLAYER_CEILING_Y
from taphold.game.level import (
    LevelConfig, build_level, regenerate, obstacle_rect, spike_triangle,
    rect_intersects_triangle
)
from taphold.game.player import PlayerState
from taphold.env.observations import build_observation, OBS_SIZE


class CourseEnv(gym.Env):
    """
    Headless runner over one generated course (vector observations).
    - Simulation at 60 Hz (internal), matching the trajectory simulator.
    - Agent acts every `frame_skip` frames: 0 = release, 1 = hold.
    - Every reset regenerates the course; a seed makes the layout reproducible.
    """
    metadata = {"render_modes": [], "render_fps": FPS}

    def __init__(self,
                 difficulty: int = 1,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = None,
                 level: Optional[LevelConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.difficulty = int(level.id if level is not None else difficulty)
        self.frame_skip = int(frame_skip)
        self._template = level

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)

        # [y_norm, vy_norm, holding, obs_dx, obs_h, win_start_dx, win_end_dx, win_hold]
        low = np.array([0.0, -1.0, 0.0, -1.0, 0.0, -1.0, -1.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.level: Optional[LevelConfig] = None
        self.player: Optional[PlayerState] = None
        self.world_x: float = 0.0
        self.alive: bool = True
        self.completed: bool = False
        self.timestep: int = 0
        self.death_cause: Optional[str] = None   # "spike" | "block" | "gap" | None

    @property
    def player_x(self) -> float:
        return self.world_x + PLAYER_X_OFFSET

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        level_seed = int(seed) if seed is not None else None
        if self._template is not None:
            self.level = regenerate(self._template, level_seed)
        else:
            self.level = build_level(self.difficulty, level_seed)

        self.player = PlayerState()
        if self.level.mode == "wave":
            self.player.y = (self.player.y + PLAYER_CEILING_Y) / 2   # start mid-band
        self.world_x = 0.0
        self.alive = True
        self.completed = False
        self.timestep = 0
        self.death_cause = None

        return self._get_obs(), {"seed": self.level.seed, "world_x": self.world_x}

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.level is not None and self.player is not None

        self.player.holding = bool(action == 1)

        for _ in range(self.frame_skip):
            self.world_x += self.level.speed * self.dt
            if self.level.mode == "gravity":
                self.player.update_gravity(self.dt, self.level.gravity, self.level.jump_force)
            else:
                self.player.update_wave(self.dt, self.level.jump_force)

            cause = self._collision()
            if cause is not None:
                self.alive = False
                self.death_cause = cause
                break
            if self.world_x > self.level.length:
                self.completed = True
                break

        reward = 1.0 if self.alive else -1.0

        self.timestep += 1
        terminated = (not self.alive) or self.completed
        truncated = False
        if self.time_limit_decisions is not None and self.timestep >= self.time_limit_decisions:
            truncated = True

        info = {
            "world_x": self.world_x,
            "timestep": self.timestep,
            "seed": self.level.seed,
            "death_cause": self.death_cause,
            "completed": self.completed,
        }
        return self._get_obs(), reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.level is not None and self.player is not None
        return build_observation(self.player, self.level, self.player_x)

    def _collision(self) -> Optional[str]:
        """First obstacle kind the player hits this frame, if any."""
        assert self.level is not None and self.player is not None
        px = self.player_x
        box = self.player.hitbox(px)
        for ob in self.level.obstacles:
            if ob.x > px + box.width:
                break
            if ob.x + ob.width < px - box.width:
                continue
            if ob.kind == "gap":
                if self.level.mode == "gravity" and ob.x < px < ob.x + ob.width and self.player.grounded:
                    return "gap"
                continue
            rect = obstacle_rect(ob, self.level.mode)
            if not rect.colliderect(box):
                continue
            if ob.kind == "spike" and self.level.mode == "gravity":
                if rect_intersects_triangle(box, spike_triangle(ob)):
                    return "spike"
                continue
            return ob.kind
        return None
