# taphold/game/level.py
from __future__ import annotations
import random
import logging
from dataclasses import dataclass, field, replace
from typing import List, NamedTuple, Optional, Tuple

import pygame

from .config import (
    GROUND_Y, PLAYABLE_TOP, PLAYABLE_HEIGHT,
    START_SAFE_ZONE, END_SAFE_ZONE,
    WINDOW_BASE_WIDTH, WINDOW_WIDTH_STEP, WINDOW_MIN_WIDTH,
    WINDOW_SHRINK_START, WINDOW_SHRINK_END, WINDOW_CLAMP_WIDTH,
    SPACING_BASE, SPACING_STEP, SPACING_MIN, SPACING_RANGE,
    OBSTACLE_BASE_HEIGHT, OBSTACLE_HEIGHT_STEP, OBSTACLE_HEIGHT_JITTER,
    HOLD_OBSTACLE_EXTRA, HOLD_OBSTACLE_JITTER,
    HOLD_CHANCE_BASE, HOLD_CHANCE_STEP, HOLD_CHANCE_MAX,
    HOLD_MIN_RANDOM_DIFFICULTY, FORCED_HOLD_AFTER, FORCED_HOLD_DEFAULT_S,
    SPIKE_CHANCE, BLOCK_CHANCE, GAP_DEPTH, GAP_WINDOW_LEAD, GAP_WINDOW_TRAIL,
    WAVE_END_SAFE_ZONE, WAVE_SPACING_BASE, WAVE_SPACING_STEP, WAVE_SPACING_MIN,
    WAVE_SPACING_JITTER, WAVE_GAP_BASE, WAVE_GAP_STEP, WAVE_GAP_MIN,
    WAVE_GAP_JITTER, WAVE_GAP_Y_MIN, WAVE_GAP_Y_RANGE, WAVE_HOLD_BELOW,
    WAVE_WINDOW_LEAD, LEVEL_COUNT, PALETTES
)
from .clearance import solve_clearance

log = logging.getLogger(__name__)

OBSTACLE_KINDS = ("spike", "block", "gap", "moving")
WINDOW_KINDS = ("tap", "hold")
MODES = ("gravity", "wave")


@dataclass(frozen=True)
class Obstacle:
    """
    A placed hazard.
    Gravity mode: y == 1 (ground anchored), height in world units.
    Wave mode: y and height are fractions of the playable band, 0 = top.
    """
    x: float
    y: float
    width: float
    height: float
    kind: str  # "spike" | "block" | "gap" | "moving"

    def __post_init__(self):
        if self.kind not in OBSTACLE_KINDS:
            raise ValueError(f"unknown obstacle kind {self.kind!r}")
        if self.width <= 0:
            raise ValueError(f"obstacle width must be > 0, got {self.width}")
        if self.height < 0:
            raise ValueError(f"obstacle height must be >= 0, got {self.height}")


@dataclass(frozen=True)
class JumpWindow:
    """Horizontal range in which the input must begin to clear the paired obstacle."""
    start_x: float
    end_x: float
    kind: str = "tap"  # "tap" | "hold"
    hold_duration_ms: Optional[float] = None

    def __post_init__(self):
        if self.kind not in WINDOW_KINDS:
            raise ValueError(f"unknown window kind {self.kind!r}")
        if self.start_x > self.end_x:
            raise ValueError(f"window start {self.start_x} after end {self.end_x}")
        if (self.kind == "hold") != (self.hold_duration_ms is not None):
            raise ValueError("hold_duration_ms must be set exactly when kind == 'hold'")

    @property
    def width(self) -> float:
        return self.end_x - self.start_x


class Course(NamedTuple):
    obstacles: Tuple[Obstacle, ...]
    jump_windows: Tuple[JumpWindow, ...]


@dataclass(frozen=True)
class LevelConfig:
    id: int
    name: str
    mode: str                 # "gravity" | "wave"
    speed: float
    gravity: float
    jump_force: float         # negative = upward
    bg_color1: int
    bg_color2: int
    obstacle_color: int
    player_color: int
    obstacles: Tuple[Obstacle, ...]
    jump_windows: Tuple[JumpWindow, ...]
    length: float
    music_tempo: int
    music_key: str = "C"
    seed: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        if self.mode not in MODES:
            raise ValueError(f"unknown mode {self.mode!r}")
        if len(self.obstacles) != len(self.jump_windows):
            raise ValueError(
                f"{len(self.obstacles)} obstacles but {len(self.jump_windows)} jump windows"
            )

    @property
    def difficulty(self) -> int:
        return self.id


# -------------------- window helpers --------------------

def target_window_width(difficulty: int) -> float:
    return max(WINDOW_BASE_WIDTH - difficulty * WINDOW_WIDTH_STEP, WINDOW_MIN_WIDTH)


def fit_window(start: float, end: float, target: float) -> Tuple[float, float]:
    """Shrink [start, end] to target width, taking 30% off the early side and 70% off the late side."""
    natural = end - start
    if natural > target:
        excess = natural - target
        start += excess * WINDOW_SHRINK_START
        end -= excess * WINDOW_SHRINK_END
    if end < start:
        end = start + WINDOW_CLAMP_WIDTH
    return start, end


def gap_window(gap_x: float) -> JumpWindow:
    """Gaps are floor voids: jump shortly before the pit, no solver involved."""
    return JumpWindow(gap_x - GAP_WINDOW_LEAD, gap_x - GAP_WINDOW_TRAIL, "tap")


# -------------------- generator --------------------

class CourseGen:
    """
    Builds obstacle courses and their index-aligned jump windows.
    Owns its random source; seed=None draws a fresh seed (kept on .seed).
    """
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def generate(self,
                 difficulty: int,
                 course_length: float,
                 scroll_speed: float,
                 impulse: float,
                 gravity: float) -> Course:
        """Gravity-mode course: every obstacle's window comes from the clearance solver (gaps excepted)."""
        _check_inputs(difficulty, course_length)

        target = target_window_width(difficulty)
        min_spacing = max(SPACING_BASE - difficulty * SPACING_STEP, SPACING_MIN)
        max_spacing = min_spacing + SPACING_RANGE
        base_h = OBSTACLE_BASE_HEIGHT + difficulty * OBSTACLE_HEIGHT_STEP
        hold_chance = min(HOLD_CHANCE_BASE + difficulty * HOLD_CHANCE_STEP, HOLD_CHANCE_MAX)

        obstacles: List[Obstacle] = []
        windows: List[JumpWindow] = []
        had_hold = False

        x = START_SAFE_ZONE
        while x < course_length - END_SAFE_ZONE:
            r = self.rng.random()
            forced = difficulty == 1 and not had_hold and len(obstacles) >= FORCED_HOLD_AFTER
            hold_obstacle = forced or (r < hold_chance and difficulty >= HOLD_MIN_RANDOM_DIFFICULTY)

            if hold_obstacle:
                height = base_h + HOLD_OBSTACLE_EXTRA + self.rng.random() * HOLD_OBSTACLE_JITTER
                width = 50 + difficulty * 2
                kind = "block"
            elif r < SPIKE_CHANCE:
                height = base_h + self.rng.random() * OBSTACLE_HEIGHT_JITTER
                width = 35 + difficulty * 2
                kind = "spike"
            elif r < BLOCK_CHANCE:
                height = base_h - 10 + self.rng.random() * OBSTACLE_HEIGHT_JITTER
                width = 50 + difficulty * 3
                kind = "block"
            else:
                height = GAP_DEPTH
                width = 70 + difficulty * 4
                kind = "gap"

            obstacles.append(Obstacle(x, 1.0, float(width), float(height), kind))

            if kind == "gap":
                windows.append(gap_window(x))
            else:
                clr = solve_clearance(x, width, height, impulse, gravity, scroll_speed)
                start, end = fit_window(clr.earliest_x, clr.latest_x, target)
                if hold_obstacle or clr.needs_hold:
                    hold_s = clr.hold_duration_s if clr.needs_hold else FORCED_HOLD_DEFAULT_S
                    windows.append(JumpWindow(start, end, "hold", hold_s * 1000.0))
                    had_hold = True
                else:
                    windows.append(JumpWindow(start, end, "tap"))

            x += width + self.rng.uniform(min_spacing, max_spacing)

        log.debug("gravity course d=%d seed=%s: %d obstacles", difficulty, self.seed, len(obstacles))
        return Course(tuple(obstacles), tuple(windows))

    def generate_wave(self,
                      difficulty: int,
                      course_length: float,
                      scroll_speed: float) -> Course:
        """
        Wave-mode course: top/bottom block pairs around a random gap.
        One heuristic window per gap, repeated for both blocks of the pair;
        gaps high in the band ask for a hold (fly up) for the whole window.
        """
        _check_inputs(difficulty, course_length)

        spacing = max(WAVE_SPACING_BASE - difficulty * WAVE_SPACING_STEP, WAVE_SPACING_MIN)
        gap_size = max(WAVE_GAP_BASE - difficulty * WAVE_GAP_STEP, WAVE_GAP_MIN)
        width = float(55 + difficulty * 2)

        obstacles: List[Obstacle] = []
        windows: List[JumpWindow] = []

        x = START_SAFE_ZONE
        while x < course_length - WAVE_END_SAFE_ZONE:
            gap_y = WAVE_GAP_Y_MIN + self.rng.random() * WAVE_GAP_Y_RANGE
            size = gap_size + self.rng.random() * WAVE_GAP_JITTER
            top_h = max(gap_y - size / 2, 0.0)   # wide gaps near the top can swallow the block
            bot_y = min(gap_y + size / 2, 1.0)

            start, end = x - WAVE_WINDOW_LEAD, x + width
            if gap_y < WAVE_HOLD_BELOW:
                hold_ms = (end - start) / scroll_speed * 1000.0 if scroll_speed > 0 else 0.0
                window = JumpWindow(start, end, "hold", hold_ms)
            else:
                window = JumpWindow(start, end, "tap")

            obstacles.append(Obstacle(x, 0.0, width, top_h, "block"))
            obstacles.append(Obstacle(x, bot_y, width, 1.0 - bot_y, "block"))
            windows.extend((window, window))

            x += spacing + self.rng.random() * WAVE_SPACING_JITTER

        log.debug("wave course d=%d seed=%s: %d obstacles", difficulty, self.seed, len(obstacles))
        return Course(tuple(obstacles), tuple(windows))

    def generate_for(self, mode: str, difficulty: int, course_length: float,
                     scroll_speed: float, impulse: float, gravity: float) -> Course:
        if mode == "gravity":
            return self.generate(difficulty, course_length, scroll_speed, impulse, gravity)
        if mode == "wave":
            return self.generate_wave(difficulty, course_length, scroll_speed)
        raise ValueError(f"unknown mode {mode!r}")


def _check_inputs(difficulty: int, course_length: float) -> None:
    if difficulty < 1:
        raise ValueError(f"difficulty must be >= 1, got {difficulty}")
    if course_length <= 0:
        raise ValueError(f"course_length must be > 0, got {course_length}")


# -------------------- level table --------------------

def level_mode(difficulty: int) -> str:
    """Odd tiers run in gravity mode, even tiers in wave mode."""
    return "gravity" if difficulty % 2 == 1 else "wave"


def build_level(difficulty: int, seed: Optional[int] = None) -> LevelConfig:
    if not 1 <= difficulty <= LEVEL_COUNT:
        raise ValueError(f"difficulty must be in 1..{LEVEL_COUNT}, got {difficulty}")

    mode = level_mode(difficulty)
    length = 3000.0 + difficulty * 400
    speed = 180.0 + difficulty * 12
    gravity = 650.0 + difficulty * 20 if mode == "gravity" else 0.0
    jump_force = (-420.0 if mode == "gravity" else -200.0) - difficulty * 6
    bg1, bg2, obstacle_color, player_color = PALETTES[difficulty - 1]

    gen = CourseGen(seed)
    course = gen.generate_for(mode, difficulty, length, speed, jump_force, gravity)

    return LevelConfig(
        id=difficulty,
        name=f"Level {difficulty}",
        mode=mode,
        speed=speed,
        gravity=gravity,
        jump_force=jump_force,
        bg_color1=bg1,
        bg_color2=bg2,
        obstacle_color=obstacle_color,
        player_color=player_color,
        obstacles=course.obstacles,
        jump_windows=course.jump_windows,
        length=length,
        music_tempo=110 + difficulty * 5,
        music_key="C",
        seed=gen.seed,
    )


def build_levels(seed: Optional[int] = None) -> List[LevelConfig]:
    """All tiers, generated once at startup. A seed makes the whole table reproducible."""
    master = random.Random(seed)
    seeds = [master.randrange(0, 2**32 - 1) if seed is not None else None
             for _ in range(LEVEL_COUNT)]
    return [build_level(d, s) for d, s in zip(range(1, LEVEL_COUNT + 1), seeds)]


def regenerate(level: LevelConfig, seed: Optional[int] = None) -> LevelConfig:
    """Fresh obstacles for a level being (re)entered; motion, palette and music stay."""
    gen = CourseGen(seed)
    course = gen.generate_for(level.mode, level.difficulty, level.length,
                              level.speed, level.jump_force, level.gravity)
    return replace(level, obstacles=course.obstacles,
                   jump_windows=course.jump_windows, seed=gen.seed)


# -------------------- collision geometry --------------------

def obstacle_rect(obstacle: Obstacle, mode: str) -> pygame.Rect:
    """Screen-space bounding box, following the per-mode y/height convention."""
    if mode == "gravity":
        top = GROUND_Y - obstacle.height
        height = obstacle.height
    else:
        top = PLAYABLE_TOP + obstacle.y * PLAYABLE_HEIGHT
        height = obstacle.height * PLAYABLE_HEIGHT
    return pygame.Rect(int(obstacle.x), int(top), int(round(obstacle.width)), int(round(height)))


def spike_triangle(obstacle: Obstacle) -> Tuple[Tuple[float, float], ...]:
    """Ground spike as (left base, apex, right base)."""
    top = GROUND_Y - obstacle.height
    return ((obstacle.x, GROUND_Y),
            (obstacle.x + obstacle.width / 2, top),
            (obstacle.x + obstacle.width, GROUND_Y))


def _point_in_triangle(p, a, b, c) -> bool:
    """Same-side test on all three edges."""
    def side(u, v, w):
        return (v[0] - u[0]) * (w[1] - u[1]) - (v[1] - u[1]) * (w[0] - u[0])
    d1, d2, d3 = side(a, b, p), side(b, c, p), side(c, a, p)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def _segments_cross(p1, p2, p3, p4) -> bool:
    rx, ry = p2[0] - p1[0], p2[1] - p1[1]
    sx, sy = p4[0] - p3[0], p4[1] - p3[1]
    denom = rx * sy - ry * sx
    if abs(denom) < 1e-9:
        return False
    qx, qy = p3[0] - p1[0], p3[1] - p1[1]
    t = (qx * sy - qy * sx) / denom
    u = (qx * ry - qy * rx) / denom
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


def rect_intersects_triangle(r: pygame.Rect, tri) -> bool:
    """Rect corner inside the triangle, triangle vertex inside the rect, or crossing edges."""
    a, b, c = tri
    corners = [(r.left, r.top), (r.right, r.top), (r.right, r.bottom), (r.left, r.bottom)]
    if any(_point_in_triangle(p, a, b, c) for p in corners):
        return True
    if r.collidepoint(a) or r.collidepoint(b) or r.collidepoint(c):
        return True
    rect_edges = list(zip(corners, corners[1:] + corners[:1]))
    tri_edges = [(a, b), (b, c), (c, a)]
    return any(_segments_cross(e[0], e[1], f[0], f[1]) for e in tri_edges for f in rect_edges)
