# /experiments/course_report.py
"""
Course report: prints every jump window next to its obstacle for one tier,
flags windows that sit far from their obstacle, and checks list alignment.

Usage examples (from repo root):
  python -m experiments.course_report --difficulty 1 --seed 42
  python -m experiments.course_report --all --seed 7        # alignment summary, all tiers
  python -m experiments.course_report --difficulty 3 -v     # with generator debug logs
"""

from __future__ import annotations
import argparse
import logging
from typing import Optional

from taphold.game.config import LEVEL_COUNT
from taphold.game.level import LevelConfig, build_level, build_levels

FAR_FROM_OBSTACLE = 200.0


def describe(level: LevelConfig) -> int:
    """Prints the mapping for one level; returns the number of warnings."""
    obstacles, windows = level.obstacles, level.jump_windows
    print(f"{level.name} ({level.mode} mode, seed={level.seed}): "
          f"{len(obstacles)} obstacles, {len(windows)} jump windows\n")

    warnings = 0
    for i, (ob, jw) in enumerate(zip(obstacles, windows), start=1):
        hold = f" {jw.hold_duration_ms:.0f}ms" if jw.kind == "hold" else ""
        print(f"Jump Window {i}:")
        print(f"  Window:   {jw.start_x:.0f} -> {jw.end_x:.0f} ({jw.kind}{hold})")
        print(f"  Obstacle: x={ob.x:.0f}, width={ob.width:.0f}, type={ob.kind}, height={ob.height:.2f}")

        distance = abs((ob.x + ob.width / 2) - (jw.start_x + jw.end_x) / 2)
        if distance > FAR_FROM_OBSTACLE:
            warnings += 1
            print(f"  ⚠️  WARNING: obstacle is {distance:.0f} units away from the window centre")
        if ob.kind == "gap":
            print("  ℹ️  gap: pit in the floor, window is a fixed lead-in")

    if len(obstacles) != len(windows):
        warnings += 1
        print(f"\n⚠️  MISMATCH! Difference: {abs(len(windows) - len(obstacles))}")
    return warnings


def summary(seed: Optional[int]) -> None:
    for level in build_levels(seed):
        n_obs, n_win = len(level.obstacles), len(level.jump_windows)
        holds = sum(1 for w in level.jump_windows if w.kind == "hold")
        mark = "✓ Match!" if n_obs == n_win else f"⚠️  MISMATCH ({abs(n_obs - n_win)})"
        print(f"{level.name:>9} [{level.mode:7}] obstacles={n_obs:3d} windows={n_win:3d} holds={holds:3d}  {mark}")


def main():
    ap = argparse.ArgumentParser(description="Inspect generated courses.")
    ap.add_argument("--difficulty", type=int, default=1, help=f"Tier 1..{LEVEL_COUNT}")
    ap.add_argument("--seed", type=int, default=None, help="Generator seed (omit for random)")
    ap.add_argument("--all", action="store_true", help="Alignment summary for every tier")
    ap.add_argument("-v", "--verbose", action="store_true", help="Show generator debug logs")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.all:
        summary(args.seed)
        return

    warnings = describe(build_level(args.difficulty, args.seed))
    print(f"\n{'✓ No warnings' if warnings == 0 else f'{warnings} warning(s)'}")


if __name__ == "__main__":
    main()
