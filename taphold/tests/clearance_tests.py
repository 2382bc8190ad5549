# taphold/tests/clearance_tests.py
"""
Checks for the clearance-window solver.

Usage (from repo root):
  python -m taphold.tests.clearance_tests
"""

from __future__ import annotations
import sys

import numpy as np

from taphold.game.config import (
    GROUND_Y, FALLBACK_FIRST_OFFSET, FALLBACK_LAST_OFFSET, HOLD_SEARCH_MAX_S
)
from taphold.game.physics import simulate_jump
from taphold.game.clearance import (
    solve_clearance, required_y, hold_candidates, clearing_span
)

IMPULSE, GRAVITY, SPEED = -426.0, 670.0, 192.0


def test_required_height() -> None:
    assert required_y(50) == GROUND_Y - 50 - 30, "Clearance = obstacle top - half player - 10"
    print("✓ Required height ok")


def test_hold_sweep_grid() -> None:
    grid = hold_candidates()
    assert len(grid) == 10
    assert np.allclose(grid, np.arange(1, 11) / 10.0), f"Unexpected sweep {grid}"
    print("✓ Hold sweep grid ok")


def test_tap_window_geometry() -> None:
    """A low spike is a tap; bounds come straight from the tap arc's clearing span."""
    x, w, h = 1000.0, 37.0, 50.0
    clr = solve_clearance(x, w, h, IMPULSE, GRAVITY, SPEED)
    assert not clr.needs_hold and clr.hold_duration_s == 0.0, "Low obstacle should be a tap"

    first, last = clearing_span(simulate_jump(0, IMPULSE, GRAVITY, SPEED), required_y(h))
    assert first is not None and last is not None
    assert abs(clr.latest_x - (x - first)) < 1e-9, "latest = obstacle_x - first offset"
    assert abs(clr.earliest_x - (x + w - last)) < 1e-9, "earliest = obstacle_x + width - last offset"
    assert clr.earliest_x <= clr.latest_x
    print("✓ Tap window ok")


def test_unclearable_obstacle_falls_back() -> None:
    x, w = 1000.0, 60.0
    clr = solve_clearance(x, w, 400.0, IMPULSE, GRAVITY, SPEED)
    assert clr.needs_hold, "Tall obstacle should ask for a hold"
    assert clr.hold_duration_s == HOLD_SEARCH_MAX_S, "Exhausted sweep keeps the longest hold"
    assert clr.latest_x == x - FALLBACK_FIRST_OFFSET
    assert clr.earliest_x == x + w - FALLBACK_LAST_OFFSET
    print("✓ Fallback ok")


def test_wide_obstacle_is_reordered() -> None:
    x, w, h = 1000.0, 2000.0, 40.0
    clr = solve_clearance(x, w, h, IMPULSE, GRAVITY, SPEED)
    first, last = clearing_span(simulate_jump(0, IMPULSE, GRAVITY, SPEED), required_y(h))
    raw_latest, raw_earliest = x - first, x + w - last
    assert raw_earliest > raw_latest, "Setup should produce inverted raw bounds"
    assert clr.earliest_x == raw_latest and clr.latest_x == raw_earliest, "Bounds not reordered"
    print("✓ Reordering ok")


def test_hold_duration_monotone_in_gravity() -> None:
    """Heavier gravity never needs a shorter hold for the same obstacle."""
    prev = -1.0
    needs = []
    for g in np.arange(400.0, 2001.0, 100.0):
        clr = solve_clearance(1000.0, 56.0, 90.0, IMPULSE, float(g), SPEED)
        assert clr.hold_duration_s >= prev, f"Hold shrank at gravity={g}"
        prev = clr.hold_duration_s
        needs.append(clr.needs_hold)
    assert needs[0] is False and needs[-1] is True, "Sweep should cross from tap to hold"
    print("✓ Monotonicity ok")


def test_solver_is_pure() -> None:
    a = solve_clearance(900.0, 50.0, 60.0, IMPULSE, GRAVITY, SPEED)
    b = solve_clearance(900.0, 50.0, 60.0, IMPULSE, GRAVITY, SPEED)
    assert a == b
    print("✓ Purity ok")


def main():
    tests = [
        test_required_height,
        test_hold_sweep_grid,
        test_tap_window_geometry,
        test_unclearable_obstacle_falls_back,
        test_wide_obstacle_is_reordered,
        test_hold_duration_monotone_in_gravity,
        test_solver_is_pure,
    ]
    try:
        for t in tests:
            t()
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All clearance tests passed")


if __name__ == "__main__":
    main()
