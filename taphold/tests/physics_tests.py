# taphold/tests/physics_tests.py
"""
Checks for the trajectory simulator.

Usage (from repo root):
  python -m taphold.tests.physics_tests
  pytest taphold/tests/physics_tests.py
"""

from __future__ import annotations
import sys

import numpy as np

from taphold.game.config import (
    SIM_DT, SIM_MAX_TIME_S, PLAYER_GROUND_Y, PLAYER_CEILING_Y,
    GROUND_DETECTION_THRESHOLD
)
from taphold.game.physics import simulate_jump, trajectory_array, peak_y

# Tier-1 gravity parameters
IMPULSE, GRAVITY, SPEED = -426.0, 670.0, 192.0


def test_deterministic() -> None:
    """Same inputs => identical sample sequences (no hidden state or randomness)."""
    a = simulate_jump(0, -420, 650, 180, 0)
    b = simulate_jump(0, -420, 650, 180, 0)
    assert len(a) == len(b) and a == b, "simulate_jump is not deterministic"
    print("✓ Determinism ok")


def test_lands_before_safety_bound() -> None:
    pts = simulate_jump(0, IMPULSE, GRAVITY, SPEED)
    assert pts[0].x == 0.0 and pts[0].y == PLAYER_GROUND_Y and pts[0].t == 0.0, "Bad launch sample"
    assert pts[-1].y == PLAYER_GROUND_Y, "Arc did not snap back to the ground"
    assert pts[-1].t < SIM_MAX_TIME_S, "Arc hit the safety bound"
    # analytic flight time 2*|v|/g ~= 1.27s
    assert abs(pts[-1].t - 2 * abs(IMPULSE) / GRAVITY) < 0.1, f"Unexpected flight time {pts[-1].t:.3f}"
    print("✓ Landing ok")


def test_samples_follow_scroll_and_step() -> None:
    arr = trajectory_array(simulate_jump(50, IMPULSE, GRAVITY, SPEED))
    assert arr.shape[1] == 3
    assert np.allclose(np.diff(arr[:, 2]), SIM_DT), "Timestep is not 1/60"
    assert np.allclose(arr[:, 0], 50 + SPEED * arr[:, 2]), "x does not track scroll speed"
    assert np.all(arr[:, 1] <= PLAYER_GROUND_Y), "Body went below the ground"
    print("✓ Sampling ok")


def test_peak_matches_discrete_integration() -> None:
    pts = simulate_jump(0, IMPULSE, GRAVITY, SPEED)
    rise = PLAYER_GROUND_Y - peak_y(pts)
    # continuous v^2/2g is ~135; semi-implicit Euler lands a few units lower
    assert 125.0 < rise < 136.0, f"Unexpected peak rise {rise:.2f}"
    print("✓ Peak ok")


def test_ceiling_clamp() -> None:
    pts = simulate_jump(0, -3000, 650, 180)
    ys = trajectory_array(pts)[:, 1]
    assert ys.min() == PLAYER_CEILING_Y, "Body should be clamped to the ceiling"
    assert pts[-1].y == PLAYER_GROUND_Y, "Body should still land after hitting the ceiling"
    print("✓ Ceiling clamp ok")


def test_zero_gravity_stops_at_safety_bound() -> None:
    pts = simulate_jump(0, -100, 0, 100)
    assert pts[-1].y != PLAYER_GROUND_Y, "Zero gravity should never land"
    assert SIM_MAX_TIME_S - 2 * SIM_DT < pts[-1].t < SIM_MAX_TIME_S + SIM_DT, \
        f"Expected stop near {SIM_MAX_TIME_S}s, got {pts[-1].t:.3f}"
    print("✓ Safety bound ok")


def test_hold_rebounces_on_touchdown() -> None:
    tap = simulate_jump(0, -200, 400, 100)
    held = simulate_jump(0, -200, 400, 100, hold_duration_s=1.5)
    assert tap[-1].t < 1.1, f"Tap arc too long: {tap[-1].t:.3f}"
    assert held[-1].t > 1.5, f"Held arc should bounce past the hold: {held[-1].t:.3f}"
    assert held[-1].y == PLAYER_GROUND_Y, "Held arc should land once the hold is over"
    # re-firing inside the detection band adds at most the band plus one launch step
    slack = GROUND_DETECTION_THRESHOLD + 200 * SIM_DT
    assert peak_y(held) >= peak_y(tap) - slack, \
        f"Held peak {peak_y(held):.2f} climbs past tap peak {peak_y(tap):.2f} by more than {slack:.2f}"
    print("✓ Held bounce ok")


def test_hold_survives_fast_touchdown() -> None:
    # falls ~8 units per step near the ground, wider than the detection band
    held = simulate_jump(0, -510, 950, 200, hold_duration_s=3.0)
    assert held[-1].y == PLAYER_GROUND_Y, f"Arc ended in the air at y={held[-1].y:.2f}"
    assert held[-1].t > 3.0, f"Held arc stopped at {held[-1].t:.3f}s with the hold still active"
    grounded = [p for p in held if p.y == PLAYER_GROUND_Y and 0.0 < p.t < 3.0]
    assert grounded, "Expected at least one touchdown while holding"
    tap = simulate_jump(0, -510, 950, 200)
    slack = GROUND_DETECTION_THRESHOLD + 510 * SIM_DT
    assert peak_y(tap) - slack <= peak_y(held) <= peak_y(tap), "Re-fired jumps should match the tap arc"
    print("✓ Fast touchdown ok")


def main():
    tests = [
        test_deterministic,
        test_lands_before_safety_bound,
        test_samples_follow_scroll_and_step,
        test_peak_matches_discrete_integration,
        test_ceiling_clamp,
        test_zero_gravity_stops_at_safety_bound,
        test_hold_rebounces_on_touchdown,
        test_hold_survives_fast_touchdown,
    ]
    try:
        for t in tests:
            t()
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All physics tests passed")


if __name__ == "__main__":
    main()
