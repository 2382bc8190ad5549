# taphold/tests/obs_unit.py
import numpy as np
from dataclasses import replace

from taphold.env.observations import build_observation, LOOKAHEAD, OBS_SIZE
from taphold.game.config import PLAYER_GROUND_Y, PLAYER_CEILING_Y
from taphold.game.level import Obstacle, JumpWindow, build_level


class DummyPlayer:
    def __init__(self, y, vy=0.0, holding=False):
        self.y = y        # centre-based
        self.vy = vy
        self.holding = holding


def make_level():
    base = build_level(1, seed=0)
    obstacles = (
        Obstacle(600.0, 1.0, 40.0, 60.0, "spike"),
        Obstacle(1400.0, 1.0, 60.0, 90.0, "block"),
    )
    windows = (
        JumpWindow(450.0, 550.0, "tap"),
        JumpWindow(1200.0, 1300.0, "hold", 200.0),
    )
    return replace(base, obstacles=obstacles, jump_windows=windows)


def test_observation_layout():
    level = make_level()
    player = DummyPlayer(y=PLAYER_GROUND_Y, vy=0.0)

    obs = build_observation(player, level, player_x=200.0)
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,), "Shape/dtype mismatch"

    assert obs[0] == 1.0, "Resting on the ground should read y_norm = 1"
    assert obs[1] == 0.0 and obs[2] == 0.0
    assert np.isclose(obs[3], (600.0 - 200.0) / LOOKAHEAD), "next obstacle dx"
    assert np.isclose(obs[5], (450.0 - 200.0) / LOOKAHEAD), "window start dx"
    assert np.isclose(obs[6], (550.0 - 200.0) / LOOKAHEAD), "window end dx"
    assert obs[7] == 0.0, "First window is a tap"
    print("✓ layout ok")


def test_observation_tracks_next_pair():
    level = make_level()
    player = DummyPlayer(y=PLAYER_CEILING_Y, vy=-5000.0, holding=True)

    # past the spike's trailing edge -> the block and its hold window are next
    obs = build_observation(player, level, player_x=700.0)
    assert obs[0] == 0.0 and obs[1] == -1.0 and obs[2] == 1.0
    assert np.isclose(obs[3], 700.0 / LOOKAHEAD)
    assert obs[7] == 1.0, "Second window is a hold"

    # nothing ahead -> sentinels
    obs = build_observation(player, level, player_x=5000.0)
    assert list(obs[3:]) == [1.0, 0.0, 1.0, 1.0, 0.0], "Expected end-of-course sentinels"
    print("✓ pairing ok")


def main():
    test_observation_layout()
    test_observation_tracks_next_pair()
    print("✓ observation unit sanity passed")


if __name__ == "__main__":
    main()
