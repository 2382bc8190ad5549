# /experiments/sanity_rollout.py
"""
Sanity rollouts for CourseEnv:
- Runs RANDOM and/or WINDOW-FOLLOWING policies over fixed seeds and tiers
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for exact re-runs

Usage examples (from repo root):
  # Both policies, tiers 1..15, 10 default seeds:
  python -m experiments.sanity_rollout --policies both

  # Only the window follower on gravity tiers, custom seeds, save traces:
  python -m experiments.sanity_rollout --policies window --tiers 1,3,5 --seeds 111,222 --save-traces
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from taphold.env.course_env import CourseEnv
from taphold.game.config import LEVEL_COUNT
from taphold.game.level import level_mode


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.randint(0, 2))
    return act

def window_policy_init(mode: str):
    """
    Follows the emitted jump windows:
      - gravity: hold while the player is inside the next window (launches on entry)
      - wave: inside a window, hold for 'hold' windows and release for 'tap' ones;
        outside, drift back toward the middle of the band
    """
    def act(obs: np.ndarray) -> int:
        y_norm, start_dx, end_dx, is_hold = obs[0], obs[5], obs[6], obs[7]
        inside = start_dx <= 0.0 <= end_dx
        if mode == "gravity":
            return 1 if inside else 0
        if inside:
            return 1 if is_hold == 1.0 else 0
        return 1 if y_norm > 0.5 else 0
    return act


# ------------------------ Rollout core ------------------------

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    difficulty: int,
                    seed: int,
                    frame_skip: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, float, bool, Optional[str], float]:
    """Returns: (ep_len, ret_sum, progress, completed, death_cause, hold_ratio)"""
    env = CourseEnv(difficulty=difficulty, frame_skip=frame_skip)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "window":
        policy = window_policy_init(level_mode(difficulty))
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    actions: List[int] = []
    ret_sum = 0.0
    info = {}
    try:
        obs, info = env.reset(seed=seed)
        while True:
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            if term or trunc:
                break
        progress = min(1.0, float(info["world_x"]) / env.level.length)
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"d{difficulty}_{seed}_actions.npy", np.asarray(actions, dtype=np.int8))

    hold_ratio = sum(actions) / max(1, len(actions))
    return len(actions), ret_sum, progress, bool(info.get("completed")), info.get("death_cause"), hold_ratio


def _int_list(text: str, default: List[int]) -> List[int]:
    return [int(s) for s in text.split(",") if s.strip()] if text.strip() else default


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both", choices=["random", "window", "both"])
    ap.add_argument("--seeds", type=str, default="", help="Comma-separated seeds (default 101..110)")
    ap.add_argument("--tiers", type=str, default="", help=f"Comma-separated tiers (default 1..{LEVEL_COUNT})")
    ap.add_argument("--frame-skip", type=int, default=2, help="Sim frames per decision step")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true", help="Save action sequences")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    seeds = _int_list(args.seeds, list(range(101, 111)))
    tiers = _int_list(args.tiers, list(range(1, LEVEL_COUNT + 1)))
    to_run = ["random", "window"] if args.policies == "both" else [args.policies]

    episodes_csv = out_dir / "episodes.csv"
    header = ["policy_name", "difficulty", "mode", "seed", "frame_skip",
              "episode_len_decisions", "return_sum", "progress",
              "completed", "death_cause", "hold_ratio"]

    print(f"Running policies={to_run} on tiers={tiers} x {len(seeds)} seeds (frame_skip={args.frame_skip})")
    for policy_name in to_run:
        for d in tiers:
            done = 0
            for seed in seeds:
                ep_len, ret_sum, progress, completed, cause, h_ratio = run_one_episode(
                    policy_name, d, seed, args.frame_skip, args.save_traces, out_dir
                )
                done += int(completed)
                write_episode_row(episodes_csv, header, [
                    policy_name, d, level_mode(d), seed, args.frame_skip,
                    ep_len, f"{ret_sum:.1f}", f"{progress:.3f}",
                    int(completed), cause or "", f"{h_ratio:.3f}",
                ])
            print(f"[{policy_name}] tier={d:2d} completed {done}/{len(seeds)}")

    print(f"✓ Sanity rollouts complete, summaries in {episodes_csv}")


if __name__ == "__main__":
    main()
