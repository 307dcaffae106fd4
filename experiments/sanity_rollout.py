# /experiments/sanity_rollout.py
"""
Sanity rollouts for FlappyEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Appends one row per episode to an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for exact replay

Usage examples (from repo root):
  # Both policies over 20 default seeds, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic, custom seeds, keep the action traces:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --save-traces
"""

from __future__ import annotations
import argparse
import csv
import logging
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from src.env.flappy_env import FlappyEnv
from src.game.config import HEIGHT, PLAYER_H, FPS
from src.game.log import setup_logging

log = logging.getLogger("src.experiments.sanity_rollout")


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, hold_prob: float = 0.3):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < hold_prob)
    return act

def tiny_heuristic_policy_init(margin_px: float = 10.0):
    """
    Hold ascend while the player's centre sits below the middle of the next
    gap, unless it is already rising fast.
    """
    def act(obs: np.ndarray) -> int:
        center_y = float(obs[0]) * (HEIGHT - PLAYER_H) + PLAYER_H / 2
        gap_mid = (float(obs[4]) + float(obs[5])) / 2 * HEIGHT
        rising_fast = obs[1] < -0.2
        return 1 if (center_y > gap_mid + margin_px and not rising_fast) else 0
    return act


def make_policy(policy_name: str, seed: int):
    if policy_name == "random":
        # Action RNG seed is a function of the level seed for determinism
        return random_policy_init(10_000 + seed)
    if policy_name == "heuristic":
        return tiny_heuristic_policy_init()
    raise ValueError(f"Unknown policy {policy_name!r}")


# ------------------------ Rollout core ------------------------

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    trace_dir: Optional[Path] = None) -> Tuple[int, float, int, bool, bool, Optional[str]]:
    """
    Returns: (ep_len, ret_sum, score, terminated, truncated, failure)
    Writes the action trace to `trace_dir` when given.
    """
    env = FlappyEnv(frame_skip=frame_skip)
    policy = make_policy(policy_name, seed)

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))

    return ep_len, ret_sum, int(info.get("score", 0)), bool(term), bool(trunc), info.get("failure")


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim ticks per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true",
                    help="Save action sequences for replay")
    ap.add_argument("--log-level", type=str, default="info")
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "policy_name", "seed",
        "frame_skip", "tick_hz", "decision_hz",
        "episode_len_decisions", "return_sum", "score",
        "terminated", "truncated", "failure",
    ]
    decision_hz = FPS / max(1, args.frame_skip)

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]
    log.info("running policies=%s on %d seeds (frame_skip=%d, decision_hz=%.1f)",
             to_run, len(seeds), args.frame_skip, decision_hz)

    for policy_name in to_run:
        trace_dir = out_dir / "traces" / policy_name if args.save_traces else None
        for seed in seeds:
            ep_len, ret_sum, score, terminated, truncated, failure = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                trace_dir=trace_dir,
            )
            write_episode_row(episodes_csv, header, [
                "FlappyEnv", policy_name, seed,
                args.frame_skip, FPS, decision_hz,
                ep_len, f"{ret_sum:.1f}", score,
                int(terminated), int(truncated), (failure or ""),
            ])
            log.info("[%s] seed=%d len=%d score=%d ret=%.1f term=%s trunc=%s cause=%s",
                     policy_name, seed, ep_len, score, ret_sum, terminated, truncated, failure)

    log.info("rollouts written to %s", episodes_csv)


if __name__ == "__main__":
    main()
