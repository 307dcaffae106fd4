# src/tests/test_flappy_env.py
"""
Quick tests for FlappyEnv (Gymnasium environment): API contract, random
rollouts, determinism, and the observation vector.

Usage (from repo root):
  python -m pytest src/tests/test_flappy_env.py
"""
from __future__ import annotations
from typing import List, Tuple

import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from src.env.flappy_env import FlappyEnv
from src.env.observations import build_observation, next_obstacle_pair
from src.game.config import HEIGHT, PLAYER_H, WIDTH
from src.game.entity import Entity


def test_api_check():
    env = FlappyEnv(frame_skip=4)
    try:
        check_env(env.unwrapped, skip_render_check=True)
    finally:
        env.close()


@pytest.mark.parametrize("frame_skip", [1, 4])
def test_smoke_random_rollout(frame_skip):
    env = FlappyEnv(frame_skip=frame_skip)
    env.action_space.seed(0)
    try:
        obs, info = env.reset(seed=123)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["frame"] == 0 and info["seed"] == 123

        for t in range(500):
            obs, r, term, trunc, info = env.step(env.action_space.sample())
            assert isinstance(r, float)
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
        assert term, "random play should end the game well within 500 decisions"
        assert r == -1.0
        assert info["failure"] in ("collision", "out_of_bounds")
    finally:
        env.close()


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv(frame_skip=2)
        traj = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(400)]
    t1 = rollout(7, action_seq)
    t2 = rollout(7, action_seq)

    assert len(t1) == len(t2)
    for (o1, r1, te1, tr1), (o2, r2, te2, tr2) in zip(t1, t2):
        assert np.array_equal(o1, o2)
        assert (r1, te1, tr1) == (r2, te2, tr2)


def test_noop_falls_out_of_bounds():
    env = FlappyEnv(frame_skip=1)
    try:
        env.reset(seed=0)
        steps = 0
        term = False
        while not term:
            _, r, term, trunc, info = env.step(0)
            steps += 1
            assert not trunc
        assert info["failure"] == "out_of_bounds"
        assert steps == 58
    finally:
        env.close()


def test_time_limit_truncates():
    env = FlappyEnv(frame_skip=1, time_limit_seconds=0.1)   # 5 ticks
    try:
        env.reset(seed=0)
        flags = [env.step(0)[3] for _ in range(5)]
        assert flags == [False, False, False, False, True]
    finally:
        env.close()


def test_step_before_reset_fails():
    env = FlappyEnv()
    with pytest.raises(AssertionError):
        env.step(0)


def test_rgb_array_render():
    env = FlappyEnv(render_mode="rgb_array", frame_skip=1)
    try:
        env.reset(seed=3)
        env.step(0)
        frame = env.render()
        assert frame.shape == (HEIGHT, WIDTH, 3)
        assert frame.dtype == np.uint8
    finally:
        env.close()


# -------------------- observations --------------------

def make_pair(x: float, top_h: int):
    return [Entity(50, top_h, x, 0.0), Entity(50, HEIGHT - 120 - top_h, x, float(top_h + 120))]


def test_observation_without_obstacles():
    player = Entity(40, 30, 50.0, 150.0)
    obs = build_observation(player, [])
    assert obs.dtype == np.float32 and obs.shape == (6,)
    assert obs[0] == pytest.approx(150.0 / (HEIGHT - PLAYER_H))
    assert obs[1] == 0.0
    assert obs[2] == 1.0
    assert list(obs[3:]) == [1.0, 0.0, 1.0]


def test_observation_targets_first_pair_ahead():
    player = Entity(40, 30, 50.0, 150.0)
    player.gravity = -0.4
    player.gravity_speed = -25.0
    behind = make_pair(-10.0, 100)       # right edge 40, already passed
    ahead = make_pair(290.0, 200)
    obstacles = behind + ahead

    assert next_obstacle_pair(player, obstacles) == ahead
    obs = build_observation(player, obstacles)
    assert obs[1] == -1.0                # clipped
    assert obs[2] == -1.0
    assert obs[3] == pytest.approx((290.0 - 90.0) / WIDTH)
    assert obs[4] == pytest.approx(200 / HEIGHT)
    assert obs[5] == pytest.approx(320 / HEIGHT)


def test_observation_clamps_out_of_bounds_player():
    player = Entity(40, 30, 50.0, -40.0)
    assert build_observation(player, [])[0] == 0.0
    player.y = HEIGHT + 10
    assert build_observation(player, [])[0] == 1.0
