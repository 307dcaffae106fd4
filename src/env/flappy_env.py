# src/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS
from src.game.driver import ManualDriver
from src.game.render import NullSurface, PygameSurface, placeholder_assets
from src.game.simulation import Simulation, GameStatus
from src.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Gymnasium environment (vector observations).
    - One simulation tick = 20 ms of game time.
    - Agent acts every `frame_skip` ticks (default 4).
    - Actions: 0 = release, 1 = hold ascend.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)
        # [y_norm, gravity_speed_norm, grav_sign, dx_next, gap_top, gap_bottom]
        low = np.array([0.0, -1.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, shape=(OBS_SIZE,), dtype=np.float32)

        # Rendering: draw straight into an offscreen surface, blit to the window in render()
        self.screen = None
        self.clock = None
        self.canvas: Optional[pygame.Surface] = None
        if render_mode is not None:
            pygame.init()
            self.canvas = pygame.Surface((WIDTH, HEIGHT))
            surface = PygameSurface(self.canvas)
        else:
            surface = NullSurface()

        self.driver = ManualDriver()
        self.sim = Simulation(surface, placeholder_assets(), self.driver)
        self.timestep = 0
        self._has_reset = False
        self._level_rng = np.random.default_rng()

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)
        # Explicit seed -> reproducible obstacles; later unseeded resets continue that sequence
        if seed is not None:
            self._level_rng = np.random.default_rng(seed)
            level_seed = int(seed)
        else:
            level_seed = int(self._level_rng.integers(0, 2**31 - 1))
        self.sim.start(seed=level_seed)
        self.timestep = 0
        self._has_reset = True

        obs = self._get_obs()
        return obs, self._info()

    def step(self, action):
        assert self._has_reset, "Call reset() before step()"
        assert self.action_space.contains(action), f"Invalid action {action}"

        if int(action) == 1:
            self.sim.ascend_begin()
        else:
            self.sim.ascend_end()

        status = self.sim.state.status
        for _ in range(self.frame_skip):
            status = self.sim.tick()
            if status is not GameStatus.RUNNING:
                break

        terminated = status is GameStatus.GAME_OVER
        reward = -1.0 if terminated else 1.0

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        obs = self._get_obs()
        info = self._info()
        info["timestep"] = self.timestep

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        st = self.sim.state
        return build_observation(st.player, st.obstacles)

    def _info(self) -> Dict[str, Any]:
        st = self.sim.state
        return {
            "frame": st.frame,
            "score": st.score,
            "seed": st.seed,
            "failure": st.failure,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            arr = pygame.surfarray.array3d(self.canvas)  # (W, H, 3)
            return np.transpose(arr, (1, 0, 2))

        if self.screen is None:
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption("Flappy - Gym Env")
            self.clock = pygame.time.Clock()

        # Pump the event queue so the OS doesn't think we're hung
        pygame.event.pump()
        self.screen.blit(self.canvas, (0, 0))
        pygame.display.flip()
        self.clock.tick(self.metadata["render_fps"])
        return None

    def close(self):
        self.driver.cancel()
        if self.screen is not None:
            pygame.display.quit()
            self.screen = None
            self.clock = None
        if self.canvas is not None:
            pygame.quit()
            self.canvas = None
