# src/game/simulation.py
from __future__ import annotations
import enum
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from .config import (
    WIDTH, HEIGHT,
    PLAYER_X, PLAYER_Y, PLAYER_W, PLAYER_H,
    GRAVITY_BASE, GRAVITY_ASCEND,
    OBSTACLE_W, OBSTACLE_SPEED, OBSTACLE_GAP, OBSTACLE_MIN_H, SPAWN_PERIOD,
    SCORE_DIVISOR, SCORE_FONT_PX, SCORE_POS, SCORE_LABEL,
    GAME_OVER_FONT_PX, GAME_OVER_TEXT, GAME_OVER_POS,
    COLOR_TEXT, COLOR_DANGER
)
from .entity import Entity
from .render import Font

log = logging.getLogger(__name__)

SCORE_FONT = Font(SCORE_FONT_PX)
GAME_OVER_FONT = Font(GAME_OVER_FONT_PX)

FAIL_COLLISION = "collision"
FAIL_OUT_OF_BOUNDS = "out_of_bounds"


class GameStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class SimulationState:
    player: Optional[Entity] = None
    obstacles: List[Entity] = field(default_factory=list)
    frame: int = 0
    score: int = 0
    status: GameStatus = GameStatus.IDLE
    failure: Optional[str] = None   # FAIL_COLLISION | FAIL_OUT_OF_BOUNDS | None
    seed: Optional[int] = None


def gap_bounds(height: int = HEIGHT, gap: int = OBSTACLE_GAP,
               min_h: int = OBSTACLE_MIN_H) -> Tuple[int, int]:
    """Inclusive range of top-obstacle heights that keep both obstacles >= min_h."""
    return min_h, height - gap - min_h


def score_for(frame: int) -> int:
    return frame // SCORE_DIVISOR


class Simulation:
    """
    Fixed-tick game loop: one player, a stream of obstacle pairs.

    The caller owns the render surface, the image handles and the tick driver;
    the simulation draws through `surface`, arms/disarms `driver`, and expects
    tick() to be called once per driver period while RUNNING.
    """

    def __init__(self, surface, assets, driver, seed: Optional[int] = None,
                 width: int = WIDTH, height: int = HEIGHT):
        self.surface = surface
        self.assets = assets
        self.driver = driver
        self.width = width
        self.height = height
        self.state = SimulationState()
        self._seed_spec = seed
        self.rng = random.Random()

    # -------------------- Commands --------------------

    def start(self, seed: Optional[int] = None) -> None:
        """(Re)start from scratch. Safe to call in any state."""
        self.driver.cancel()

        seed_spec = seed if seed is not None else self._seed_spec
        if seed_spec is None:
            seed_spec = random.randrange(0, 2**32 - 1)
        self.rng = random.Random(seed_spec)

        player = Entity(PLAYER_W, PLAYER_H, float(PLAYER_X), float(PLAYER_Y), self.assets.player)
        player.gravity = GRAVITY_BASE
        self.state = SimulationState(
            player=player,
            obstacles=[],
            frame=0,
            score=0,
            status=GameStatus.RUNNING,
            failure=None,
            seed=seed_spec,
        )
        self.driver.start()
        log.info("game started (seed=%s)", seed_spec)

    def ascend_begin(self) -> None:
        if self.state.status is GameStatus.RUNNING:
            self.state.player.gravity = GRAVITY_ASCEND

    def ascend_end(self) -> None:
        if self.state.status is GameStatus.RUNNING:
            self.state.player.gravity = GRAVITY_BASE

    @property
    def running(self) -> bool:
        return self.state.status is GameStatus.RUNNING

    # -------------------- Tick --------------------

    def tick(self) -> GameStatus:
        st = self.state
        if st.status is not GameStatus.RUNNING:
            return st.status

        # 1) background
        self.surface.clear((0, 0, self.width, self.height))
        self.surface.draw_image(self.assets.background, 0, 0, self.width, self.height)

        # 2-3) frame count, periodic spawn
        st.frame += 1
        if st.frame % SPAWN_PERIOD == 0:
            self.spawn_obstacle_pair()

        # 4) scroll
        for obs in st.obstacles:
            obs.x -= OBSTACLE_SPEED
            obs.render(self.surface)

        # 5) prune what left the screen
        before = len(st.obstacles)
        st.obstacles = [obs for obs in st.obstacles if obs.right > 0]
        if len(st.obstacles) != before:
            log.debug("frame %d: pruned %d obstacle(s)", st.frame, before - len(st.obstacles))

        # 6) obstacle collision
        for obs in st.obstacles:
            if st.player.overlaps(obs):
                self._game_over(FAIL_COLLISION)
                return st.status

        # 7-8) physics, then bounds
        st.player.advance()
        if st.player.top < 0 or st.player.bottom > self.height:
            self._game_over(FAIL_OUT_OF_BOUNDS)
            return st.status

        # 9-10) player and score
        st.player.render(self.surface)
        st.score = score_for(st.frame)
        self.surface.draw_text(f"{SCORE_LABEL}{st.score}", SCORE_POS[0], SCORE_POS[1],
                               SCORE_FONT, COLOR_TEXT)
        return st.status

    def spawn_obstacle_pair(self) -> Tuple[Entity, Entity]:
        lo, hi = gap_bounds(self.height, OBSTACLE_GAP, OBSTACLE_MIN_H)
        top_h = self.rng.randint(lo, hi)
        bottom_h = self.height - OBSTACLE_GAP - top_h

        x = float(self.width)
        top = Entity(OBSTACLE_W, top_h, x, 0.0, self.assets.obstacle_top)
        bottom = Entity(OBSTACLE_W, bottom_h, x, float(top_h + OBSTACLE_GAP), self.assets.obstacle_bottom)
        self.state.obstacles.append(top)
        self.state.obstacles.append(bottom)
        log.debug("frame %d: spawned pair top_h=%d bottom_h=%d", self.state.frame, top_h, bottom_h)
        return top, bottom

    def _game_over(self, cause: str) -> None:
        st = self.state
        self.driver.cancel()
        st.status = GameStatus.GAME_OVER
        st.failure = cause
        self.surface.draw_text(GAME_OVER_TEXT, GAME_OVER_POS[0], GAME_OVER_POS[1],
                               GAME_OVER_FONT, COLOR_DANGER)
        log.info("game over at frame %d (%s), score %d", st.frame, cause, st.score)
