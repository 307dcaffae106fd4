# src/env/observations.py
from __future__ import annotations
from typing import List, Optional
import numpy as np

from src.game.config import WIDTH, HEIGHT, PLAYER_H
from src.game.entity import Entity

OBS_SIZE = 6
MAX_GRAVITY_SPEED = 10.0  # clip for normalisation only, the physics itself is unbounded


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def next_obstacle_pair(player: Entity, obstacles: List[Entity]) -> Optional[List[Entity]]:
    """
    First pair (top, bottom) whose right edge is still ahead of the player's left edge.
    Pairs are spawned together, so obstacles[2k] / obstacles[2k+1] always share x.
    """
    for i in range(0, len(obstacles) - 1, 2):
        top, bottom = obstacles[i], obstacles[i + 1]
        if top.right > player.left:
            return [top, bottom]
    return None


def build_observation(player: Entity, obstacles: List[Entity]) -> np.ndarray:
    """
    Returns float32 (6,):
      [y_norm, gravity_speed_norm, grav_sign, dx_next, gap_top, gap_bottom]
    With nothing ahead the gap is the whole play area and dx_next = 1.
    """
    y_norm = _clamp(player.y / max(1.0, HEIGHT - PLAYER_H), 0.0, 1.0)
    gs_norm = _clamp(player.gravity_speed, -MAX_GRAVITY_SPEED, MAX_GRAVITY_SPEED) / MAX_GRAVITY_SPEED
    g = 1.0 if player.gravity > 0 else -1.0

    pair = next_obstacle_pair(player, obstacles)
    if pair is None:
        dx, gap_top, gap_bottom = 1.0, 0.0, 1.0
    else:
        top, bottom = pair
        dx = _clamp((top.left - player.right) / WIDTH, 0.0, 1.0)
        gap_top = _clamp(top.bottom / HEIGHT, 0.0, 1.0)
        gap_bottom = _clamp(bottom.top / HEIGHT, 0.0, 1.0)

    return np.array([y_norm, gs_norm, g, dx, gap_top, gap_bottom], dtype=np.float32)
