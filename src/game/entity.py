# src/game/entity.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from .config import GRAVITY_BASE


@dataclass
class Entity:
    """
    Axis-aligned moving box, used for both the player and the obstacles.
    - gravity > 0 pulls down, gravity < 0 pushes up
    - gravity_speed accumulates every advance() with no terminal velocity
    """
    width: int
    height: int
    x: float
    y: float
    image: Any = field(default=None, repr=False)
    speed_x: float = 0.0
    speed_y: float = 0.0
    gravity: float = GRAVITY_BASE
    gravity_speed: float = 0.0

    # --- bounding box ---
    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    def render(self, surface) -> None:
        surface.draw_image(self.image, self.x, self.y, self.width, self.height)

    def advance(self) -> None:
        """Accumulate gravity first, then integrate position."""
        self.gravity_speed += self.gravity
        self.x += self.speed_x
        self.y += self.speed_y + self.gravity_speed

    def overlaps(self, other: Entity) -> bool:
        """AABB test; boxes that only share an edge are separated."""
        return not (
            self.bottom <= other.top
            or self.top >= other.bottom
            or self.right <= other.left
            or self.left >= other.right
        )
