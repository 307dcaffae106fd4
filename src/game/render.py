# src/game/render.py
"""
Presentation side of the game: the surface the simulation draws on and the
four image handles it draws with. The simulation only ever calls
clear / draw_image / draw_text, so anything with those three methods works.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Tuple
import pygame
from .config import (
    ASSET_DIR, ASSET_FILES, FONT_FAMILY,
    WIDTH, HEIGHT, PLAYER_W, PLAYER_H, OBSTACLE_W,
    COLOR_SKY, COLOR_BIRD, COLOR_PIPE
)

log = logging.getLogger(__name__)

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Font:
    size: int
    family: str = FONT_FAMILY


@dataclass(frozen=True)
class Assets:
    background: Any
    player: Any
    obstacle_top: Any
    obstacle_bottom: Any


class PygameSurface:
    """Draws onto a pygame.Surface (usually the display surface)."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self._fonts: Dict[Font, pygame.font.Font] = {}
        self._scaled: Dict[Tuple[int, int, int], pygame.Surface] = {}

    def clear(self, area) -> None:
        self.surface.fill((0, 0, 0), pygame.Rect(area))

    def draw_image(self, handle, x: float, y: float, w: int, h: int) -> None:
        size = (int(w), int(h))
        if handle.get_size() != size:
            # obstacles are stretched to a new height every spawn, so cache per size
            key = (id(handle), size[0], size[1])
            scaled = self._scaled.get(key)
            if scaled is None:
                scaled = pygame.transform.scale(handle, size)
                self._scaled[key] = scaled
            handle = scaled
        self.surface.blit(handle, (int(x), int(y)))

    def draw_text(self, text: str, x: float, y: float, font: Font, color: Color) -> None:
        """(x, y) is the left end of the text baseline."""
        f = self._font(font)
        img = f.render(text, True, color)
        self.surface.blit(img, (int(x), int(y) - f.get_ascent()))

    def _font(self, font: Font) -> pygame.font.Font:
        f = self._fonts.get(font)
        if f is None:
            if not pygame.font.get_init():
                pygame.font.init()
            f = pygame.font.SysFont(font.family, font.size)
            self._fonts[font] = f
        return f


class NullSurface:
    """Swallows every draw call; used for headless simulation."""

    def clear(self, area) -> None:
        pass

    def draw_image(self, handle, x, y, w, h) -> None:
        pass

    def draw_text(self, text, x, y, font, color) -> None:
        pass


def _placeholder(size: Tuple[int, int], color: Color) -> pygame.Surface:
    surf = pygame.Surface(size)
    surf.fill(color)
    return surf


_PLACEHOLDERS = {
    "background": ((WIDTH, HEIGHT), COLOR_SKY),
    "player": ((PLAYER_W, PLAYER_H), COLOR_BIRD),
    "obstacle_top": ((OBSTACLE_W, HEIGHT), COLOR_PIPE),
    "obstacle_bottom": ((OBSTACLE_W, HEIGHT), COLOR_PIPE),
}


def load_assets(directory: str = ASSET_DIR) -> Assets:
    """
    Load the four image handles from `directory`.
    A missing or unreadable file falls back to a flat-colour surface.
    """
    handles = {}
    can_convert = pygame.display.get_surface() is not None
    for name, filename in ASSET_FILES.items():
        path = os.path.join(directory, filename)
        try:
            img = pygame.image.load(path)
            handles[name] = img.convert_alpha() if can_convert else img
        except (FileNotFoundError, pygame.error) as e:
            log.warning("asset %s unavailable (%s), using placeholder", path, e)
            size, color = _PLACEHOLDERS[name]
            handles[name] = _placeholder(size, color)
    return Assets(**handles)


def placeholder_assets() -> Assets:
    return Assets(**{name: _placeholder(size, color) for name, (size, color) in _PLACEHOLDERS.items()})
