# src/tests/test_render.py
from __future__ import annotations
import pygame

from src.game.config import WIDTH, HEIGHT, PLAYER_W, PLAYER_H, ASSET_FILES
from src.game.render import PygameSurface, NullSurface, Assets, load_assets, placeholder_assets

RED = (255, 0, 0)


def test_draw_image_scales_to_box():
    canvas = pygame.Surface((100, 100))
    canvas.fill((0, 0, 255))
    img = pygame.Surface((10, 10))
    img.fill(RED)

    surf = PygameSurface(canvas)
    surf.draw_image(img, 5.7, 5.2, 20, 30)

    assert canvas.get_at((5, 5))[:3] == RED
    assert canvas.get_at((24, 34))[:3] == RED
    assert canvas.get_at((25, 20))[:3] == (0, 0, 255)
    assert canvas.get_at((10, 35))[:3] == (0, 0, 255)


def test_clear_only_touches_area():
    canvas = pygame.Surface((50, 50))
    canvas.fill(RED)
    PygameSurface(canvas).clear((0, 0, 10, 10))
    assert canvas.get_at((0, 0))[:3] == (0, 0, 0)
    assert canvas.get_at((20, 20))[:3] == RED


def test_null_surface_accepts_everything():
    s = NullSurface()
    s.clear((0, 0, 1, 1))
    s.draw_image(None, 0, 0, 1, 1)
    s.draw_text("x", 0, 0, None, (0, 0, 0))


def test_missing_assets_fall_back_to_placeholders(tmp_path, caplog):
    with caplog.at_level("WARNING", logger="src.game.render"):
        assets = load_assets(str(tmp_path))
    assert isinstance(assets, Assets)
    assert assets.background.get_size() == (WIDTH, HEIGHT)
    assert assets.player.get_size() == (PLAYER_W, PLAYER_H)
    assert len([r for r in caplog.records if "placeholder" in r.getMessage()]) == len(ASSET_FILES)


def test_existing_asset_is_loaded(tmp_path):
    img = pygame.Surface((7, 9))
    img.fill(RED)
    pygame.image.save(img, str(tmp_path / ASSET_FILES["player"]))
    assets = load_assets(str(tmp_path))
    assert assets.player.get_size() == (7, 9)
    assert assets.obstacle_top.get_size() == placeholder_assets().obstacle_top.get_size()
