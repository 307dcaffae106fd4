# src/game/game.py
import sys, argparse
import logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_RETURN, K_r
from .config import (
    WIDTH, HEIGHT, RENDER_FPS, TICK_MS, ASSET_DIR, SEED_DEFAULT,
    COLOR_FG, COLOR_BUTTON, COLOR_BUTTON_EDGE
)
from .driver import PygameTimerDriver, TICK_EVENT
from .log import setup_logging
from .render import PygameSurface, load_assets
from .simulation import Simulation, GameStatus

log = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy arcade loop")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Obstacle seed. Omit for a random seed on every start.")
    p.add_argument("--assets", type=str, default=ASSET_DIR,
                   help="Directory holding bg.png, flappy.png, obstacle_top.png, obstacle_bottom.png")
    p.add_argument("--log-level", type=str, default="info",
                   choices=["debug", "info", "warning", "error"])
    return p.parse_args(argv)


def draw_start_button(screen: pygame.Surface, rect: pygame.Rect, font: pygame.font.Font, label: str):
    pygame.draw.rect(screen, COLOR_BUTTON, rect, border_radius=10)
    pygame.draw.rect(screen, COLOR_BUTTON_EDGE, rect, width=2, border_radius=10)
    txt = font.render(label, True, COLOR_FG)
    screen.blit(txt, (rect.centerx - txt.get_width() // 2, rect.centery - txt.get_height() // 2))


def handle_event(sim: Simulation, event, start_rect: pygame.Rect) -> bool:
    """Apply one event to the simulation. Returns False when the game should quit."""
    if event.type == pygame.QUIT:
        log.info("window closed")
        return False
    if event.type == TICK_EVENT:
        # a batch fetched before a restart can still hold the old loop's ticks
        if sim.driver.accepts(event):
            sim.tick()
    elif event.type == pygame.KEYDOWN:
        if event.key == K_ESCAPE:
            return False
        if event.key == K_SPACE:
            sim.ascend_begin()
        if event.key in (K_RETURN, K_r):
            sim.start()
    elif event.type == pygame.KEYUP:
        if event.key == K_SPACE:
            sim.ascend_end()
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not sim.running:
        if start_rect.collidepoint(event.pos):
            sim.start()
    return True


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    pygame.init()
    pygame.display.set_caption("Flappy")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()

    assets = load_assets(args.assets)
    sim = Simulation(PygameSurface(screen), assets, PygameTimerDriver(TICK_MS), seed=args.seed)
    font = pygame.font.SysFont("sans-serif", 22)

    btn_w, btn_h = 180, 50
    start_rect = pygame.Rect((WIDTH - btn_w) // 2, HEIGHT // 2 + 40, btn_w, btn_h)

    # idle screen until the first start
    screen.blit(pygame.transform.scale(assets.background, (WIDTH, HEIGHT)), (0, 0))

    while True:
        clock.tick(RENDER_FPS)

        for event in pygame.event.get():
            if not handle_event(sim, event, start_rect):
                sim.driver.cancel()
                pygame.quit(); sys.exit()

        if sim.state.status is not GameStatus.RUNNING:
            label = "Start (Enter)" if sim.state.status is GameStatus.IDLE else "Restart (Enter)"
            draw_start_button(screen, start_rect, font, label)

        pygame.display.flip()


if __name__ == "__main__":
    run()
