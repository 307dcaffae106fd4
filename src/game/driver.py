# src/game/driver.py
"""
Tick drivers. A driver is the cancellation handle of the periodic loop:
start() arms it, cancel() disarms it, and at most one is armed per simulation.
"""
from __future__ import annotations
import pygame
from .config import TICK_MS

TICK_EVENT = pygame.event.custom_type()


class PygameTimerDriver:
    """
    Posts TICK_EVENT every `interval_ms` through pygame's timer.
    The event loop forwards those events to Simulation.tick(), so two ticks
    can never run at the same time.

    Every start() stamps its events with a new `generation`; accepts() rejects
    ticks from an earlier loop that were already pulled off the queue.
    """
    def __init__(self, interval_ms: int = TICK_MS, event_type: int = TICK_EVENT):
        self.interval_ms = interval_ms
        self.event_type = event_type
        self.active = False
        self.generation = 0

    def start(self) -> None:
        self.generation += 1
        # set_timer replaces any timer already bound to this event type
        tick = pygame.event.Event(self.event_type, generation=self.generation)
        pygame.time.set_timer(tick, self.interval_ms)
        self.active = True

    def cancel(self) -> None:
        pygame.time.set_timer(self.event_type, 0)
        if pygame.display.get_init():
            # ticks already queued belong to the cancelled loop
            pygame.event.clear(self.event_type)
        self.active = False

    def accepts(self, event) -> bool:
        return (self.active and event.type == self.event_type
                and getattr(event, "generation", None) == self.generation)


class ManualDriver:
    """Headless driver: the owner calls Simulation.tick() itself."""

    def __init__(self):
        self.active = False
        self.starts = 0
        self.cancels = 0

    def start(self) -> None:
        self.active = True
        self.starts += 1

    def cancel(self) -> None:
        self.active = False
        self.cancels += 1
