"""Application bootstrap and main loop for Magic Farm.

The Application is the composition root: it owns the single EventBus and the
single TimeSystem and hands them to every consumer (Sky, ClockHUD). Nothing
reaches the clock through a global.
"""
from __future__ import annotations

import logging
from typing import Optional

from magic_farm.config import Config
from magic_farm.debug_utils import handle_debug_action
from magic_farm.logger import configure_logging
from magic_farm.systems.event_bus import EventBus
from magic_farm.systems.time_system import (
    DAY_CHANGED,
    SEASON_CHANGED,
    YEAR_CHANGED,
    TimeSnapshot,
    TimeSystem,
)


_logger = logging.getLogger("magic_farm.app")

BACKGROUND_COLOR = (96, 168, 82)

# pygame key name -> debug action
DEBUG_KEYS = {
    "space": "TogglePause",
    "f1": "Dawn",
    "f2": "Noon",
    "f3": "Dusk",
    "f4": "Midnight",
    "f5": "SkipHour",
    "f6": "SkipDay",
    "f7": "NextSeason",
}


class Application:
    def __init__(self, config: Optional[Config] = None, debug: bool = False):
        self.debug = debug
        configure_logging(debug)
        self.config = config if config is not None else Config()
        self.running = False

        # Systems
        self.event_bus = EventBus()
        self.time_system = TimeSystem(self.config.clock, self.event_bus)
        self.event_bus.subscribe(DAY_CHANGED, self._on_day_changed)
        self.event_bus.subscribe(SEASON_CHANGED, self._on_season_changed)
        self.event_bus.subscribe(YEAR_CHANGED, self._on_year_changed)

        _logger.info("Application initialized. clock=%s", self.time_system.get_snapshot().time_string())

    def _on_day_changed(self, day: int) -> None:
        _logger.info("Day %d begins", day)

    def _on_season_changed(self, season) -> None:
        _logger.info("%s has arrived", season.label)

    def _on_year_changed(self, year: int) -> None:
        _logger.info("Year %d begins", year)

    def run_headless(self, seconds: float, dt: float = 1.0 / 60.0) -> TimeSnapshot:
        """Advance the clock by `seconds` of real time in fixed `dt` frames, no window."""
        if dt <= 0:
            raise ValueError(f"dt must be > 0, got {dt}")
        remaining = float(seconds)
        frames = 0
        while remaining > 0:
            step = min(dt, remaining)
            self.time_system.advance(step)
            remaining -= step
            frames += 1
        snapshot = self.time_system.get_snapshot()
        _logger.info("Headless run finished after %d frames: %s", frames, snapshot.time_string())
        return snapshot

    def handle_key(self, key_name: str) -> bool:
        action = DEBUG_KEYS.get(key_name)
        if action is None:
            return False
        return handle_debug_action(self.time_system, action)

    def run(self) -> None:
        """Open a pygame window and drive the clock from the frame timer."""
        try:
            import pygame  # type: ignore

            pygame.init()
            pygame.font.init()
        except Exception as e:
            _logger.exception("Failed to initialize pygame: %s", e)
            raise

        from magic_farm.sky import Sky
        from magic_farm.ui.hud import ClockHUD

        screen = pygame.display.set_mode(self.config.window_size)
        pygame.display.set_caption("Magic Farm")
        frame_clock = pygame.time.Clock()

        sky = Sky(self.config.window_size, self.time_system)
        sky.attach(self.event_bus)
        hud = ClockHUD(self.time_system)

        self.running = True
        try:
            while self.running:
                dt = frame_clock.tick(self.config.fps) / 1000.0
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT:
                        self.running = False
                    elif ev.type == pygame.KEYDOWN:
                        if ev.key == pygame.K_ESCAPE:
                            self.running = False
                        else:
                            self.handle_key(pygame.key.name(ev.key))

                self.time_system.advance(dt)

                screen.fill(BACKGROUND_COLOR)
                sky.display(screen)
                hud.display(screen)
                pygame.display.flip()
        finally:
            sky.detach()
            pygame.quit()

    def shutdown(self) -> None:
        _logger.info("Shutting down application at %s", self.time_system.get_snapshot().time_string())
