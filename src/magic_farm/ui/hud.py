"""HUD (heads-up display) for the clock.

Draws a small translucent panel with the date (season, day, year) and the
time with its segment. The HUD polls TimeSystem.get_snapshot() every frame
rather than subscribing to events.
"""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING
import pygame

from magic_farm.systems.time_system import TimeSnapshot

if TYPE_CHECKING:
    from magic_farm.systems.time_system import TimeSystem

PANEL_SIZE = (220, 58)
PANEL_POS = (8, 8)
TEXT_COLOR = (240, 240, 240)
PAUSED_COLOR = (255, 200, 50)


def format_date(snapshot: TimeSnapshot) -> str:
    return f"{snapshot.season.label} {snapshot.day}, Year {snapshot.year}"


def format_time(snapshot: TimeSnapshot) -> str:
    text = f"{snapshot.hour:02d}:{snapshot.minute:02d} {snapshot.segment.label}"
    if snapshot.paused:
        text += " (paused)"
    return text


class ClockHUD:
    def __init__(self, clock: "TimeSystem"):
        self.clock = clock
        self.font: Optional[pygame.font.Font] = None

    def _get_font(self) -> pygame.font.Font:
        if self.font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self.font = pygame.font.Font(None, 22)
        return self.font

    def display(self, surface: pygame.Surface) -> None:
        snapshot = self.clock.get_snapshot()
        font = self._get_font()

        panel = pygame.Surface(PANEL_SIZE, pygame.SRCALPHA)
        panel.fill((0, 0, 0, 140))
        surface.blit(panel, PANEL_POS)

        x, y = PANEL_POS
        color = PAUSED_COLOR if snapshot.paused else TEXT_COLOR
        surface.blit(font.render(format_date(snapshot), True, TEXT_COLOR), (x + 8, y + 6))
        surface.blit(font.render(format_time(snapshot), True, color), (x + 8, y + 30))
