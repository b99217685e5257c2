"""
Unit tests for the clock HUD.
"""

import pygame

from magic_farm.systems.time_system import Season, TimeSegment, TimeSnapshot
from magic_farm.ui.hud import ClockHUD, format_date, format_time


def _snapshot(**overrides):
    values = dict(
        time_of_day=0.25,
        hour=6,
        minute=5,
        day=3,
        season=Season.AUTUMN,
        year=2,
        segment=TimeSegment.MORNING,
    )
    values.update(overrides)
    return TimeSnapshot(**values)


class TestFormatting:
    """Tests for the HUD text helpers."""

    def test_format_date(self):
        assert format_date(_snapshot()) == "Autumn 3, Year 2"

    def test_format_time(self):
        assert format_time(_snapshot()) == "06:05 Morning"

    def test_format_time_paused(self):
        assert format_time(_snapshot(paused=True)) == "06:05 Morning (paused)"


class TestClockHUD:
    """Tests for drawing the HUD."""

    def test_display_draws_panel(self, pygame_headless, clock):
        hud = ClockHUD(clock)
        surface = pygame.Surface((300, 100))
        surface.fill((255, 255, 255))
        hud.display(surface)
        assert surface.get_at((10, 10))[:3] != (255, 255, 255)
        assert hud.font is not None
