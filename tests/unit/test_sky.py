"""
Unit tests for the day/night lighting consumer.
"""

import pygame
import pytest

from magic_farm.sky import (
    MAX_MOON_INTENSITY,
    MAX_OVERLAY_ALPHA,
    MAX_SUN_INTENSITY,
    Sky,
    ambient_color,
    compute_light,
    is_moon_up,
    is_sun_up,
    moon_intensity,
    moon_temperature,
    rotation_angle,
    sun_intensity,
    sun_temperature,
)
from magic_farm.systems.time_system import TimeSegment


class TestLightCurves:
    """Tests for the pure lighting functions."""

    @pytest.mark.parametrize("t,angle", [(0.0, -90.0), (0.25, 0.0), (0.5, 90.0), (0.75, 180.0)])
    def test_rotation_angle(self, t, angle):
        assert rotation_angle(t) == pytest.approx(angle)

    def test_sun_peaks_at_noon(self):
        assert sun_intensity(0.5) == pytest.approx(MAX_SUN_INTENSITY)

    @pytest.mark.parametrize("t", [0.0, 0.1, 0.19, 0.81, 0.95])
    def test_no_sun_at_night(self, t):
        assert sun_intensity(t) == 0.0

    def test_sun_fades_in(self):
        assert 0.0 < sun_intensity(0.25) < sun_intensity(0.35) < sun_intensity(0.5)

    def test_moon_full_at_midnight(self):
        assert moon_intensity(0.0) == pytest.approx(MAX_MOON_INTENSITY)

    @pytest.mark.parametrize("t", [0.3, 0.5, 0.7])
    def test_no_moon_at_midday(self, t):
        assert moon_intensity(t) == 0.0

    def test_shadow_windows(self):
        assert is_sun_up(0.5) and not is_moon_up(0.5)
        assert is_moon_up(0.1) and not is_sun_up(0.1)
        assert not is_sun_up(0.79) and not is_moon_up(0.79)

    def test_temperature_keys(self):
        assert sun_temperature(0.5) == pytest.approx(5500.0)
        assert sun_temperature(0.375) == pytest.approx(4500.0)
        assert moon_temperature(0.25) == pytest.approx(8600.0)

    def test_ambient_color_keys(self):
        assert ambient_color(0.0) == (26, 26, 51)
        assert ambient_color(0.5) == (140, 143, 153)
        assert ambient_color(1.0) == ambient_color(0.0)

    def test_compute_light(self):
        light = compute_light(0.5)
        assert light.sun_angle == pytest.approx(90.0)
        assert light.moon_angle == pytest.approx(270.0)
        assert light.sun_shadows is True
        assert light.moon_shadows is False
        assert light.darkness == pytest.approx(0.0)
        assert compute_light(0.0).darkness == pytest.approx(1.0)


class TestSky:
    """Tests for the Sky consumer wired to a clock."""

    def test_follows_clock(self, clock, bus):
        sky = Sky((64, 48), clock)
        sky.attach(bus)
        clock.set_time(12, 0)
        assert sky.light.sun_angle == pytest.approx(rotation_angle(0.5))
        assert sky.segment is TimeSegment.NOON
        assert sky.overlay_alpha() == 0

        clock.set_time(0, 0)
        assert sky.segment is TimeSegment.NIGHT
        assert sky.overlay_alpha() == MAX_OVERLAY_ALPHA

    def test_detach_stops_updates(self, clock, bus):
        sky = Sky((64, 48), clock)
        sky.attach(bus)
        sky.detach()
        before = sky.light
        clock.set_time(0, 0)
        assert sky.light == before

    def test_never_writes_to_clock(self, clock, bus):
        sky = Sky((64, 48), clock)
        sky.attach(bus)
        before = clock.get_snapshot()
        sky.display(pygame.Surface((64, 48)))
        assert clock.get_snapshot() == before

    def test_display_tints_surface(self, clock, bus):
        sky = Sky((8, 8), clock)
        sky.attach(bus)
        clock.set_time(0, 0)
        surface = pygame.Surface((8, 8))
        surface.fill((255, 255, 255))
        sky.display(surface)
        r, g, b, *_ = surface.get_at((0, 0))
        assert (r, g, b) != (255, 255, 255)
