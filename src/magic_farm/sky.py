"""Sky: day/night lighting driven by the TimeSystem.

The sky only reads the clock. On every TIME_OF_DAY_CHANGED it recomputes a
LightState (sun and moon angle, intensity, colour temperature and the ambient
colour) from the normalized time of day, and display() tints the scene with a
translucent overlay. time_of_day runs 0 -> 1 from midnight to midnight.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import math
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np
import pygame

from magic_farm.systems.time_system import SEGMENT_CHANGED, TIME_OF_DAY_CHANGED, TimeSegment

if TYPE_CHECKING:
    from magic_farm.systems.event_bus import EventBus
    from magic_farm.systems.time_system import TimeSystem

_logger = logging.getLogger("magic_farm.sky")

FULL_ROTATION_DEGREES = 360.0
ROTATION_OFFSET = -90.0
OPPOSITE_ROTATION_OFFSET = 180.0

DAY_START_TIME = 0.22
DAY_END_TIME = 0.78
NIGHT_START_TIME = 0.8
NIGHT_END_TIME = 0.2

SUN_FADE_START = 0.2
SUN_FADE_DURATION = 0.6
FADE_SMOOTHNESS = 0.5

MAX_SUN_INTENSITY = 1.1
MAX_MOON_INTENSITY = 0.4
MAX_OVERLAY_ALPHA = 180

# (time_of_day, kelvin)
SUN_TEMPERATURE_KEYS = (
    (0.0, 2200.0),    # night
    (0.18, 2600.0),   # pre-dawn
    (0.25, 3500.0),   # early morning
    (0.5, 5500.0),    # daylight
    (0.65, 4200.0),   # pre-sunset
    (0.75, 2600.0),   # golden hour
    (0.82, 1900.0),   # sunset
    (1.0, 2200.0),
)
MOON_TEMPERATURE_KEYS = ((0.0, 8200.0), (0.5, 9000.0), (1.0, 8200.0))

# (time_of_day, (r, g, b)) in 0..1
AMBIENT_COLOR_KEYS = (
    (0.0, (0.10, 0.10, 0.20)),    # night navy
    (0.20, (0.28, 0.32, 0.40)),   # early dawn
    (0.50, (0.55, 0.56, 0.60)),   # midday
    (0.65, (0.55, 0.45, 0.38)),   # pre-sunset
    (0.75, (0.40, 0.28, 0.50)),   # sunset
    (0.85, (0.18, 0.16, 0.30)),   # twilight
    (1.0, (0.10, 0.10, 0.20)),
)


def _evaluate_curve(keys: Sequence[Tuple[float, float]], t: float) -> float:
    times = np.array([k[0] for k in keys])
    values = np.array([k[1] for k in keys])
    return float(np.interp(t, times, values))


def _evaluate_gradient(keys: Sequence[Tuple[float, Tuple[float, float, float]]], t: float) -> Tuple[int, int, int]:
    times = np.array([k[0] for k in keys])
    colors = np.array([k[1] for k in keys])
    rgb = [np.interp(t, times, colors[:, channel]) for channel in range(3)]
    return tuple(int(round(c * 255)) for c in np.clip(rgb, 0.0, 1.0))


def rotation_angle(time_of_day: float) -> float:
    return time_of_day * FULL_ROTATION_DEGREES + ROTATION_OFFSET


def is_sun_up(time_of_day: float) -> bool:
    return DAY_START_TIME < time_of_day < DAY_END_TIME


def is_moon_up(time_of_day: float) -> bool:
    return time_of_day < NIGHT_END_TIME or time_of_day > NIGHT_START_TIME


def sun_intensity(time_of_day: float, max_intensity: float = MAX_SUN_INTENSITY) -> float:
    """Sun intensity with a smooth sine fade; zero through the night."""
    if is_moon_up(time_of_day):
        return 0.0
    fade = float(np.clip(math.sin((time_of_day - SUN_FADE_START) * math.pi / SUN_FADE_DURATION), 0.0, 1.0))
    return fade ** FADE_SMOOTHNESS * max_intensity


def moon_intensity(time_of_day: float, max_intensity: float = MAX_MOON_INTENSITY) -> float:
    """Inverse of the sun fade; zero through the middle of the day."""
    if 0.25 < time_of_day < 0.75:
        return 0.0
    fade = 1.0 - float(np.clip(math.sin((time_of_day - SUN_FADE_START) * math.pi / SUN_FADE_DURATION), 0.0, 1.0))
    return fade ** FADE_SMOOTHNESS * max_intensity


def sun_temperature(time_of_day: float) -> float:
    return _evaluate_curve(SUN_TEMPERATURE_KEYS, time_of_day)


def moon_temperature(time_of_day: float) -> float:
    return _evaluate_curve(MOON_TEMPERATURE_KEYS, time_of_day)


def ambient_color(time_of_day: float) -> Tuple[int, int, int]:
    return _evaluate_gradient(AMBIENT_COLOR_KEYS, time_of_day)


@dataclass(frozen=True)
class LightState:
    sun_angle: float
    moon_angle: float
    sun_intensity: float
    moon_intensity: float
    sun_shadows: bool
    moon_shadows: bool
    sun_temperature: float
    moon_temperature: float
    ambient_color: Tuple[int, int, int]

    @property
    def darkness(self) -> float:
        """0.0 at full sun, 1.0 with no sun at all."""
        return 1.0 - min(1.0, self.sun_intensity / MAX_SUN_INTENSITY)


def compute_light(time_of_day: float) -> LightState:
    angle = rotation_angle(time_of_day)
    return LightState(
        sun_angle=angle,
        moon_angle=angle + OPPOSITE_ROTATION_OFFSET,
        sun_intensity=sun_intensity(time_of_day),
        moon_intensity=moon_intensity(time_of_day),
        sun_shadows=is_sun_up(time_of_day),
        moon_shadows=is_moon_up(time_of_day),
        sun_temperature=sun_temperature(time_of_day),
        moon_temperature=moon_temperature(time_of_day),
        ambient_color=ambient_color(time_of_day),
    )


class Sky:
    def __init__(self, window_size: Tuple[int, int], clock: "TimeSystem"):
        self.width, self.height = window_size
        self.clock = clock
        # overlay surface used to tint the scene for dawn/dusk/night
        self.overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        self.light = compute_light(clock.time_of_day)
        self.segment: TimeSegment = clock.segment
        self._bus: Optional["EventBus"] = None

    def attach(self, bus: "EventBus") -> None:
        bus.subscribe(TIME_OF_DAY_CHANGED, self._on_time_of_day_changed)
        bus.subscribe(SEGMENT_CHANGED, self._on_segment_changed)
        self._bus = bus

    def detach(self) -> None:
        if self._bus is None:
            return
        self._bus.unsubscribe(TIME_OF_DAY_CHANGED, self._on_time_of_day_changed)
        self._bus.unsubscribe(SEGMENT_CHANGED, self._on_segment_changed)
        self._bus = None

    def _on_time_of_day_changed(self, _event=None) -> None:
        self.light = compute_light(self.clock.time_of_day)

    def _on_segment_changed(self, segment: TimeSegment) -> None:
        self.segment = segment
        _logger.debug("Sky entering %s", segment.label)

    def overlay_alpha(self) -> int:
        return int(self.light.darkness * MAX_OVERLAY_ALPHA)

    def display(self, surface: pygame.Surface) -> None:
        """Draw a translucent overlay in the ambient colour, denser at night."""
        r, g, b = self.light.ambient_color
        self.overlay.fill((r, g, b, self.overlay_alpha()))
        surface.blit(self.overlay, (0, 0))
