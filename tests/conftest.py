"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test files.
"""

import os
from typing import Generator

import pytest

from magic_farm.config import ClockConfig
from magic_farm.systems.event_bus import EventBus
from magic_farm.systems.time_system import ALL_EVENTS, TimeSystem

# pygame must never try to open a real window under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class EventRecorder:
    """Records every clock event posted on a bus as (event_type, payload)."""

    def __init__(self, bus: EventBus):
        self.events = []
        for event_type in ALL_EVENTS:
            bus.subscribe(event_type, self._make_listener(event_type))

    def _make_listener(self, event_type):
        def listener(payload):
            self.events.append((event_type, payload))
        return listener

    def of(self, *event_types):
        return [e for e in self.events if e[0] in event_types]

    def payloads(self, event_type):
        return [payload for kind, payload in self.events if kind == event_type]

    def kinds(self):
        return [kind for kind, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def clock_config() -> ClockConfig:
    """
    The reference configuration: 1200s days starting at 06:00, 30-day seasons.
    """
    return ClockConfig(seconds_per_day=1200.0, day_start_hour=6, days_per_season=30)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(bus) -> EventRecorder:
    return EventRecorder(bus)


@pytest.fixture
def clock(clock_config, bus, recorder) -> TimeSystem:
    """
    A clock wired to a recording bus; construction events are discarded.
    """
    ts = TimeSystem(clock_config, bus)
    recorder.clear()
    return ts


@pytest.fixture
def pygame_headless() -> Generator[None, None, None]:
    """
    Initialize pygame against the dummy video driver for tests that draw.
    """
    import pygame

    pygame.init()
    pygame.font.init()
    yield
    pygame.quit()
