"""Magic Farm: in-game calendar clock and its day/night consumers."""
from magic_farm.config import ClockConfig, Config, ConfigError
from magic_farm.systems.event_bus import EventBus
from magic_farm.systems.time_system import (
    Season,
    TimeSegment,
    TimeSnapshot,
    TimeSystem,
    determine_segment,
)

__version__ = "0.1.0"

__all__ = [
    "ClockConfig",
    "Config",
    "ConfigError",
    "EventBus",
    "Season",
    "TimeSegment",
    "TimeSnapshot",
    "TimeSystem",
    "determine_segment",
]
