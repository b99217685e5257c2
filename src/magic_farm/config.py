"""Configuration defaults and constants for the game.

Keep this file light: constants plus small frozen dataclasses validated once
at construction.
"""
from dataclasses import dataclass, field, fields
import math
from typing import Any, Mapping, Tuple


DEFAULT_WINDOW_SIZE: Tuple[int, int] = (960, 640)
DEFAULT_FPS: int = 60
DEFAULT_SECONDS_PER_DAY: float = 1200.0  # 20 real minutes per in-game day
DEFAULT_DAY_START_HOUR: int = 6
DEFAULT_DAYS_PER_SEASON: int = 30


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClockConfig:
    seconds_per_day: float = DEFAULT_SECONDS_PER_DAY
    day_start_hour: int = DEFAULT_DAY_START_HOUR
    days_per_season: int = DEFAULT_DAYS_PER_SEASON

    def __post_init__(self):
        try:
            seconds = float(self.seconds_per_day)
        except (TypeError, ValueError):
            raise ConfigError(f"seconds_per_day must be a number, got {self.seconds_per_day!r}")
        if not math.isfinite(seconds) or seconds <= 0:
            raise ConfigError(f"seconds_per_day must be > 0, got {self.seconds_per_day!r}")
        if isinstance(self.day_start_hour, bool) or not isinstance(self.day_start_hour, int):
            raise ConfigError(f"day_start_hour must be an int, got {self.day_start_hour!r}")
        if not 0 <= self.day_start_hour <= 23:
            raise ConfigError(f"day_start_hour must be in [0, 23], got {self.day_start_hour}")
        if isinstance(self.days_per_season, bool) or not isinstance(self.days_per_season, int):
            raise ConfigError(f"days_per_season must be an int, got {self.days_per_season!r}")
        if self.days_per_season <= 0:
            raise ConfigError(f"days_per_season must be > 0, got {self.days_per_season}")
        object.__setattr__(self, "seconds_per_day", seconds)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClockConfig":
        """Build a ClockConfig from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class Config:
    window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE
    fps: int = DEFAULT_FPS
    clock: ClockConfig = field(default_factory=ClockConfig)
