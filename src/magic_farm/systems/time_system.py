"""TimeSystem: the in-game calendar clock.

Advances a wrapping time of day from elapsed real seconds and derives
hour/minute/day/season/year plus the current TimeSegment. Every change is
posted on the EventBus synchronously, inside the advance()/set_time() call,
so subscribers always observe the order below:

    TIME_OF_DAY_CHANGED          every pipeline run, no payload
    MINUTE_CHANGED(minute)
    HOUR_CHANGED(hour)           before any rollover it causes
    DAY_CHANGED(day)             then SEASON_CHANGED / YEAR_CHANGED on cascade
    SEGMENT_CHANGED(segment)     after the rollover, once per hour change

The clock is owned by the application and handed to consumers; it is not a
global. It is not thread-safe: keep it on the frame-driver thread and share
TimeSnapshot objects with anything else.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import Optional, Union

from magic_farm.config import ClockConfig
from magic_farm.systems.event_bus import EventBus

_logger = logging.getLogger("magic_farm.time")

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = HOURS_PER_DAY * MINUTES_PER_HOUR

# Event types posted on the bus
TIME_OF_DAY_CHANGED = "time.time_of_day_changed"
MINUTE_CHANGED = "time.minute_changed"
HOUR_CHANGED = "time.hour_changed"
DAY_CHANGED = "time.day_changed"
SEASON_CHANGED = "time.season_changed"
YEAR_CHANGED = "time.year_changed"
SEGMENT_CHANGED = "time.segment_changed"

ALL_EVENTS = (
    TIME_OF_DAY_CHANGED,
    MINUTE_CHANGED,
    HOUR_CHANGED,
    DAY_CHANGED,
    SEASON_CHANGED,
    YEAR_CHANGED,
    SEGMENT_CHANGED,
)

_NOT_FIRED = -1
# float noise from the seconds <-> minutes round trip stays well below this
_MINUTE_EPSILON = 1e-6


class Season(Enum):
    SPRING = 0
    SUMMER = 1
    AUTUMN = 2
    WINTER = 3

    def next(self) -> "Season":
        members = list(Season)
        return members[(members.index(self) + 1) % len(members)]

    @property
    def label(self) -> str:
        return self.name.title()


class TimeSegment(Enum):
    NIGHT = "night"
    DAWN = "dawn"
    MORNING = "morning"
    NOON = "noon"
    AFTERNOON = "afternoon"
    DUSK = "dusk"
    EVENING = "evening"

    @property
    def label(self) -> str:
        return self.name.title()


# (start_hour, end_hour_exclusive); anything else is night (22h-4h)
_SEGMENTS = (
    (4, 6, TimeSegment.DAWN),
    (6, 11, TimeSegment.MORNING),
    (11, 13, TimeSegment.NOON),
    (13, 17, TimeSegment.AFTERNOON),
    (17, 19, TimeSegment.DUSK),
    (19, 22, TimeSegment.EVENING),
)


def determine_segment(hour: int) -> TimeSegment:
    """Return the time segment containing ``hour``."""
    for start, end, segment in _SEGMENTS:
        if start <= hour < end:
            return segment
    return TimeSegment.NIGHT


@dataclass(frozen=True)
class TimeSnapshot:
    time_of_day: float
    hour: int
    minute: int
    day: int
    season: Season
    year: int
    segment: TimeSegment
    paused: bool = False

    def time_string(self) -> str:
        return f"{self.season.label} {self.day}, Year {self.year} - {self.hour:02d}:{self.minute:02d}"


class TimeSystem:
    def __init__(self, config: Optional[ClockConfig] = None, bus: Optional[EventBus] = None):
        self.config = config if config is not None else ClockConfig()
        self.bus = bus if bus is not None else EventBus()

        self._elapsed = 0.0
        self._time_of_day = 0.0
        self._hour = 0
        self._minute = 0
        self._day = 1
        self._season = Season.SPRING
        self._year = 1
        self._segment = TimeSegment.NIGHT
        self._last_hour_fired = _NOT_FIRED
        self._last_minute_fired = _NOT_FIRED
        self._paused = False

        self.set_time(self.config.day_start_hour, 0)
        _logger.debug(
            "TimeSystem ready: %.1fs per day, day starts at %02d:00, %d days per season",
            self.config.seconds_per_day,
            self.config.day_start_hour,
            self.config.days_per_season,
        )

    # --- read-only state ---------------------------------------------------
    @property
    def seconds_per_day(self) -> float:
        return self.config.seconds_per_day

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed

    @property
    def time_of_day(self) -> float:
        return self._time_of_day

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def day(self) -> int:
        return self._day

    @property
    def season(self) -> Season:
        return self._season

    @property
    def year(self) -> int:
        return self._year

    @property
    def segment(self) -> TimeSegment:
        return self._segment

    def get_snapshot(self) -> TimeSnapshot:
        return TimeSnapshot(
            time_of_day=self._time_of_day,
            hour=self._hour,
            minute=self._minute,
            day=self._day,
            season=self._season,
            year=self._year,
            segment=self._segment,
            paused=self._paused,
        )

    # --- commands ----------------------------------------------------------
    def advance(self, dt_seconds: float) -> None:
        """Advance the clock by ``dt_seconds`` of real time.

        Does nothing while paused. Negative or non-finite deltas are rejected
        and leave the clock untouched. Deltas longer than one in-game hour are
        applied in hour-sized steps so no hour boundary, and therefore no day
        rollover, is skipped.
        """
        if self._paused:
            return
        try:
            remaining = float(dt_seconds)
        except (TypeError, ValueError):
            remaining = math.nan
        if not math.isfinite(remaining) or remaining < 0:
            _logger.warning("Ignoring invalid time delta %r", dt_seconds)
            return

        max_step = self.config.seconds_per_day / HOURS_PER_DAY
        while True:
            step = min(remaining, max_step)
            remaining -= step
            self._elapsed += step
            if self._elapsed >= self.config.seconds_per_day:
                self._elapsed -= self.config.seconds_per_day
            self._update_clock(force=False)
            if remaining <= 0.0:
                break

    def set_time(self, hour: int, minute: int) -> None:
        """Jump to ``hour:minute`` of the current day (values are clamped).

        Always posts MINUTE_CHANGED and HOUR_CHANGED, never rolls the day.
        """
        hour = max(0, min(HOURS_PER_DAY - 1, int(hour)))
        minute = max(0, min(MINUTES_PER_HOUR - 1, int(minute)))
        total_minutes = hour * MINUTES_PER_HOUR + minute
        self._elapsed = total_minutes * self.config.seconds_per_day / MINUTES_PER_DAY
        _logger.debug("Time set to %02d:%02d", hour, minute)
        self._update_clock(force=True)

    def set_season(self, season: Union[Season, str]) -> None:
        """Override the season. Day, year and segment are left alone."""
        self._season = _coerce_season(season)
        _logger.info("Season set to %s", self._season.label)
        self.bus.post(SEASON_CHANGED, self._season)

    def pause(self) -> None:
        if not self._paused:
            _logger.debug("Clock paused at %02d:%02d", self._hour, self._minute)
        self._paused = True

    def resume(self) -> None:
        if self._paused:
            _logger.debug("Clock resumed at %02d:%02d", self._hour, self._minute)
        self._paused = False

    def is_paused(self) -> bool:
        return self._paused

    # --- update pipeline ---------------------------------------------------
    def _update_clock(self, force: bool) -> None:
        self._time_of_day = self._elapsed / self.config.seconds_per_day

        total_minutes = self._time_of_day * MINUTES_PER_DAY
        nearest = round(total_minutes)
        if abs(total_minutes - nearest) < _MINUTE_EPSILON:
            total_minutes = nearest
        self._hour = int(total_minutes // MINUTES_PER_HOUR) % HOURS_PER_DAY
        self._minute = int(total_minutes % MINUTES_PER_HOUR)

        self.bus.post(TIME_OF_DAY_CHANGED)

        if self._minute != self._last_minute_fired or force:
            self.bus.post(MINUTE_CHANGED, self._minute)
            self._last_minute_fired = self._minute

        if self._hour != self._last_hour_fired or force:
            self.bus.post(HOUR_CHANGED, self._hour)
            _logger.debug("Hour changed to %02d", self._hour)

            start = self.config.day_start_hour
            if not force and self._hour == start and self._last_hour_fired != start:
                self._roll_day()

            self._check_segment()
            self._last_hour_fired = self._hour

    def _check_segment(self) -> None:
        segment = determine_segment(self._hour)
        if segment != self._segment:
            self._segment = segment
            _logger.debug("Time segment changed to %s", segment.label)
            self.bus.post(SEGMENT_CHANGED, segment)

    def _roll_day(self) -> None:
        # finish every calendar mutation before anyone hears about it
        self._day += 1
        season_rolled = False
        year_rolled = False
        if self._day > self.config.days_per_season:
            self._day = 1
            season_rolled = True
            if self._season is Season.WINTER:
                self._year += 1
                year_rolled = True
            self._season = self._season.next()

        _logger.info("New day: %s", self.get_snapshot().time_string())
        self.bus.post(DAY_CHANGED, self._day)
        if season_rolled:
            _logger.info("Season changed to %s", self._season.label)
            self.bus.post(SEASON_CHANGED, self._season)
        if year_rolled:
            _logger.info("Year changed to %d", self._year)
            self.bus.post(YEAR_CHANGED, self._year)


def _coerce_season(season: Union[Season, str]) -> Season:
    if isinstance(season, Season):
        return season
    if isinstance(season, str):
        try:
            return Season[season.strip().upper()]
        except KeyError:
            pass
    raise ValueError(f"Unknown season: {season!r}")
