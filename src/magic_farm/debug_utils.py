"""Debug utilities for poking the clock during development.

Provides a single entrypoint `handle_debug_action(clock, key)`. SkipHour and
SkipDay go through advance() so they behave like real play (rollovers fire);
the time jumps go through set_time() and never roll the day.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from magic_farm.systems.time_system import HOURS_PER_DAY

if TYPE_CHECKING:
    from magic_farm.systems.time_system import TimeSystem

_log = logging.getLogger('magic_farm.debug_utils')

TIME_JUMPS = {
    'Dawn': (4, 0),
    'Noon': (12, 0),
    'Dusk': (17, 0),
    'Midnight': (0, 0),
}

DEBUG_ACTIONS = ('TogglePause', 'SkipHour', 'SkipDay', 'NextSeason') + tuple(TIME_JUMPS)


def handle_debug_action(clock: "TimeSystem", key: str) -> bool:
    """Run debug action `key`; returns False for unknown keys."""
    if key == 'TogglePause':
        _toggle_pause(clock)
        return True
    if key == 'SkipHour':
        _skip(clock, clock.seconds_per_day / HOURS_PER_DAY)
        return True
    if key == 'SkipDay':
        _skip(clock, clock.seconds_per_day)
        return True
    if key == 'NextSeason':
        clock.set_season(clock.season.next())
        return True
    if key in TIME_JUMPS:
        hour, minute = TIME_JUMPS[key]
        clock.set_time(hour, minute)
        _log.info('%s: time set to %02d:%02d', key, hour, minute)
        return True
    _log.debug('Unknown debug action %s', key)
    return False


def _toggle_pause(clock):
    if clock.is_paused():
        clock.resume()
    else:
        clock.pause()
    _log.info('TogglePause: paused=%s', clock.is_paused())


def _skip(clock, seconds: float):
    if clock.is_paused():
        _log.info('Skip ignored: clock is paused')
        return
    clock.advance(seconds)
    _log.info('Skipped %.1fs: now %s', seconds, clock.get_snapshot().time_string())
