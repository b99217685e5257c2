"""Systems package for game subsystems.

This package contains system modules such as the event bus and the time system.
"""

__all__ = [
    "event_bus",
    "time_system",
]
