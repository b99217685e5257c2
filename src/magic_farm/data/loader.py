"""Minimal data loader: reads JSON settings files.

The clock settings may sit at the top level of the file or under a "clock"
key, so one settings file can grow other sections later.
"""
from pathlib import Path
from typing import Optional
import json
import logging

from magic_farm.config import ClockConfig, ConfigError

_logger = logging.getLogger("magic_farm.data.loader")


def load_json(path: Path, fallback: Optional[Path] = None):
    path = Path(path)
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    if fallback is not None and Path(fallback).exists():
        _logger.info("Using fallback for %s", path)
        with Path(fallback).open("r", encoding="utf-8") as f:
            return json.load(f)
    _logger.warning("Definition not found: %s", path)
    return None


def load_clock_config(path: Path, fallback: Optional[Path] = None) -> ClockConfig:
    data = load_json(path, fallback)
    if data is None:
        return ClockConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Clock settings in {path} must be a JSON object")
    section = data.get("clock", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'clock' section in {path} must be a JSON object")
    config = ClockConfig.from_dict(section)
    _logger.debug("Loaded clock settings from %s: %s", path, config)
    return config
