"""Simple logging configuration for Magic Farm.

Provide a small helper to configure global logging with debug vs info levels.
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)5s] %(name)s: %(message)s"


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig is a no-op once handlers exist; keep the requested level anyway
    logging.getLogger("magic_farm").setLevel(level)
