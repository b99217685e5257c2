"""Command line entrypoint for Magic Farm.

`magic-farm` opens the game window; `magic-farm --headless 1200` runs one
in-game day (at the default speed) without a window and prints the clock.
"""
from dataclasses import replace
from pathlib import Path
import argparse
import logging
from typing import Optional, Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="magic-farm", description="Magic Farm launcher")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--config", type=Path, help="JSON file with clock settings")
    parser.add_argument("--seconds-per-day", type=float)
    parser.add_argument("--day-start-hour", type=int)
    parser.add_argument("--days-per-season", type=int)
    parser.add_argument("--headless", type=float, metavar="SECONDS",
                        help="advance the clock by SECONDS of real time without a window")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="frame length for --headless")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = logging.getLogger("magic_farm.launcher")

    from magic_farm.app import Application
    from magic_farm.config import ClockConfig, Config
    from magic_farm.data.loader import load_clock_config

    clock_config = load_clock_config(args.config) if args.config is not None else ClockConfig()
    overrides = {
        "seconds_per_day": args.seconds_per_day,
        "day_start_hour": args.day_start_hour,
        "days_per_season": args.days_per_season,
    }
    clock_config = replace(clock_config, **{k: v for k, v in overrides.items() if v is not None})

    app = Application(Config(clock=clock_config), debug=args.debug)
    try:
        if args.headless is not None:
            snapshot = app.run_headless(args.headless, args.dt)
            print(f"{snapshot.time_string()} ({snapshot.segment.label})")
        else:
            app.run()
    except Exception as e:
        logger.exception("Application failed: %s", e)
        raise
    finally:
        app.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
