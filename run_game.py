"""Lightweight launcher for Magic Farm.

This should remain small and delegate to `magic_farm.main`.
"""
import sys


if __name__ == "__main__":
    from magic_farm.main import main

    sys.exit(main())
