#!/usr/bin/env python3
"""
Generate today's workout from the active program of a vault.

The program is the most recently modified program.md / *.program.md in the
workouts folder. An already generated workout for today is left untouched.
"""
import logging
import sys

from gymtracker.actions import GymTracker
from gymtracker.settings import load_settings
from gymtracker.vault import FileSystemVault


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    tracker = GymTracker(FileSystemVault(settings.vault_path), settings)

    result = tracker.generate_next_workout()
    print(result.message)
    if result.path:
        print(f"✓ {settings.vault_path}/{result.path}")
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
