#!/usr/bin/env python3
"""
Seed the exercise library of a vault with the bundled default exercises.

Exercises that already exist are skipped, so running it twice is harmless.
"""
import logging

from gymtracker.actions import GymTracker
from gymtracker.settings import load_settings
from gymtracker.vault import FileSystemVault


def main():
    """Seed the exercise library in GYM_TRACKER_VAULT_PATH."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    tracker = GymTracker(FileSystemVault(settings.vault_path), settings)

    print(f"Seeding exercise library in {settings.vault_path}/{settings.exercises_folder}...")
    tracker.load()
    result = tracker.seed_exercise_library()
    print(result.message)


if __name__ == "__main__":
    main()
