"""
Bundled default exercise library.
"""
import json
from pathlib import Path
from typing import List

from .model import Exercise

SEED_EXERCISES_PATH = Path(__file__).parent / "data" / "seed_exercises.json"


def load_seed_exercises(json_path: Path = SEED_EXERCISES_PATH) -> List[Exercise]:
    """Load the default exercise definitions from JSON"""
    with open(json_path, 'r', encoding="utf-8") as f:
        return [Exercise.model_validate(item) for item in json.load(f)]
