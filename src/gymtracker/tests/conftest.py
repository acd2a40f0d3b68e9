"""
Pytest fixtures for gym tracker tests.
"""

from typing import Callable, List, Tuple

import pytest

from ..exercise_catalog import ExerciseCatalog
from ..model import Workout, WorkoutExercise, WorkoutSet
from ..program_engine import ProgramEngine
from ..settings import Settings
from ..template_catalog import TemplateCatalog
from ..vault import FileSystemVault
from ..workout_log import WorkoutLog


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def vault(tmp_path) -> FileSystemVault:
    """Vault rooted in a temporary directory"""
    return FileSystemVault(tmp_path)


@pytest.fixture
def workout_log(vault, settings) -> WorkoutLog:
    return WorkoutLog(vault, settings)


@pytest.fixture
def program_engine(vault, settings) -> ProgramEngine:
    return ProgramEngine(vault, settings)


@pytest.fixture
def exercise_catalog(vault, settings) -> ExerciseCatalog:
    return ExerciseCatalog(vault, settings)


@pytest.fixture
def template_catalog(vault, settings) -> TemplateCatalog:
    return TemplateCatalog(vault, settings)


@pytest.fixture
def make_workout() -> Callable[..., Workout]:
    """Build a workout from (exercise_id, [(weight, reps), ...]) pairs"""
    def _make(date: str, workout_type: str,
              exercises: List[Tuple[str, List[Tuple[float, int]]]] = ()) -> Workout:
        return Workout(
            date=date,
            type=workout_type,
            exercises=[
                WorkoutExercise(
                    exercise_id=exercise_id,
                    sets=[WorkoutSet(weight=w, reps=r) for w, r in sets],
                )
                for exercise_id, sets in exercises
            ],
        )
    return _make


@pytest.fixture
def sample_workout_text() -> str:
    """A logged push session"""
    return """---
date: 2026-01-20
type: push
duration: 65
notes: Felt strong
---

## Exercises

### [[barbell-bench-press]]
| Set | Weight | Reps | RPE |
|-----|--------|------|-----|
| 1   | 185    | 8    |     |
| 2   | 185    | 8    |     |
| 3   | 185    | 7    | 9   |

### [[overhead-press|Overhead Press]]
| Set | Weight | Reps | RPE |
|-----|--------|------|-----|
| 1   | 95     | 10   | 7.5 |
| 2   | 0      | 0    |     |

### Tricep Pushdown
| Set | Weight | Reps |
|-----|--------|------|
| 1   | 50     | 12   |
"""


@pytest.fixture
def sample_program_text() -> str:
    """A push/pull/legs program with progression rules"""
    return """---
name: My PPL Program
split: [push, pull, legs]
started: 2026-01-20
---

## Push

| Exercise | Sets | Reps | Progression |
|----------|------|------|-------------|
| [[barbell-bench-press]] | 4 | 6-8 | +5lbs at 4x8 |
| [[overhead-press]] | 3 | 8-10 | +5lbs at 3x10 |
| [[tricep-pushdown]] | 3 | 12-15 | |

## Pull

| Exercise | Sets | Reps | Progression |
|----------|------|------|-------------|
| [[barbell-row]] | 4 | 6-8 | +5lbs at 4x8 |
| [[pull-up]] | 3 | AMRAP | |

## Legs

| Exercise | Sets | Reps | Progression |
|----------|------|------|-------------|
| [[barbell-back-squat]] | 4 | 5 | +10lbs at 4x5 |
| [[romanian-deadlift]] | 3 | 8-10 | +5lbs at 3x10 |
"""


@pytest.fixture
def sample_template_text() -> str:
    return """---
name: Pull-A
type: pull
---

## Exercises

| Exercise | Sets | Reps |
|----------|------|------|
| [[barbell-row]] | 4 | 6-8 |
| [[lat-pulldown|Lat Pulldown]] | 3 | 10-12 |
| Face Pull | | |
"""


@pytest.fixture
def sample_exercise_text() -> str:
    return """---
id: barbell-bench-press
name: Barbell Bench Press
muscles:
  primary: [chest]
  secondary: [triceps, shoulders]
type: compound
equipment: barbell
alternatives: [dumbbell-bench-press, machine-chest-press]
---

## How to Perform
1. Lie flat on bench with feet firmly planted
2. Press up explosively
"""
