"""
Integrity checks for the bundled exercise library.
"""

import re

import pytest

from ..model import ExerciseType
from ..seed import load_seed_exercises


@pytest.fixture(scope="module")
def seed_exercises():
    return load_seed_exercises()


class TestSeedExercises:

    def test_not_empty(self, seed_exercises):
        assert len(seed_exercises) > 50

    def test_ids_unique(self, seed_exercises):
        ids = [e.id for e in seed_exercises]

        assert len(ids) == len(set(ids))

    def test_ids_are_kebab_case(self, seed_exercises):
        for exercise in seed_exercises:
            assert re.fullmatch(r"[a-z0-9]+(?:-[a-z0-9]+)*", exercise.id), exercise.id

    def test_every_exercise_has_primary_muscle(self, seed_exercises):
        for exercise in seed_exercises:
            assert exercise.muscles.primary, exercise.id
            assert exercise.name.strip(), exercise.id

    def test_types_valid(self, seed_exercises):
        assert {e.type for e in seed_exercises} <= set(ExerciseType)

    def test_alternatives_are_ids(self, seed_exercises):
        # alternatives may name exercises the user adds later
        for exercise in seed_exercises:
            assert exercise.id not in exercise.alternatives
            for alternative in exercise.alternatives:
                assert re.fullmatch(r"[a-z0-9]+(?:-[a-z0-9]+)*", alternative), exercise.id

    def test_custom_path(self, tmp_path):
        path = tmp_path / "exercises.json"
        path.write_text('[{"id": "plank", "name": "Plank", "muscles": {"primary": ["core"]}}]')

        exercises = load_seed_exercises(path)

        assert [e.id for e in exercises] == ["plank"]
