"""
Unit tests for Pydantic model classes.
"""

import pytest
from pydantic import ValidationError

from ..model import (
    Exercise,
    ExerciseType,
    Muscles,
    Program,
    ProgramExercise,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)


class TestWorkoutSet:
    """Test WorkoutSet model"""

    def test_defaults(self):
        """Test workout set default values"""
        workout_set = WorkoutSet()

        assert workout_set.weight == 0
        assert workout_set.reps == 0
        assert workout_set.effort is None
        assert workout_set.is_empty()

    @pytest.mark.parametrize("weight,reps", [(0, 12), (25, 0), (102.5, 5)])
    def test_not_empty(self, weight, reps):
        assert not WorkoutSet(weight=weight, reps=reps).is_empty()

    def test_model_dump(self):
        """Test serialization with model_dump"""
        data = WorkoutSet(weight=185, reps=8, effort=9).model_dump()

        assert data == {"weight": 185, "reps": 8, "effort": 9}

    def test_invalid_reps(self):
        with pytest.raises(ValidationError):
            WorkoutSet(reps="lots")


class TestExercise:
    """Test Exercise model"""

    def test_defaults(self):
        exercise = Exercise(id="plank", name="Plank")

        assert exercise.type == ExerciseType.isolation
        assert exercise.equipment == "other"
        assert exercise.muscles == Muscles()
        assert exercise.alternatives == []
        assert exercise.description is None

    def test_type_from_string(self):
        exercise = Exercise(id="squat", name="Squat", type="compound")

        assert exercise.type is ExerciseType.compound
        assert exercise.type == "compound"

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            Exercise(id="run", name="Run", type="cardio")

    def test_missing_required_fields(self):
        with pytest.raises(ValidationError):
            Exercise(name="No id")


class TestWorkout:
    """Test Workout model"""

    def test_nested_from_dict(self):
        workout = Workout.model_validate({
            "date": "2026-01-20",
            "type": "push",
            "exercises": [{"exercise_id": "bench", "sets": [{"weight": 185, "reps": 8}]}],
        })

        assert workout.exercises == [
            WorkoutExercise(exercise_id="bench", sets=[WorkoutSet(weight=185, reps=8)]),
        ]
        assert workout.duration is None
        assert workout.notes is None


class TestProgram:
    """Test Program model"""

    def test_defaults(self):
        program = Program(name="Empty")

        assert program.split == []
        assert program.workouts == []
        assert program.started is None

    def test_progression_optional(self):
        exercise = ProgramExercise(exercise_id="pull-up", sets=3, reps="AMRAP")

        assert exercise.progression is None
