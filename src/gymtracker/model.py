"""
Data models for exercises, templates, programs and logged workouts.
"""
from enum import StrEnum, auto
from typing import List, Optional

from pydantic import BaseModel, Field


class ExerciseType(StrEnum):
    compound = auto()
    isolation = auto()


class Muscles(BaseModel):
    primary: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)


class Exercise(BaseModel):
    """An exercise definition stored in the exercise catalog"""
    id: str
    name: str
    muscles: Muscles = Field(default_factory=Muscles)
    type: ExerciseType = ExerciseType.isolation
    equipment: str = "other"
    alternatives: List[str] = Field(default_factory=list)
    description: Optional[str] = None


class WorkoutSet(BaseModel):
    weight: float = 0
    reps: int = 0
    effort: Optional[float] = None  # RPE or RIR, see Settings.effort_metric

    def is_empty(self) -> bool:
        return self.weight == 0 and self.reps == 0


class WorkoutExercise(BaseModel):
    exercise_id: str
    sets: List[WorkoutSet] = Field(default_factory=list)


class Workout(BaseModel):
    """A logged workout session"""
    date: str  # YYYY-MM-DD
    type: str  # push, pull, legs, ...
    duration: Optional[int] = None  # minutes
    exercises: List[WorkoutExercise] = Field(default_factory=list)
    notes: Optional[str] = None


class ProgramExercise(BaseModel):
    exercise_id: str
    sets: int
    reps: str  # "6-8", "10", "AMRAP"
    progression: Optional[str] = None  # "+5lbs at 4x8"


class ProgramWorkout(BaseModel):
    type: str
    exercises: List[ProgramExercise] = Field(default_factory=list)


class Program(BaseModel):
    """A training program: a rotation of workout types and their prescriptions"""
    name: str
    split: List[str] = Field(default_factory=list)
    started: Optional[str] = None
    workouts: List[ProgramWorkout] = Field(default_factory=list)


class TemplateExercise(BaseModel):
    exercise_id: str
    sets: int
    reps: str


class WorkoutTemplate(BaseModel):
    """A reusable workout blueprint, e.g. Pull-A"""
    id: str  # kebab-case filename
    name: str
    type: str
    exercises: List[TemplateExercise] = Field(default_factory=list)


class LastPerformance(BaseModel):
    date: str
    sets: List[WorkoutSet]


class ExerciseSuggestion(BaseModel):
    exercise_id: str
    target_sets: int
    target_reps: str
    suggested_weight: float
    last_performance: Optional[LastPerformance] = None
    progression: Optional[str] = None


class WorkoutSuggestion(BaseModel):
    date: str
    type: str
    program_name: str
    exercises: List[ExerciseSuggestion] = Field(default_factory=list)


class ProgressionPoint(BaseModel):
    date: str
    max_weight: float
    max_reps: int
    total_volume: float
