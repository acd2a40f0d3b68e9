"""
User-facing actions.

Every action returns an ActionResult that the host shows as a notice. Storage
errors are logged and turned into a failure notice here; nothing below this
layer catches them.
"""
import logging
from datetime import date
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from .exercise_catalog import ExerciseCatalog
from .model import Exercise, LastPerformance, Workout, WorkoutSet, WorkoutTemplate
from .program_engine import ProgramEngine
from .seed import load_seed_exercises
from .settings import Settings
from .template_catalog import TemplateCatalog
from .vault import Vault, ensure_folder, join_path, stem
from .workout_log import WorkoutLog

logger = logging.getLogger(__name__)


class ActionResult(BaseModel):
    ok: bool
    message: str
    path: Optional[str] = None


class DraftExercise(BaseModel):
    exercise: Exercise
    sets: List[WorkoutSet] = Field(default_factory=list)
    last_session: Optional[LastPerformance] = None


class TemplateDraft(BaseModel):
    """A logging form pre-populated from a template"""
    template_id: str
    type: str
    exercises: List[DraftExercise] = Field(default_factory=list)
    missing_exercises: List[str] = Field(default_factory=list)


def _failure(message: str) -> ActionResult:
    return ActionResult(ok=False, message=f"{message} Check the log for details.")


class GymTracker:
    """Wires the catalogs, workout log and program engine to one vault"""

    def __init__(self, vault: Vault, settings: Settings,
                 today: Callable[[], date] = date.today):
        self.vault = vault
        self.settings = settings
        self.today = today
        self.exercise_catalog = ExerciseCatalog(vault, settings)
        self.template_catalog = TemplateCatalog(vault, settings)
        self.workout_log = WorkoutLog(vault, settings)
        self.program_engine = ProgramEngine(vault, settings)

    def load(self) -> ActionResult:
        try:
            exercises = self.exercise_catalog.load_all()
            templates = self.template_catalog.load_all()
        except Exception:
            logger.exception("Failed to load catalogs")
            return _failure("Failed to load exercise and template catalogs.")

        if not exercises and not self.settings.seeded:
            logger.info("Exercise library is empty. Seed it to get started.")
        return ActionResult(ok=True, message=f"Loaded {len(exercises)} exercises and {len(templates)} templates.")

    def default_workout_type(self) -> str:
        return self.settings.workout_types[0] if self.settings.workout_types else "push"

    def log_workout(self, workout: Workout) -> ActionResult:
        """Save a workout. A blank type becomes the first configured workout type."""
        if not workout.type.strip():
            workout = workout.model_copy(update={"type": self.default_workout_type()})
        if not workout.exercises:
            return ActionResult(ok=False, message="Add at least one exercise before saving.")
        if not any(not s.is_empty() for e in workout.exercises for s in e.sets):
            return ActionResult(ok=False, message="Add weight/reps to at least one set.")

        try:
            path = self.workout_log.save(workout)
        except Exception:
            logger.exception("Failed to save workout")
            return _failure("Failed to save workout.")
        return ActionResult(ok=True, message=f"Workout saved: {stem(path)}", path=path)

    def add_exercise(self, exercise: Exercise) -> ActionResult:
        if not exercise.name.strip():
            return ActionResult(ok=False, message="Exercise name is required.")
        if not exercise.id.strip():
            return ActionResult(ok=False, message="Exercise ID is required.")
        if not exercise.muscles.primary:
            return ActionResult(ok=False, message="Select at least one primary muscle.")
        if self.exercise_catalog.get_by_id(exercise.id):
            return ActionResult(ok=False, message=f'Exercise with ID "{exercise.id}" already exists.')

        try:
            path = self.exercise_catalog.create(exercise)
        except Exception:
            logger.exception("Failed to create exercise")
            return _failure("Failed to create exercise.")
        return ActionResult(ok=True, message=f'Exercise "{exercise.name}" created.', path=path)

    def create_template(self, template: WorkoutTemplate) -> ActionResult:
        if not template.name.strip():
            return ActionResult(ok=False, message="Template name is required.")
        if not template.id.strip():
            return ActionResult(ok=False, message="Template ID is required.")
        if not template.exercises:
            return ActionResult(ok=False, message="Add at least one exercise.")
        if self.template_catalog.get_by_id(template.id):
            return ActionResult(ok=False, message=f'Template with ID "{template.id}" already exists.')
        if not template.type.strip():
            template = template.model_copy(update={"type": self.default_workout_type()})

        try:
            path = self.template_catalog.create(template)
        except Exception:
            logger.exception("Failed to create template")
            return _failure("Failed to create template.")
        return ActionResult(ok=True, message=f'Template "{template.name}" created.', path=path)

    def apply_template(self, template_id: str) -> Optional[TemplateDraft]:
        """
        Build a logging draft from a template.

        Exercises missing from the catalog are reported and left out. Each
        remaining exercise gets one empty set per prescribed set, and last
        sessions are fetched in parallel.
        """
        template = self.template_catalog.get_by_id(template_id)
        if template is None:
            return None

        draft = TemplateDraft(template_id=template.id, type=template.type)
        for template_exercise in template.exercises:
            exercise = self.exercise_catalog.get_by_id(template_exercise.exercise_id)
            if exercise is None:
                logger.warning("Exercise not found: %s", template_exercise.exercise_id)
                draft.missing_exercises.append(template_exercise.exercise_id)
                continue
            draft.exercises.append(DraftExercise(
                exercise=exercise,
                sets=[WorkoutSet() for _ in range(template_exercise.sets)],
            ))

        last_sessions = self.workout_log.get_last_sessions(e.exercise.id for e in draft.exercises)
        for entry in draft.exercises:
            entry.last_session = last_sessions.get(entry.exercise.id)

        return draft

    def seed_exercise_library(self) -> ActionResult:
        """Create every bundled exercise that is not already in the library."""
        created = 0
        skipped = 0

        try:
            ensure_folder(self.vault, self.settings.workouts_folder)
            ensure_folder(self.vault, self.settings.exercises_folder)

            for exercise in load_seed_exercises():
                if self.exercise_catalog.get_by_id(exercise.id):
                    skipped += 1
                    continue
                if self.vault.document_exists(self.exercise_catalog.document_path(exercise.id)):
                    skipped += 1
                    continue

                self.exercise_catalog.create(exercise)
                created += 1

            self.settings.seeded = True
            self.exercise_catalog.load_all()
        except Exception:
            logger.exception("Failed to seed exercise library")
            return _failure("Failed to seed exercise library.")

        return ActionResult(ok=True, message=f"Exercise library seeded! Created: {created}, Skipped: {skipped}")

    def generate_next_workout(self) -> ActionResult:
        """
        Write the next workout of the active program for today.

        If today's document for that type already exists it is returned
        untouched instead of being regenerated.
        """
        try:
            program = self.program_engine.load_active_program()
            if program is None:
                return ActionResult(
                    ok=False,
                    message=f"No program found. Create a program.md or *.program.md in {self.settings.workouts_folder}.",
                )

            history = self.workout_log.load_all_workouts()
            today = self.today().isoformat()
            suggestion = self.program_engine.generate_workout_suggestion(program, history, today)
            if suggestion is None:
                next_type = self.program_engine.get_next_workout_type(program, history)
                return ActionResult(
                    ok=False,
                    message=f'No workout defined for type "{next_type}" in program "{program.name}".',
                )

            path = join_path(self.settings.workouts_folder, f"{today}-{suggestion.type}.md")
            if self.vault.document_exists(path):
                return ActionResult(ok=True, message=f"Opened existing workout: {stem(path)}", path=path)

            ensure_folder(self.vault, self.settings.workouts_folder)
            self.vault.write_document(path, self.program_engine.generate_suggested_workout_content(suggestion))
        except Exception:
            logger.exception("Failed to generate next workout")
            return _failure("Failed to generate next workout.")

        return ActionResult(
            ok=True,
            message=f"Generated {suggestion.type} workout from {program.name}",
            path=path,
        )
