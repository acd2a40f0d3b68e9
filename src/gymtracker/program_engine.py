"""
Training programs and next-workout suggestions.

A program document names a rotation ("split") and prescribes exercises per
workout type:

    ---
    name: My PPL Program
    split: [push, pull, legs]
    started: 2026-01-20
    ---

    ## Push

    | Exercise | Sets | Reps | Progression |
    |----------|------|------|-------------|
    | [[barbell-bench-press]] | 4 | 6-8 | +5lbs at 4x8 |

The position in the rotation is never stored; it is derived from the most
recent logged workout whose type is part of the split.
"""
import logging
import re
from typing import List, Optional

from pydantic import ValidationError

from .document import parse_document, render_header, split_sections
from .model import (
    ExerciseSuggestion,
    LastPerformance,
    Program,
    ProgramExercise,
    ProgramWorkout,
    Workout,
    WorkoutSet,
    WorkoutSuggestion,
)
from .settings import Settings
from .tables import format_number, parse_exercise_rows, render_table
from .vault import FolderContents, Vault
from .workout_log import find_exercise, is_program_document, set_table_headers

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM_NAME = "Unnamed Program"
FALLBACK_WORKOUT_TYPE = "workout"

REP_RANGE_PATTERN = re.compile(r"(\d+)\s*-\s*(\d+)")
REP_COUNT_PATTERN = re.compile(r"(\d+)")
PROGRESSION_THRESHOLD_PATTERN = re.compile(r"at\s+(\d+)\s*[x×]\s*(\d+)", re.IGNORECASE)
PROGRESSION_INCREMENT_PATTERN = re.compile(r"\+\s*(\d+(?:\.\d+)?|\.\d+)")


def sort_history(history: List[Workout]) -> List[Workout]:
    """Most recent first. Stable, so same-day sessions keep the caller's order."""
    return sorted(history, key=lambda w: w.date, reverse=True)


def section_type(heading: str) -> str:
    return re.sub(r"\s+", "-", heading.strip().lower())


def section_title(workout_type: str) -> str:
    return " ".join(word.capitalize() for word in workout_type.split("-"))


class ProgramEngine:

    def __init__(self, vault: Vault, settings: Settings):
        self.vault = vault
        self.settings = settings

    def parse_content(self, content: str) -> Optional[Program]:
        parsed = parse_document(content)
        if parsed is None:
            return None

        header, body = parsed
        split = header.get("split")
        if not isinstance(split, list):
            split = [split] if split else []

        try:
            return Program(
                name=str(header.get("name") or DEFAULT_PROGRAM_NAME),
                split=[str(s) for s in split],
                started=str(header["started"]) if header.get("started") else None,
                workouts=self._parse_workout_sections(body),
            )
        except ValidationError as e:
            logger.warning("Invalid program document: %s", e)
            return None

    def _parse_workout_sections(self, body: str) -> List[ProgramWorkout]:
        workouts = []
        for heading, text in split_sections(body, level=2):
            # Unlike templates, program cells default to 0 sets / "0" reps
            rows = parse_exercise_rows(text, sets_default=0, reps_default="0", with_progression=True)
            if rows:
                workouts.append(ProgramWorkout(
                    type=section_type(heading),
                    exercises=[ProgramExercise(**row) for row in rows],
                ))
        return workouts

    def generate_content(self, program: Program) -> str:
        content = render_header({
            "name": program.name,
            "split": program.split,
            "started": program.started,
        })

        for workout in program.workouts:
            content += f"\n## {section_title(workout.type)}\n\n"
            content += render_table(
                ["Exercise", "Sets", "Reps", "Progression"],
                [
                    [f"[[{e.exercise_id}]]", str(e.sets), e.reps, e.progression or ""]
                    for e in workout.exercises
                ],
            )
        return content

    def find_active_program(self) -> Optional[str]:
        """Path of the most recently modified *.program.md or program.md, if any."""
        listing = self.vault.list_documents(self.settings.workouts_folder)
        if not isinstance(listing, FolderContents):
            return None

        candidates = [path for path in listing.documents if is_program_document(path)]
        if not candidates:
            return None
        return self.vault.most_recently_modified(candidates)

    def load_active_program(self) -> Optional[Program]:
        path = self.find_active_program()
        if path is None:
            return None
        program = self.parse_content(self.vault.read_document(path))
        if program is None:
            logger.warning("Active program %s could not be parsed", path)
        return program

    def get_next_workout_type(self, program: Program, history: List[Workout]) -> str:
        if not program.split:
            return program.workouts[0].type if program.workouts else FALLBACK_WORKOUT_TYPE

        if not history:
            return program.split[0]

        last = next((w for w in sort_history(history) if w.type in program.split), None)
        if last is None:
            return program.split[0]

        index = program.split.index(last.type)
        return program.split[(index + 1) % len(program.split)]

    def get_last_performance(self, exercise_id: str,
                             history: List[Workout]) -> Optional[LastPerformance]:
        for workout in sort_history(history):
            exercise = find_exercise(workout, exercise_id)
            if exercise is not None and exercise.sets:
                return LastPerformance(date=workout.date, sets=exercise.sets)
        return None

    def calculate_suggested_weight(self, last_performance: Optional[LastPerformance],
                                   target_sets: int, target_reps: str,
                                   progression: Optional[str] = None) -> float:
        """
        Weight to prescribe for the next session.

        The first set of the last session is the baseline. The progression
        increment is added only when the rule's sets x reps threshold was met.
        Without history there is no baseline and 0 is returned.
        """
        if last_performance is None or not last_performance.sets:
            return 0

        last_weight = last_performance.sets[0].weight
        max_target_reps = self._parse_max_reps(target_reps)

        if progression and self._should_progress(last_performance.sets, target_sets,
                                                 max_target_reps, progression):
            return last_weight + self._parse_progression_increment(progression)

        return last_weight

    def _parse_max_reps(self, reps: str) -> int:
        """Upper bound of a rep target: "6-8" -> 8, "10" -> 10, "AMRAP" -> 0"""
        range_match = REP_RANGE_PATTERN.search(reps)
        if range_match:
            return int(range_match.group(2))

        single_match = REP_COUNT_PATTERN.search(reps)
        if single_match:
            return int(single_match.group(1))

        return 0

    def _should_progress(self, last_sets: List[WorkoutSet], target_sets: int,
                         max_target_reps: int, progression: str) -> bool:
        match = PROGRESSION_THRESHOLD_PATTERN.search(progression)
        if not match:
            # no threshold, never auto-progress
            return False

        required_sets = int(match.group(1)) or target_sets
        required_reps = int(match.group(2)) or max_target_reps

        qualifying = [s for s in last_sets if s.reps >= required_reps]
        return len(qualifying) >= required_sets

    def _parse_progression_increment(self, progression: str) -> float:
        """Weight increment of a rule: "+5lbs at 4x8" -> 5, "+2.5kg at 3x10" -> 2.5"""
        match = PROGRESSION_INCREMENT_PATTERN.search(progression)
        return float(match.group(1)) if match else 0

    def generate_workout_suggestion(self, program: Program, history: List[Workout],
                                    date: str) -> Optional[WorkoutSuggestion]:
        """None means the program has no workout for the next type in rotation."""
        history = sort_history(history)
        next_type = self.get_next_workout_type(program, history)

        program_workout = next((w for w in program.workouts if w.type == next_type), None)
        if program_workout is None:
            return None

        exercises = []
        for program_exercise in program_workout.exercises:
            last_performance = self.get_last_performance(program_exercise.exercise_id, history)
            exercises.append(ExerciseSuggestion(
                exercise_id=program_exercise.exercise_id,
                target_sets=program_exercise.sets,
                target_reps=program_exercise.reps,
                suggested_weight=self.calculate_suggested_weight(
                    last_performance,
                    program_exercise.sets,
                    program_exercise.reps,
                    program_exercise.progression,
                ),
                last_performance=last_performance,
                progression=program_exercise.progression,
            ))

        return WorkoutSuggestion(
            date=date,
            type=next_type,
            program_name=program.name,
            exercises=exercises,
        )

    def generate_suggested_workout_content(self, suggestion: WorkoutSuggestion) -> str:
        content = render_header({"date": suggestion.date, "type": suggestion.type})
        content += f"\n> Generated from program: **{suggestion.program_name}**\n\n"
        content += "## Exercises\n\n"

        for exercise in suggestion.exercises:
            content += f"### [[{exercise.exercise_id}]]\n"
            content += self._generate_suggested_set_table(exercise)
            content += "\n"
        return content

    def _generate_suggested_set_table(self, exercise: ExerciseSuggestion) -> str:
        hint = f"Target: {exercise.target_sets}x{exercise.target_reps}"
        if exercise.progression:
            hint += f", Progression: {exercise.progression}"

        weight = format_number(exercise.suggested_weight) if exercise.suggested_weight > 0 else ""
        max_reps = self._parse_max_reps(exercise.target_reps)
        reps = str(max_reps) if max_reps else ""

        rows = []
        for index in range(1, exercise.target_sets + 1):
            row = [str(index), weight, reps]
            if self.settings.track_effort:
                row.append("")
            rows.append(row)

        table = f"<!-- {hint} -->\n" + render_table(set_table_headers(self.settings), rows)

        if exercise.last_performance:
            last_sets = ", ".join(
                f"{format_number(s.weight)}x{s.reps}" for s in exercise.last_performance.sets
            )
            table += f"<!-- Last ({exercise.last_performance.date}): {last_sets} -->\n"

        return table
